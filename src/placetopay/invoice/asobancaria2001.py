"""
Asobancaria 2001 fixed-width encoder for billing and collection files.

Billing files (payment orders imported into PlacetoPay) use 220-character
records; collection files (payments reported back) use 162-character
records. Each record starts with a two-digit type: 01 file header,
05 batch header, 06 detail, 08 batch control, 09 file control.

Numeric fields are zero-padded on the left, alphanumeric fields are
space-padded on the right, and a value wider than its field is an error.
Control records are always computed from the details being encoded.
Fields PlacetoPay does not use are filled with zeros or spaces.
"""

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from placetopay.models.exceptions import ValidationError

BILLING_LINE_LENGTH = 220
COLLECTION_LINE_LENGTH = 162

DEFAULT_COLLECTION_SEQUENCE = 2

Number = Union[Decimal, int, float, str]

DATE_PATTERN = re.compile(r"\d{8}")
TIME_PATTERN = re.compile(r"\d{4}")


@dataclass
class BillingHeader:
    nit_empresa_recaudadora: str
    fecha_archivo: str  # AAAAMMDD
    hora_archivo: str  # HHMM
    modificador: str = "A"
    nit_adicional: str = ""
    codigo_entidad_originadora: str = ""


@dataclass
class BillingBatchHeader:
    codigo_servicio: str  # EAN13 or NIT
    numero_lote: int
    descripcion_servicio: str


@dataclass
class BillingDetail:
    """
    One payment order.

    ``incremento_diario`` below 1 is a daily percentage, 1 or more a fixed
    value; ``incremento_tipo`` is 0 for a daily value and 1 for a fixed one.
    """

    referencia_principal: str
    valor_principal: Number
    fecha_vencimiento: str
    fecha_corte: str
    incremento_diario: Number = 0
    incremento_tipo: int = 0
    referencia_secundaria: str = ""
    periodos: str | int | None = None
    ciclo: str = ""
    valor_servicio_adicional: Number = 0
    identificacion_pagador: str = ""
    nombre_pagador: str = ""


@dataclass
class BillingBatch:
    header: BillingBatchHeader
    details: list[BillingDetail] = field(default_factory=list)


@dataclass
class BillingFile:
    header: BillingHeader
    batches: list[BillingBatch] = field(default_factory=list)


@dataclass
class CollectionHeader:
    nit_empresa_facturadora: str
    fecha_recaudo: str
    codigo_entidad_recaudadora: str
    numero_cuenta: str
    fecha_archivo: str
    hora_archivo: str
    modificador: str = "A"
    tipo_cuenta: str = ""


@dataclass
class CollectionBatchHeader:
    codigo_servicio: str
    numero_lote: int


@dataclass
class CollectionDetail:
    referencia_principal: str
    valor_recaudado: Number
    procedencia_pago: str
    medio_pago: str
    numero_operacion: str = ""
    numero_autorizacion: str = ""
    secuencia: int = DEFAULT_COLLECTION_SEQUENCE
    causal_devolucion: str = ""


@dataclass
class CollectionBatch:
    header: CollectionBatchHeader
    details: list[CollectionDetail] = field(default_factory=list)


@dataclass
class CollectionFile:
    header: CollectionHeader
    batches: list[CollectionBatch] = field(default_factory=list)


def pad_numeric(value: str | int, length: int, field_name: str = "numeric") -> str:
    text = str(value)
    if text and not (text.isascii() and text.isdigit()):
        raise ValidationError(f"{field_name} must contain only digits: {text!r}")
    if len(text) > length:
        raise ValidationError(f"{field_name} exceeds {length} digits: {text}")
    return text.rjust(length, "0")


def pad_alpha(value: str, length: int, field_name: str = "alpha") -> str:
    # printable ASCII only (0x20-0x7E)
    if not (value.isascii() and value.isprintable()):
        raise ValidationError(f"{field_name} must be printable ASCII: {value!r}")
    if len(value) > length:
        raise ValidationError(f"{field_name} exceeds {length} characters: {value!r}")
    return value.ljust(length, " ")


def _to_decimal(value: Number, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValidationError(f"{field_name} is not a valid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount: {value!r}")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative: {value}")
    return amount


def scale_amount(value: Number, decimals: int, field_name: str = "amount") -> int:
    """``value`` times 10^decimals, rounded half up to an integer."""
    scaled = (_to_decimal(value, field_name) * (Decimal(10) ** decimals)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP
    )
    return int(scaled)


def format_amount(value: Number, length: int, decimals: int, field_name: str = "amount") -> str:
    """Scale ``value`` by 10^decimals (half up) and zero-pad it."""
    return pad_numeric(str(scale_amount(value, decimals, field_name)), length, field_name)


def date8(value: str, field_name: str = "date") -> str:
    if not DATE_PATTERN.fullmatch(value or ""):
        raise ValidationError(f"{field_name} must use format AAAAMMDD: {value!r}")
    return value


def time4(value: str, field_name: str = "time") -> str:
    if not TIME_PATTERN.fullmatch(value or ""):
        raise ValidationError(f"{field_name} must use format HHMM: {value!r}")
    return value


def _line(parts: list[str], expected: int, record: str) -> str:
    line = "".join(parts)
    if len(line) != expected:
        raise ValidationError(f"{record} length invalid: {len(line)} (expected {expected})")
    return line


def _total(values, length: int, field_name: str) -> str:
    """Sum of amounts as they appear on the detail records (cents, each rounded)."""
    cents = sum(scale_amount(value, 2, field_name) for value in values)
    return pad_numeric(str(cents), length, field_name)


# Billing


def _billing_header(header: BillingHeader) -> str:
    return _line(
        [
            "01",
            pad_numeric(header.nit_empresa_recaudadora, 10, "nit_empresa_recaudadora"),
            pad_numeric(header.nit_adicional, 10, "nit_adicional"),
            pad_numeric(header.codigo_entidad_originadora, 3, "codigo_entidad_originadora"),
            date8(header.fecha_archivo, "fecha_archivo"),
            time4(header.hora_archivo, "hora_archivo"),
            pad_alpha(header.modificador or "A", 1, "modificador"),
            pad_alpha("", 182),
        ],
        BILLING_LINE_LENGTH,
        "Billing header",
    )


def _billing_batch_header(header: BillingBatchHeader) -> str:
    return _line(
        [
            "05",
            pad_numeric(header.codigo_servicio, 13, "codigo_servicio"),
            pad_numeric(header.numero_lote, 4, "numero_lote"),
            pad_alpha(header.descripcion_servicio, 15, "descripcion_servicio"),
            pad_alpha("", 186),
        ],
        BILLING_LINE_LENGTH,
        "Billing batch header",
    )


def _billing_detail(detail: BillingDetail) -> str:
    periodos = "" if detail.periodos in (None, "", 0) else str(detail.periodos)
    return _line(
        [
            "06",
            pad_numeric(detail.referencia_principal, 48, "referencia_principal"),
            pad_alpha(detail.referencia_secundaria, 30, "referencia_secundaria"),
            pad_numeric(periodos, 2, "periodos"),
            pad_alpha(detail.ciclo, 3, "ciclo"),
            format_amount(detail.valor_principal, 14, 2, "valor_principal"),
            pad_numeric("", 13),
            format_amount(detail.valor_servicio_adicional, 14, 2, "valor_servicio_adicional"),
            date8(detail.fecha_vencimiento, "fecha_vencimiento"),
            pad_numeric("", 8),
            pad_alpha("", 17),
            pad_numeric("", 2),
            pad_alpha(detail.identificacion_pagador, 10, "identificacion_pagador"),
            pad_alpha(detail.nombre_pagador, 22, "nombre_pagador"),
            pad_numeric("", 3),
            format_amount(detail.incremento_diario, 10, 4, "incremento_diario"),
            date8(detail.fecha_corte, "fecha_corte"),
            pad_numeric(detail.incremento_tipo, 1, "incremento_tipo"),
            pad_alpha("", 5),
        ],
        BILLING_LINE_LENGTH,
        "Billing detail",
    )


def _billing_batch_control(batch: BillingBatch, index: int) -> str:
    return _line(
        [
            "08",
            pad_numeric(len(batch.details) + 2, 9, "total_registros"),
            _total((d.valor_principal for d in batch.details), 18, "total_valor_principal"),
            _total(
                (d.valor_servicio_adicional for d in batch.details),
                18,
                "total_valor_adicional",
            ),
            pad_numeric(index + 1, 4, "numero_lote"),
            pad_alpha("", 169),
        ],
        BILLING_LINE_LENGTH,
        "Billing batch control",
    )


def _billing_file_control(file: BillingFile) -> str:
    details = [detail for batch in file.batches for detail in batch.details]
    return _line(
        [
            "09",
            pad_numeric(len(details), 9, "total_registros"),
            _total((d.valor_principal for d in details), 18, "total_valor_principal"),
            _total((d.valor_servicio_adicional for d in details), 18, "total_valor_adicional"),
            pad_alpha("", 173),
        ],
        BILLING_LINE_LENGTH,
        "Billing file control",
    )


def build_billing_file(file: BillingFile) -> str:
    """Encode a billing file as newline-joined 220-character records."""
    lines = [_billing_header(file.header)]
    for index, batch in enumerate(file.batches):
        lines.append(_billing_batch_header(batch.header))
        lines.extend(_billing_detail(detail) for detail in batch.details)
        lines.append(_billing_batch_control(batch, index))
    lines.append(_billing_file_control(file))
    return "\n".join(lines)


# Collection


def _collection_header(header: CollectionHeader) -> str:
    return _line(
        [
            "01",
            pad_numeric(header.nit_empresa_facturadora, 10, "nit_empresa_facturadora"),
            date8(header.fecha_recaudo, "fecha_recaudo"),
            pad_numeric(header.codigo_entidad_recaudadora, 3, "codigo_entidad_recaudadora"),
            pad_alpha(header.numero_cuenta, 17, "numero_cuenta"),
            date8(header.fecha_archivo, "fecha_archivo"),
            time4(header.hora_archivo, "hora_archivo"),
            pad_alpha(header.modificador or "A", 1, "modificador"),
            pad_numeric(header.tipo_cuenta, 2, "tipo_cuenta"),
            pad_alpha("", 107),
        ],
        COLLECTION_LINE_LENGTH,
        "Collection header",
    )


def _collection_batch_header(header: CollectionBatchHeader) -> str:
    return _line(
        [
            "05",
            pad_numeric(header.codigo_servicio, 13, "codigo_servicio"),
            pad_numeric(header.numero_lote, 4, "numero_lote"),
            pad_alpha("", 143),
        ],
        COLLECTION_LINE_LENGTH,
        "Collection batch header",
    )


def _collection_detail(detail: CollectionDetail) -> str:
    return _line(
        [
            "06",
            pad_numeric(detail.referencia_principal, 48, "referencia_principal"),
            format_amount(detail.valor_recaudado, 14, 2, "valor_recaudado"),
            pad_numeric(detail.procedencia_pago, 2, "procedencia_pago"),
            pad_numeric(detail.medio_pago, 2, "medio_pago"),
            pad_numeric(detail.numero_operacion, 6, "numero_operacion"),
            pad_numeric(detail.numero_autorizacion, 6, "numero_autorizacion"),
            pad_numeric("", 3),
            # sucursal, always 0000 from PlacetoPay
            pad_numeric("0", 4),
            pad_numeric(detail.secuencia, 7, "secuencia"),
            pad_alpha(detail.causal_devolucion, 3, "causal_devolucion"),
            pad_alpha("", 65),
        ],
        COLLECTION_LINE_LENGTH,
        "Collection detail",
    )


def _collection_batch_control(batch: CollectionBatch, index: int) -> str:
    return _line(
        [
            "08",
            pad_numeric(len(batch.details) + 2, 9, "total_registros"),
            _total((d.valor_recaudado for d in batch.details), 18, "total_valor_recaudado"),
            pad_numeric(index + 1, 4, "numero_lote"),
            pad_alpha("", 129),
        ],
        COLLECTION_LINE_LENGTH,
        "Collection batch control",
    )


def _collection_file_control(file: CollectionFile) -> str:
    details = [detail for batch in file.batches for detail in batch.details]
    return _line(
        [
            "09",
            pad_numeric(len(details), 9, "total_registros"),
            _total((d.valor_recaudado for d in details), 18, "total_valor_recaudado"),
            pad_alpha("", 133),
        ],
        COLLECTION_LINE_LENGTH,
        "Collection file control",
    )


def build_collection_file(file: CollectionFile) -> str:
    """Encode a collection file as newline-joined 162-character records."""
    lines = [_collection_header(file.header)]
    for index, batch in enumerate(file.batches):
        lines.append(_collection_batch_header(batch.header))
        lines.extend(_collection_detail(detail) for detail in batch.details)
        lines.append(_collection_batch_control(batch, index))
    lines.append(_collection_file_control(file))
    return "\n".join(lines)
