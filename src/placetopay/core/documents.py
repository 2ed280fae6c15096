"""Identification document formats accepted by PlacetoPay, per country."""

import re
from typing import Any

from placetopay.models.exceptions import ValidationError

DOCUMENT_PATTERNS: dict[str, dict[str, re.Pattern[str]]] = {
    "CO": {
        "CC": re.compile(r"[1-9][0-9]{3,9}"),
        "CE": re.compile(r"([a-zA-Z]{1,5})?[1-9][0-9]{3,7}"),
        "TI": re.compile(r"[1-9][0-9]{4,11}"),
        "NIT": re.compile(r"[1-9]\d{6,9}"),
        "RUT": re.compile(r"[1-9]\d{6,9}"),
    },
    "EC": {
        "CI": re.compile(r"\d{10}"),
        "RUC": re.compile(r"\d{13}"),
    },
    "PR": {
        "EIN": re.compile(r"[1-9]\d?-\d{7}"),
    },
    "CR": {
        "CRCPF": re.compile(r"[1-9][0-9]{8}"),
        "CPJ": re.compile(r"[1-9][0-9]{9}"),
        "DIMEX": re.compile(r"[1-9][0-9]{10,11}"),
        "DIDI": re.compile(r"[1-9][0-9]{10,11}"),
    },
    "CL": {
        "CLRUT": re.compile(r"(\d{1,2}(?:\.?\d{1,3}){2}-[\dKk])"),
    },
    "PA": {
        "CIP": re.compile(r"(N|E|PE\d+)?\d{2,6}\d{2,6}"),
        "PARUC": re.compile(r"[a-zA-Z0-9\-]{1,16}"),
    },
    "BR": {
        "CPF": re.compile(r"\d{10,11}"),
    },
    "PE": {
        "DNI": re.compile(r"\d{8}"),
        "PERUC": re.compile(r"(10|15|16|17|20)\d{9}"),
    },
    "HN": {
        "HNDNI": re.compile(r"[a-zA-Z0-9]{1,15}"),
        "HNDR": re.compile(r"[a-zA-Z0-9]{1,15}"),
        "RTN": re.compile(r"[0-9]{14,16}"),
    },
    "BZ": {
        "BZSSN": re.compile(r"[0-9]{9}"),
        "BRN": re.compile(r"[0-9]{5,7}"),
    },
    "UY": {
        "UYCI": re.compile(r"\d{6,7}-[0-9]"),
        "UYRUT": re.compile(r"\d{12}"),
    },
}


def normalize_country(country: str | None) -> str | None:
    if not country:
        return None
    return country.strip().upper()


def validate_document(
    country: str | None,
    document_type: str | None,
    document: str | None,
) -> None:
    """
    Check a document against the format documented for its country.

    Missing inputs or countries without a table are not applicable and pass.
    An unknown document type for a known country, or a document that does
    not match its pattern, raises ValidationError.
    """
    country = normalize_country(country)
    if not country or not document_type or not document:
        return

    patterns = DOCUMENT_PATTERNS.get(country)
    if patterns is None:
        return

    pattern = patterns.get(document_type)
    if pattern is None:
        raise ValidationError(
            f"documentType {document_type} is not supported for country {country}"
        )

    if not pattern.fullmatch(document):
        raise ValidationError(
            f"document {document} does not match the {document_type} format ({country})"
        )


def validate_person_document(person: Any, context: str = "person") -> None:
    """Apply validate_document to a Person, taking the country from its address."""
    if person is None:
        return

    address = getattr(person, "address", None)
    country = getattr(address, "country", None) if address is not None else None
    try:
        validate_document(country, person.document_type, person.document)
    except ValidationError as e:
        raise ValidationError(f"{context}.{e.message}") from e
