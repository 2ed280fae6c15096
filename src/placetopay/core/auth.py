"""Per-request authentication block (login, tranKey, nonce, seed).

Every call to PlacetoPay carries a fresh auth block:

- seed: current time as ISO-8601 with milliseconds, UTC
- nonce: 16 random bytes, sent base64-encoded
- tranKey: base64(SHA-256(raw nonce bytes + seed + secretKey))

The digest is computed over the raw nonce bytes, not over their base64 text.
"""

import base64
import hashlib
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

NONCE_SIZE_BYTES = 16

NonceGenerator = Callable[[], bytes]


class TimeProvider(Protocol):
    """Source of "now" for signing and expiration checks."""

    def now(self) -> datetime:
        ...


class SystemTimeProvider:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class OffsetTimeProvider:
    """
    Wall clock shifted by a fixed offset.

    Used to correct local clock skew: the gateway rejects seeds outside a
    +/-5 minute window (auth code 103).
    """

    def __init__(self, offset_ms: float):
        self.offset_ms = offset_ms

    def now(self) -> datetime:
        return datetime.now(timezone.utc) + timedelta(milliseconds=self.offset_ms)


class FixedTimeProvider:
    """Clock frozen at a given instant."""

    def __init__(self, moment: datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


@dataclass(frozen=True)
class Auth:
    """Authentication block sent in the ``auth`` key of every request body."""

    login: str
    tran_key: str
    nonce: str
    seed: str

    def to_dict(self) -> dict[str, str]:
        return {
            "login": self.login,
            "tranKey": self.tran_key,
            "nonce": self.nonce,
            "seed": self.seed,
        }


def format_seed(moment: datetime) -> str:
    """Format an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def _random_nonce() -> bytes:
    return os.urandom(NONCE_SIZE_BYTES)


def build_auth(
    login: str,
    secret_key: str,
    time_provider: TimeProvider | None = None,
    nonce_generator: NonceGenerator | None = None,
) -> Auth:
    """
    Build the auth block for one outbound request.

    Args:
        login: Site login issued by PlacetoPay
        secret_key: Site secret key (never transmitted)
        time_provider: Clock for the seed (default: SystemTimeProvider)
        nonce_generator: Returns the raw nonce bytes (default: 16 random bytes)

    Returns:
        Auth block; deterministic when both clock and nonce are fixed.
    """
    provider = time_provider or SystemTimeProvider()
    seed = format_seed(provider.now())
    nonce_bytes = (nonce_generator or _random_nonce)()

    digest = hashlib.sha256(
        nonce_bytes + seed.encode("utf-8") + secret_key.encode("utf-8")
    ).digest()

    return Auth(
        login=login,
        tran_key=base64.b64encode(digest).decode("ascii"),
        nonce=base64.b64encode(nonce_bytes).decode("ascii"),
        seed=seed,
    )
