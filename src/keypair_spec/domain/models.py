"""
Domain models: immutable values describing a key pair generation request.

A CertificateRequest tells a credential store how to generate a key pair
and the self-signed X.509 certificate that accompanies it: the alias it is
stored under, the subject (also used as issuer), the serial number, the
validity window and the behavioral flags.

Validation runs once, in __post_init__. An instance that exists is valid
for its whole lifetime, since every model here is a frozen dataclass.

Check order (first violation wins):
  context → alias → subject → serial_number → start_date → end_date
    → start/end ordering → flags
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import IntFlag
from typing import Any

from cryptography import x509

from keypair_spec.domain.errors import Argument, InvalidArgumentError

_FLAGS_WIDTH = 32


class RequestFlag(IntFlag):
    """Behavioral options attached to a request. Undefined bits are reserved."""

    ENCRYPTED = 1
    """The generated key must be encrypted at rest by the store."""


_DEFINED_FLAGS = int(RequestFlag.ENCRYPTED)


# ─────────────────────── Field Checks ───────────────────────
# Shared by the models and RequestBuilder so both reject the same values
# with the same Argument and message.


def check_context(context: Any) -> Any:
    if context is None:
        raise InvalidArgumentError(Argument.CONTEXT, "context must not be None")
    return context


def check_alias(alias: Any) -> str:
    if alias is None:
        raise InvalidArgumentError(Argument.ALIAS, "alias must not be None")
    if not isinstance(alias, str):
        raise InvalidArgumentError(
            Argument.ALIAS, f"alias must be a str, got {type(alias).__name__}"
        )
    if not alias:
        raise InvalidArgumentError(Argument.ALIAS, "alias must not be empty")
    return alias


def check_subject(subject: Any) -> x509.Name:
    if subject is None:
        raise InvalidArgumentError(Argument.SUBJECT, "subject must not be None")
    if not isinstance(subject, x509.Name):
        raise InvalidArgumentError(
            Argument.SUBJECT,
            f"subject must be an x509.Name, got {type(subject).__name__}",
        )
    return subject


def check_serial_number(serial_number: Any) -> int:
    if serial_number is None:
        raise InvalidArgumentError(Argument.SERIAL_NUMBER, "serial_number must not be None")
    # bool is an int subclass; True is not a serial number.
    if isinstance(serial_number, bool) or not isinstance(serial_number, int):
        raise InvalidArgumentError(
            Argument.SERIAL_NUMBER,
            f"serial_number must be an int, got {type(serial_number).__name__}",
        )
    if serial_number < 0:
        raise InvalidArgumentError(
            Argument.SERIAL_NUMBER, f"serial_number must not be negative, got {serial_number}"
        )
    return serial_number


def check_timestamp(argument: Argument, value: Any) -> datetime:
    if value is None:
        raise InvalidArgumentError(argument, f"{argument.value} must not be None")
    if not isinstance(value, datetime):
        raise InvalidArgumentError(
            argument, f"{argument.value} must be a datetime, got {type(value).__name__}"
        )
    return value


def check_ordering(start: datetime, end: datetime) -> None:
    if _as_utc(end) < _as_utc(start):
        raise InvalidArgumentError(
            Argument.VALIDITY_WINDOW,
            f"end_date {end.isoformat()} is before start_date {start.isoformat()}",
        )


def normalize_flags(flags: Any) -> RequestFlag:
    """Validate the bit-set width and drop reserved bits."""
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise InvalidArgumentError(
            Argument.FLAGS, f"flags must be an int, got {type(flags).__name__}"
        )
    if not 0 <= flags < 1 << _FLAGS_WIDTH:
        raise InvalidArgumentError(
            Argument.FLAGS, f"flags must fit in {_FLAGS_WIDTH} unsigned bits, got {int(flags)}"
        )
    return RequestFlag(int(flags) & _DEFINED_FLAGS)


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps are read as UTC so they compare with aware ones."""
    if value.utcoffset() is None:
        return value.replace(tzinfo=UTC)
    return value


# ─────────────────────── Value Objects ───────────────────────


@dataclass(frozen=True, slots=True)
class ValidityWindow:
    """
    Inclusive [start, end] interval during which a certificate is valid.

    end may equal start; it may not precede it.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        check_timestamp(Argument.START_DATE, self.start)
        check_timestamp(Argument.END_DATE, self.end)
        check_ordering(self.start, self.end)

    @classmethod
    def starting_at(cls, start: datetime, days: int) -> ValidityWindow:
        """
        Window of `days` whole days beginning at `start`.

        Negative `days` fail the ordering check like any end before start.
        """
        check_timestamp(Argument.START_DATE, start)
        if isinstance(days, bool) or not isinstance(days, int):
            raise InvalidArgumentError(
                Argument.VALIDITY, f"days must be an int, got {type(days).__name__}"
            )
        return cls(start=start, end=start + timedelta(days=days))

    @property
    def duration(self) -> timedelta:
        return _as_utc(self.end) - _as_utc(self.start)

    def contains(self, instant: datetime) -> bool:
        return _as_utc(self.start) <= _as_utc(instant) <= _as_utc(self.end)


@dataclass(frozen=True, slots=True)
class CertificateRequest:
    """
    Parameters for generating a key pair and its self-signed certificate.

    `subject` is used as both the subject and the issuer distinguished name.
    `context` is the caller's environment handle; it is never inspected here
    and only exists so the credential store can prompt for an unlock.

    Construct through RequestBuilder, or directly with keyword arguments.
    Direct construction runs the same checks as RequestBuilder.build().
    """

    context: Any
    alias: str
    subject: x509.Name
    serial_number: int
    start_date: datetime
    end_date: datetime
    flags: RequestFlag = RequestFlag(0)

    def __post_init__(self) -> None:
        check_context(self.context)
        check_alias(self.alias)
        check_subject(self.subject)
        check_serial_number(self.serial_number)
        check_timestamp(Argument.START_DATE, self.start_date)
        check_timestamp(Argument.END_DATE, self.end_date)
        check_ordering(self.start_date, self.end_date)
        object.__setattr__(self, "flags", normalize_flags(self.flags))

    @property
    def issuer(self) -> x509.Name:
        return self.subject

    @property
    def validity(self) -> ValidityWindow:
        return ValidityWindow(start=self.start_date, end=self.end_date)

    @property
    def is_encryption_required(self) -> bool:
        """True when the store must keep the generated key encrypted at rest."""
        return bool(self.flags & RequestFlag.ENCRYPTED)


@dataclass(frozen=True, slots=True)
class GeneratedCredential:
    """
    What a credential store hands back after generating a key pair.

    `certificate_chain` holds DER-encoded certificates, leaf first. For a
    freshly generated key this is the single self-signed certificate.
    """

    alias: str
    certificate_chain: tuple[bytes, ...] = field(default=(), repr=False)

    @property
    def leaf(self) -> bytes | None:
        return self.certificate_chain[0] if self.certificate_chain else None
