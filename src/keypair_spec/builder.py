"""
RequestBuilder: staged, fluent accumulator for CertificateRequest.

Two validation phases:
  1. Each setter rejects its own bad input immediately (fail fast).
  2. build() runs the cross-field checks (required fields present,
     end_date not before start_date) by constructing the frozen request.

The builder is a plain mutable object with no locking. Confine an instance
to one thread or guard it with a caller-held lock.

build() leaves the accumulated state in place, so a builder can mint
several requests in sequence that share the fields not overwritten:

    builder = RequestBuilder(context).set_subject("CN=myKey").set_serial_number(1)
    first = builder.set_alias("a").set_validity(window).build()
    second = builder.set_alias("b").build()  # same subject, serial and window
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from cryptography import x509

from keypair_spec.domain.errors import Argument, InvalidArgumentError
from keypair_spec.domain.models import (
    CertificateRequest,
    RequestFlag,
    ValidityWindow,
    check_alias,
    check_context,
    check_serial_number,
    check_subject,
    check_timestamp,
)

if TYPE_CHECKING:
    from keypair_spec.config import RequestDefaults


class RequestBuilder:
    """
    Collects the fields of a CertificateRequest one at a time.

    The environment handle is bound at construction and cannot be changed.
    Every setter returns the builder so calls can be chained.
    """

    def __init__(self, context: Any) -> None:
        self._context = check_context(context)
        self._alias: str | None = None
        self._subject: x509.Name | None = None
        self._serial_number: int | None = None
        self._start_date: datetime | None = None
        self._end_date: datetime | None = None
        self._flags = RequestFlag(0)

    @classmethod
    def from_defaults(
        cls,
        context: Any,
        defaults: RequestDefaults,
        now: datetime | None = None,
    ) -> RequestBuilder:
        """
        Create a builder pre-populated from configured defaults.

        Sets the validity window to `defaults.validity_days` days from `now`
        (current UTC time when omitted), a random serial number when
        `defaults.random_serial` is set, and the encryption flag when
        `defaults.encryption_required` is set. Alias and subject are left
        for the caller.
        """
        builder = cls(context)
        start = now if now is not None else datetime.now(UTC)
        builder.set_validity(ValidityWindow.starting_at(start, defaults.validity_days))
        if defaults.random_serial:
            builder.set_serial_number(x509.random_serial_number())
        if defaults.encryption_required:
            builder.set_encryption_required()
        return builder

    @property
    def context(self) -> Any:
        return self._context

    def set_alias(self, alias: str) -> RequestBuilder:
        """Alias the generated key is stored and later retrieved under."""
        self._alias = check_alias(alias)
        return self

    def set_subject(self, subject: x509.Name | str) -> RequestBuilder:
        """
        Subject (and issuer) of the self-signed certificate.

        Accepts an x509.Name or an RFC 4514 string such as "CN=myKey,O=Example".
        """
        if isinstance(subject, str):
            try:
                subject = x509.Name.from_rfc4514_string(subject)
            except ValueError as e:
                raise InvalidArgumentError(
                    Argument.SUBJECT, f"subject is not a valid distinguished name: {e}"
                ) from e
        self._subject = check_subject(subject)
        return self

    def set_serial_number(self, serial_number: int) -> RequestBuilder:
        self._serial_number = check_serial_number(serial_number)
        return self

    def set_start_date(self, start_date: datetime) -> RequestBuilder:
        self._start_date = check_timestamp(Argument.START_DATE, start_date)
        return self

    def set_end_date(self, end_date: datetime) -> RequestBuilder:
        self._end_date = check_timestamp(Argument.END_DATE, end_date)
        return self

    def set_validity(self, window: ValidityWindow) -> RequestBuilder:
        """Set start_date and end_date together from an already valid window."""
        if not isinstance(window, ValidityWindow):
            raise InvalidArgumentError(
                Argument.VALIDITY,
                f"validity must be a ValidityWindow, got {type(window).__name__}",
            )
        self._start_date = window.start
        self._end_date = window.end
        return self

    def set_encryption_required(self) -> RequestBuilder:
        """
        Require the generated key to be encrypted at rest.

        Idempotent, and one-way: nothing clears the flag once set.
        """
        self._flags |= RequestFlag.ENCRYPTED
        return self

    def build(self) -> CertificateRequest:
        """
        Validate the accumulated fields and snapshot them into a request.

        Raises InvalidArgumentError for the first missing field, in the order
        alias, subject, serial_number, start_date, end_date, then for an
        end_date earlier than start_date. Builder state is left untouched.
        """
        return CertificateRequest(
            context=self._context,
            alias=self._alias,  # type: ignore[arg-type]
            subject=self._subject,  # type: ignore[arg-type]
            serial_number=self._serial_number,  # type: ignore[arg-type]
            start_date=self._start_date,  # type: ignore[arg-type]
            end_date=self._end_date,  # type: ignore[arg-type]
            flags=self._flags,
        )
