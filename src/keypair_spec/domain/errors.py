"""
Validation errors: the single failure kind of the request contract.

Every rejected value raises InvalidArgumentError tagged with the Argument
that was violated, so callers (and tests) can branch on the enum member
instead of parsing messages.
"""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class Argument(StrEnum):
    """
    Names of the validated fields and cross-field constraints.

    CONTEXT through FLAGS are declared in the order CertificateRequest checks
    them. VALIDITY is only raised by the ValidityWindow helpers and
    RequestBuilder.set_validity.
    """

    CONTEXT = "context"
    ALIAS = "alias"
    SUBJECT = "subject"
    SERIAL_NUMBER = "serial_number"
    START_DATE = "start_date"
    END_DATE = "end_date"
    VALIDITY_WINDOW = "validity_window"
    """end_date precedes start_date."""

    FLAGS = "flags"

    VALIDITY = "validity"
    """A validity window could not be formed from the given input (wrong type, bad day count)."""


class InvalidArgumentError(ValueError):
    """
    A field or constraint of a key pair generation request was violated.

    Both the argument and the message are kept in `args`, so the error
    survives pickling and copying unchanged.

    >>> err = InvalidArgumentError(Argument.ALIAS, "alias must not be empty")
    >>> err.argument
    <Argument.ALIAS: 'alias'>
    >>> str(err)
    'alias must not be empty'
    """

    def __init__(self, argument: Argument, message: str) -> None:
        super().__init__(argument, message)
        self.argument = argument
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"InvalidArgumentError({self.argument.value!r}, {self.message!r})"
