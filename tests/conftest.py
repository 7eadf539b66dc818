"""
Shared test fixtures for the keypair-spec test suite.

Provides a fixed environment handle, reference timestamps and subject,
and InMemoryCredentialStore: a reference CredentialStore that really
generates an EC key and self-signs a certificate with cryptography, so
tests can check what a store receives from a request.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from keypair_spec.builder import RequestBuilder
from keypair_spec.domain.models import CertificateRequest, GeneratedCredential

T0 = datetime(2024, 1, 1, tzinfo=UTC)
ONE_YEAR = timedelta(days=365)


class FakeContext:
    """Stand-in for a caller environment handle. Never inspected by the package."""

    def __repr__(self) -> str:
        return "FakeContext()"


class InMemoryCredentialStore:
    """
    Reference CredentialStore keeping keys and chains in dictionaries.

    Self-signs with ECDSA P-256 / SHA-256. Private keys are serialized with
    a password when the request requires encryption at rest.
    """

    def __init__(self, password: bytes = b"store-password") -> None:
        self._password = password
        self.keys: dict[str, bytes] = {}
        self.chains: dict[str, tuple[bytes, ...]] = {}
        self.requests: list[CertificateRequest] = []

    def generate_key_pair(self, request: CertificateRequest) -> GeneratedCredential:
        self.requests.append(request)
        key = ec.generate_private_key(ec.SECP256R1())
        certificate = (
            x509.CertificateBuilder()
            .subject_name(request.subject)
            .issuer_name(request.issuer)
            .public_key(key.public_key())
            .serial_number(request.serial_number)
            .not_valid_before(request.start_date)
            .not_valid_after(request.end_date)
            .sign(key, hashes.SHA256())
        )
        encryption: serialization.KeySerializationEncryption = (
            serialization.BestAvailableEncryption(self._password)
            if request.is_encryption_required
            else serialization.NoEncryption()
        )
        self.keys[request.alias] = key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            encryption,
        )
        chain = (certificate.public_bytes(serialization.Encoding.DER),)
        self.chains[request.alias] = chain
        return GeneratedCredential(alias=request.alias, certificate_chain=chain)


@pytest.fixture()
def context() -> FakeContext:
    return FakeContext()


@pytest.fixture()
def subject() -> x509.Name:
    return x509.Name([x509.NameAttribute(x509.NameOID.COMMON_NAME, "myKey")])


@pytest.fixture()
def complete_builder(context: FakeContext, subject: x509.Name) -> RequestBuilder:
    """A builder with every required field set to a valid value."""
    return (
        RequestBuilder(context)
        .set_alias("myKey")
        .set_subject(subject)
        .set_serial_number(1337)
        .set_start_date(T0)
        .set_end_date(T0 + ONE_YEAR)
    )


@pytest.fixture()
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo configure_structlog() between tests so capture_logs() sees every event."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
