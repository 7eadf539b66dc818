"""
keypair_spec: key pair generation requests for a protected credential store.

Describes, validates and assembles the parameters a credential store needs
to generate a key pair and its self-signed X.509 certificate: alias,
subject distinguished name, serial number, validity window and behavioral
flags. Key generation, signing and storage belong to the store.

    request = (
        RequestBuilder(context)
        .set_alias("myKey")
        .set_subject("CN=myKey")
        .set_serial_number(1337)
        .set_start_date(start)
        .set_end_date(end)
        .build()
    )
"""

from keypair_spec.builder import RequestBuilder
from keypair_spec.domain.errors import Argument, InvalidArgumentError
from keypair_spec.domain.models import (
    CertificateRequest,
    GeneratedCredential,
    RequestFlag,
    ValidityWindow,
)
from keypair_spec.domain.ports import CredentialStore
from keypair_spec.generation import generate_credential

__all__ = [
    "Argument",
    "CertificateRequest",
    "CredentialStore",
    "GeneratedCredential",
    "InvalidArgumentError",
    "RequestBuilder",
    "RequestFlag",
    "ValidityWindow",
    "generate_credential",
]

__version__ = "0.1.0"
