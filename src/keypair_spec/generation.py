"""
Generation: hand a finalized request to the credential store.

Flow:
  RequestBuilder.build()  (skipped when a CertificateRequest is passed)
    → CredentialStore.generate_key_pair(request)
      → GeneratedCredential

InvalidArgumentError from build() propagates before the store is touched.
Whatever the store raises propagates unchanged; retries and unlock prompts
are the store's business.
"""

from __future__ import annotations

import structlog

from keypair_spec.builder import RequestBuilder
from keypair_spec.domain.models import CertificateRequest, GeneratedCredential
from keypair_spec.domain.ports import CredentialStore

log = structlog.get_logger()


def generate_credential(
    request: CertificateRequest | RequestBuilder,
    store: CredentialStore,
) -> GeneratedCredential:
    """
    Generate a key pair and self-signed certificate for `request` in `store`.

    A RequestBuilder is finalized first; a CertificateRequest is already
    valid and is passed through as-is.
    """
    if isinstance(request, RequestBuilder):
        request = request.build()

    log.info(
        "keypair.generation_requested",
        alias=request.alias,
        subject=request.subject.rfc4514_string(),
        serial_number=request.serial_number,
        encryption_required=request.is_encryption_required,
    )
    credential = store.generate_key_pair(request)
    log.info(
        "keypair.generated",
        alias=credential.alias,
        chain_length=len(credential.certificate_chain),
    )
    return credential
