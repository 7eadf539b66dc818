"""
Ports: Protocol-based interface for the credential store collaborator.

This package only describes WHAT a key pair generation request looks like.
Generating the key, signing the certificate and persisting both is the job
of a credential store, which satisfies this Protocol structurally.

  Domain (CertificateRequest) → Port (CredentialStore) ← Adapter (platform store)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from keypair_spec.domain.models import CertificateRequest, GeneratedCredential


@runtime_checkable
class CredentialStore(Protocol):
    """
    Port: generate a key pair and self-signed certificate from a request.

    The implementation is expected to:
      1. Use request.context for any interactive unlock of the store
      2. Generate a key pair (algorithm is the store's choice)
      3. Self-sign a certificate with request.subject as subject AND issuer,
         request.serial_number and request.validity
      4. Persist key and chain under request.alias, encrypted at rest when
         request.is_encryption_required
      5. Return the stored chain, retrievable later by the same alias
    """

    def generate_key_pair(self, request: CertificateRequest) -> GeneratedCredential: ...
