"""Decentralized identifiers and verifiable credentials."""

from .exceptions import CredentialNotFoundError, DidAlreadyExistsError, DidNotFoundError
from .models import CREDENTIAL_TYPES, DidRecord, VerifiableCredential
from .service import IdentityService, build_did_document

__all__ = [
    "CREDENTIAL_TYPES",
    "CredentialNotFoundError",
    "DidAlreadyExistsError",
    "DidNotFoundError",
    "DidRecord",
    "IdentityService",
    "VerifiableCredential",
    "build_did_document",
]
