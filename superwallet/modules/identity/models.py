"""Domain models for decentralized identifiers and verifiable credentials."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

DID_STATUSES = ("pending", "active", "revoked")
CREDENTIAL_STATUSES = ("valid", "revoked", "expired")
CREDENTIAL_TYPES = (
    "passport",
    "resident_card",
    "driver_license",
    "health_insurance",
    "certificate",
)


@dataclass(slots=True)
class DidRecord:
    id: int
    user_id: str
    did_identifier: str
    did_document: dict[str, Any]
    public_key: str
    blockchain_tx_hash: Optional[str]
    status: str
    issued_at: datetime
    expires_at: Optional[datetime]
    revoked_at: Optional[datetime]
    created_at: datetime


@dataclass(slots=True)
class VerifiableCredential:
    id: int
    did_id: int
    credential_type: str
    credential_data: dict[str, Any]
    issuer_did: str
    issuer_signature: str
    blockchain_tx_hash: Optional[str]
    status: str
    issued_at: datetime
    expires_at: Optional[datetime]
    revoked_at: Optional[datetime]
    created_at: datetime
