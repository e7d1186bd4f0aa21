"""Domain models for signed electronic documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

DOCUMENT_TYPES = ("contract", "certificate", "report")
DOCUMENT_STATUSES = ("draft", "signed", "finalized")


@dataclass(slots=True)
class DocumentSignature:
    signer_id: str
    signature: str
    signed_at: str


@dataclass(slots=True)
class Document:
    id: int
    user_id: str
    title: str
    document_type: str
    content: str
    content_hash: str
    status: str
    version: int
    created_at: datetime
    updated_at: datetime
    signatures: list[DocumentSignature] = field(default_factory=list)
    blockchain_tx_hash: Optional[str] = None
    ipfs_hash: Optional[str] = None
