"""Electronic document drafting, signing and finalization.

A document starts as ``draft``. Any user may add one signature, which moves
it to ``signed``. The owner then finalizes it, anchoring the content hash on
chain. Signature lists are updated with a compare-and-swap on the stored list,
so concurrent signers never overwrite each other.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InvalidArgument, InvalidTransition
from superwallet.infrastructure.database.models import Document as DocumentModel
from superwallet.infrastructure.database.repositories.document_repository import SqlDocumentRepository
from superwallet.integrations.chain import ChainRPC

from .exceptions import DocumentNotFoundError
from .models import DOCUMENT_TYPES, Document, DocumentSignature
from .repository import DocumentRepository

logger = logging.getLogger(__name__)

SIGNATURE_PATTERN = re.compile(r"^0x[0-9a-f]{130}$")
MAX_TITLE_LENGTH = 200


def content_hash(content: str) -> str:
    return "0x" + hashlib.sha256(content.encode("utf-8")).hexdigest()


@dataclass(slots=True)
class DocumentService:
    repository: DocumentRepository
    chain: ChainRPC
    signer_address: str

    @classmethod
    def with_session(cls, session: AsyncSession, chain: ChainRPC, signer_address: str) -> "DocumentService":
        return cls(SqlDocumentRepository(session), chain, signer_address)

    async def create(
        self,
        user_id: str,
        *,
        title: str,
        document_type: str,
        content: str,
        ipfs_hash: Optional[str] = None,
    ) -> Document:
        title = (title or "").strip()
        if not title or len(title) > MAX_TITLE_LENGTH:
            raise InvalidArgument(f"title must be 1-{MAX_TITLE_LENGTH} characters", field="title")
        if document_type not in DOCUMENT_TYPES:
            raise InvalidArgument(f"Unsupported document type: {document_type}", field="document_type")
        if not content:
            raise InvalidArgument("content is required", field="content")

        now = datetime.now(timezone.utc)
        model = await self.repository.add(
            {
                "user_id": user_id,
                "title": title,
                "document_type": document_type,
                "content": content,
                "content_hash": content_hash(content),
                "signatures": "[]",
                "ipfs_hash": ipfs_hash,
                "status": "draft",
                "version": 1,
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info("Document %s created by %s", model.id, user_id)
        return self._to_domain(model)

    async def list_by_user(self, user_id: str) -> list[Document]:
        return [self._to_domain(row) for row in await self.repository.list_by_user(user_id)]

    async def get(self, document_id: int, user_id: str) -> Document:
        """Owners and signers may read a document."""
        model = await self.repository.get(document_id)
        if model is None:
            raise DocumentNotFoundError(document_id=document_id)
        document = self._to_domain(model)
        if document.user_id != user_id and all(s.signer_id != user_id for s in document.signatures):
            raise DocumentNotFoundError(document_id=document_id)
        return document

    async def sign(self, document_id: int, user_id: str, signature: Optional[str] = None) -> Document:
        model = await self.repository.get(document_id)
        if model is None:
            raise DocumentNotFoundError(document_id=document_id)
        if model.status == "finalized":
            raise InvalidTransition(f"Document {document_id} is finalized", current_status=model.status)
        signatures = json.loads(model.signatures)
        if any(entry["signer_id"] == user_id for entry in signatures):
            raise InvalidTransition(f"Document {document_id} is already signed by this user", current_status=model.status)

        if signature is None:
            signature = await asyncio.to_thread(self.chain.call, "eth_sign", [self.signer_address, model.content_hash])
        signature = str(signature).lower()
        if not SIGNATURE_PATTERN.match(signature):
            raise InvalidArgument("signature must be 0x followed by 130 hex characters", field="signature")

        now = datetime.now(timezone.utc)
        signatures.append(asdict(DocumentSignature(user_id, signature, now.isoformat())))
        updated = await self.repository.update_if_unchanged(
            document_id,
            expected_signatures=model.signatures,
            from_statuses=("draft", "signed"),
            values={"signatures": json.dumps(signatures), "status": "signed", "updated_at": now},
        )
        if updated is None:
            raise InvalidTransition(f"Document {document_id} changed while signing", current_status=model.status)
        logger.info("Document %s signed by %s (%d signatures)", document_id, user_id, len(signatures))
        return self._to_domain(updated)

    async def finalize(self, document_id: int, user_id: str) -> Document:
        model = await self.repository.get(document_id)
        if model is None or model.user_id != user_id:
            raise DocumentNotFoundError(document_id=document_id)
        if model.status != "signed":
            raise InvalidTransition(
                f"Document {document_id} is {model.status}, expected signed",
                current_status=model.status,
            )
        tx = {"from": self.signer_address, "to": self.signer_address, "data": model.content_hash}
        tx_hash = await asyncio.to_thread(self.chain.call, "eth_sendTransaction", [tx])
        updated = await self.repository.update_if_unchanged(
            document_id,
            expected_signatures=model.signatures,
            from_statuses=("signed",),
            values={
                "status": "finalized",
                "blockchain_tx_hash": tx_hash,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        if updated is None:
            raise InvalidTransition(f"Document {document_id} changed while finalizing", current_status=model.status)
        logger.info("Document %s finalized in %s", document_id, tx_hash)
        return self._to_domain(updated)

    @staticmethod
    def _to_domain(model: DocumentModel) -> Document:
        return Document(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            document_type=model.document_type,
            content=model.content,
            content_hash=model.content_hash,
            status=model.status,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
            signatures=[DocumentSignature(**entry) for entry in json.loads(model.signatures)],
            blockchain_tx_hash=model.blockchain_tx_hash,
            ipfs_hash=model.ipfs_hash,
        )
