"""SQLAlchemy implementation for electronic documents"""

from __future__ import annotations

from typing import Any, Collection, Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import Document


class SqlDocumentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, values: dict[str, Any]) -> Document:
        document = Document(**values)
        self.session.add(document)
        await self.session.flush()
        return document

    async def get(self, document_id: int) -> Document | None:
        result = await self.session.execute(select(Document).where(Document.id == document_id))
        return result.scalars().first()

    async def list_by_user(self, user_id: str) -> Sequence[Document]:
        stmt = (
            select(Document)
            .where(Document.user_id == user_id)
            .order_by(desc(Document.created_at), desc(Document.id))
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def update_if_unchanged(
        self,
        document_id: int,
        *,
        expected_signatures: str,
        from_statuses: Collection[str],
        values: dict[str, Any],
    ) -> Document | None:
        """Apply ``values`` only if nobody signed or moved the document meanwhile."""
        stmt = (
            update(Document)
            .where(
                Document.id == document_id,
                Document.signatures == expected_signatures,
                Document.status.in_(list(from_statuses)),
            )
            .values(**values)
            .returning(Document)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
