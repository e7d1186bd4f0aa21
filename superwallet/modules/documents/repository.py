"""Repository protocol for electronic documents."""

from __future__ import annotations

from typing import Any, Collection, Protocol, Sequence

from superwallet.infrastructure.database.models import Document as DocumentModel


class DocumentRepository(Protocol):
    async def add(self, values: dict[str, Any]) -> DocumentModel:
        ...

    async def get(self, document_id: int) -> DocumentModel | None:
        ...

    async def list_by_user(self, user_id: str) -> Sequence[DocumentModel]:
        ...

    async def update_if_unchanged(
        self,
        document_id: int,
        *,
        expected_signatures: str,
        from_statuses: Collection[str],
        values: dict[str, Any],
    ) -> DocumentModel | None:
        ...
