"""Repository protocol for DID records and credentials."""

from __future__ import annotations

from typing import Any, Collection, Protocol, Sequence

from superwallet.infrastructure.database.models import Credential as CredentialModel
from superwallet.infrastructure.database.models import Did as DidModel


class IdentityRepository(Protocol):
    async def add_did(self, values: dict[str, Any]) -> DidModel | None:
        ...

    async def get_did(self, did_id: int) -> DidModel | None:
        ...

    async def get_did_by_identifier(self, identifier: str) -> DidModel | None:
        ...

    async def list_dids(self, user_id: str) -> Sequence[DidModel]:
        ...

    async def transition_did(
        self,
        did_id: int,
        *,
        from_statuses: Collection[str],
        values: dict[str, Any],
    ) -> DidModel | None:
        ...

    async def add_credential(self, values: dict[str, Any]) -> CredentialModel:
        ...

    async def get_credential(self, credential_id: int) -> CredentialModel | None:
        ...

    async def list_credentials(self, did_id: int) -> Sequence[CredentialModel]:
        ...

    async def transition_credential(
        self,
        credential_id: int,
        *,
        from_status: str,
        values: dict[str, Any],
    ) -> CredentialModel | None:
        ...
