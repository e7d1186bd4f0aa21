"""SQLAlchemy implementation for DID records and their credentials"""

from __future__ import annotations

import logging
from typing import Any, Collection, Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.infrastructure.database.models import Credential, Did

logger = logging.getLogger(__name__)


class SqlIdentityRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_did(self, values: dict[str, Any]) -> Did | None:
        """Insert a DID; ``None`` when the identifier is already registered."""
        did = Did(**values)
        try:
            async with self.session.begin_nested():
                self.session.add(did)
                await self.session.flush()
        except IntegrityError:
            logger.info("DID %s already registered", values.get("did_identifier"))
            return None
        return did

    async def get_did(self, did_id: int) -> Did | None:
        result = await self.session.execute(select(Did).where(Did.id == did_id))
        return result.scalars().first()

    async def get_did_by_identifier(self, identifier: str) -> Did | None:
        result = await self.session.execute(select(Did).where(Did.did_identifier == identifier))
        return result.scalars().first()

    async def list_dids(self, user_id: str) -> Sequence[Did]:
        stmt = select(Did).where(Did.user_id == user_id).order_by(desc(Did.created_at), desc(Did.id))
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def transition_did(
        self,
        did_id: int,
        *,
        from_statuses: Collection[str],
        values: dict[str, Any],
    ) -> Did | None:
        stmt = (
            update(Did)
            .where(Did.id == did_id, Did.status.in_(list(from_statuses)))
            .values(**values)
            .returning(Did)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add_credential(self, values: dict[str, Any]) -> Credential:
        credential = Credential(**values)
        self.session.add(credential)
        await self.session.flush()
        return credential

    async def get_credential(self, credential_id: int) -> Credential | None:
        result = await self.session.execute(select(Credential).where(Credential.id == credential_id))
        return result.scalars().first()

    async def list_credentials(self, did_id: int) -> Sequence[Credential]:
        stmt = (
            select(Credential)
            .where(Credential.did_id == did_id)
            .order_by(desc(Credential.issued_at), desc(Credential.id))
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def transition_credential(
        self,
        credential_id: int,
        *,
        from_status: str,
        values: dict[str, Any],
    ) -> Credential | None:
        stmt = (
            update(Credential)
            .where(Credential.id == credential_id, Credential.status == from_status)
            .values(**values)
            .returning(Credential)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
