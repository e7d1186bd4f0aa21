"""Repository protocol for contract deployment records."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from superwallet.infrastructure.database.models import ContractDeployment as ContractDeploymentModel


class ContractRepository(Protocol):
    async def add(self, values: dict[str, Any]) -> ContractDeploymentModel:
        ...

    async def get(self, deployment_id: int) -> ContractDeploymentModel | None:
        ...

    async def list_by_user(self, user_id: str) -> Sequence[ContractDeploymentModel]:
        ...
