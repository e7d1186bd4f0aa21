"""Deploys precompiled contracts through the chain RPC and keeps the records."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InvalidArgument
from superwallet.infrastructure.database.models import ContractDeployment as ContractDeploymentModel
from superwallet.infrastructure.database.repositories.contract_repository import SqlContractRepository
from superwallet.integrations.chain import ChainRPC

from .exceptions import DeploymentNotFoundError
from .models import ContractDeployment
from .repository import ContractRepository
from .templates import COMPILATION_METADATA, CONTRACT_TEMPLATES, ContractTemplate

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
MIN_GAS_LIMIT = 21_000
MAX_GAS_LIMIT = 30_000_000
DEFAULT_GAS_LIMIT = 3_000_000


@dataclass(slots=True)
class ContractService:
    repository: ContractRepository
    chain: ChainRPC
    default_deployer: str

    @classmethod
    def with_session(cls, session: AsyncSession, chain: ChainRPC, default_deployer: str) -> "ContractService":
        return cls(SqlContractRepository(session), chain, default_deployer)

    @staticmethod
    def templates() -> list[ContractTemplate]:
        return list(CONTRACT_TEMPLATES.values())

    async def deploy(
        self,
        user_id: str,
        contract_name: str,
        constructor_args: Sequence[Any] = (),
        *,
        gas_limit: int = DEFAULT_GAS_LIMIT,
        deployer_address: Optional[str] = None,
    ) -> ContractDeployment:
        template = CONTRACT_TEMPLATES.get(contract_name)
        if template is None:
            raise InvalidArgument(f"Unknown contract: {contract_name}", field="contract_name")
        expected = len(template.constructor_inputs)
        if len(constructor_args) != expected:
            raise InvalidArgument(
                f"{contract_name} takes {expected} constructor arguments, got {len(constructor_args)}",
                field="constructor_args",
            )
        if not MIN_GAS_LIMIT <= gas_limit <= MAX_GAS_LIMIT:
            raise InvalidArgument(
                f"gas_limit must be between {MIN_GAS_LIMIT} and {MAX_GAS_LIMIT}",
                field="gas_limit",
            )
        deployer = deployer_address or self.default_deployer
        if not ADDRESS_PATTERN.match(deployer):
            raise InvalidArgument("deployer_address must be a 0x address", field="deployer_address")

        tx = {"from": deployer, "data": template.bytecode, "gas": hex(gas_limit)}
        tx_hash = await asyncio.to_thread(self.chain.call, "eth_sendTransaction", [tx])
        receipt = await asyncio.to_thread(self.chain.call, "eth_getTransactionReceipt", [tx_hash])
        if receipt:
            block_number = int(receipt["blockNumber"], 16)
            gas_used: Optional[int] = int(receipt["gasUsed"], 16)
            contract_address = receipt.get("contractAddress")
            status = "deployed" if receipt.get("status") == "0x1" else "failed"
        else:
            # not mined yet
            block_number = int(await asyncio.to_thread(self.chain.call, "eth_blockNumber") or "0x0", 16)
            gas_used, contract_address, status = None, None, "pending"

        now = datetime.now(timezone.utc)
        model = await self.repository.add(
            {
                "user_id": user_id,
                "contract_name": contract_name,
                "contract_address": contract_address,
                "deployer_address": deployer,
                "tx_hash": tx_hash,
                "block_number": block_number,
                "gas_limit": gas_limit,
                "gas_used": gas_used,
                "status": status,
                "abi": json.dumps(template.abi),
                "bytecode": template.bytecode,
                "constructor_args": json.dumps(list(constructor_args)),
                "compilation_metadata": json.dumps(COMPILATION_METADATA),
                "deployment_date": now,
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info("Deployment of %s by %s: %s at %s", contract_name, user_id, status, contract_address)
        return self._to_domain(model)

    async def list_by_user(self, user_id: str) -> list[ContractDeployment]:
        return [self._to_domain(row) for row in await self.repository.list_by_user(user_id)]

    async def get(self, deployment_id: int, user_id: str) -> ContractDeployment:
        model = await self.repository.get(deployment_id)
        if model is None or model.user_id != user_id:
            raise DeploymentNotFoundError(deployment_id=deployment_id)
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: ContractDeploymentModel) -> ContractDeployment:
        return ContractDeployment(
            id=model.id,
            user_id=model.user_id,
            contract_name=model.contract_name,
            contract_address=model.contract_address,
            deployer_address=model.deployer_address,
            tx_hash=model.tx_hash,
            block_number=model.block_number,
            gas_limit=model.gas_limit,
            gas_used=model.gas_used,
            status=model.status,
            abi=json.loads(model.abi),
            bytecode=model.bytecode,
            constructor_args=json.loads(model.constructor_args),
            compilation_metadata=json.loads(model.compilation_metadata) if model.compilation_metadata else None,
            deployment_date=model.deployment_date,
            verified_at=model.verified_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
