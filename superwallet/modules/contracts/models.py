"""Domain models for smart contract deployments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

DEPLOYMENT_STATUSES = ("pending", "deployed", "verified", "failed")


@dataclass(slots=True)
class ContractDeployment:
    id: int
    user_id: str
    contract_name: str
    contract_address: Optional[str]
    deployer_address: str
    tx_hash: str
    block_number: int
    gas_limit: int
    gas_used: Optional[int]
    status: str
    abi: list[dict[str, Any]]
    bytecode: str
    constructor_args: list[Any]
    compilation_metadata: Optional[dict[str, Any]]
    deployment_date: datetime
    verified_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
