"""Smart contract deployment records."""

from .exceptions import DeploymentNotFoundError
from .models import ContractDeployment
from .service import ContractService
from .templates import CONTRACT_TEMPLATES, ContractTemplate

__all__ = [
    "CONTRACT_TEMPLATES",
    "ContractDeployment",
    "ContractService",
    "ContractTemplate",
    "DeploymentNotFoundError",
]
