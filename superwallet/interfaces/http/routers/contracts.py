"""Smart contract deployment endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.interfaces.http.deps import get_contract_service, get_current_user, get_db_session
from superwallet.modules.accounts import User
from superwallet.modules.contracts import ContractService
from superwallet.schemas import (
    ContractDeployRequest,
    ContractDeploymentListResponse,
    ContractDeploymentResponse,
    ContractTemplateResponse,
)

router = APIRouter()


@router.get("/templates", response_model=list[ContractTemplateResponse], summary="Deployable contracts")
async def list_templates(contracts: ContractService = Depends(get_contract_service)) -> list[ContractTemplateResponse]:
    return [ContractTemplateResponse.model_validate(template) for template in contracts.templates()]


@router.post(
    "/deploy",
    response_model=ContractDeploymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Deploy a precompiled contract",
)
async def deploy_contract(
    payload: ContractDeployRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    contracts: ContractService = Depends(get_contract_service),
) -> ContractDeploymentResponse:
    deployment = await contracts.deploy(
        user.id,
        payload.contract_name,
        payload.constructor_args,
        gas_limit=payload.gas_limit,
        deployer_address=payload.deployer_address or user.wallet_address,
    )
    await db.commit()
    return ContractDeploymentResponse.model_validate(deployment)


@router.get("/deployments", response_model=ContractDeploymentListResponse, summary="Own deployments, newest first")
async def list_deployments(
    user: User = Depends(get_current_user),
    contracts: ContractService = Depends(get_contract_service),
) -> ContractDeploymentListResponse:
    deployments = await contracts.list_by_user(user.id)
    return ContractDeploymentListResponse(
        total=len(deployments),
        deployments=[ContractDeploymentResponse.model_validate(deployment) for deployment in deployments],
    )


@router.get("/deployments/{deployment_id}", response_model=ContractDeploymentResponse, summary="One deployment")
async def get_deployment(
    deployment_id: int,
    user: User = Depends(get_current_user),
    contracts: ContractService = Depends(get_contract_service),
) -> ContractDeploymentResponse:
    return ContractDeploymentResponse.model_validate(await contracts.get(deployment_id, user.id))
