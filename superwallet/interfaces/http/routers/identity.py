"""DID and verifiable credential endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.interfaces.http.deps import get_current_user, get_db_session, get_identity_service
from superwallet.modules.accounts import User
from superwallet.modules.identity import DidNotFoundError, IdentityService
from superwallet.schemas import (
    CredentialIssueRequest,
    CredentialListResponse,
    CredentialResponse,
    DidCreateRequest,
    DidListResponse,
    DidResponse,
)

router = APIRouter()


@router.post("/create", response_model=DidResponse, status_code=status.HTTP_201_CREATED, summary="Register a DID")
async def create_did(
    payload: DidCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    identity: IdentityService = Depends(get_identity_service),
) -> DidResponse:
    did = await identity.create_did(user.id, payload.public_key, service_endpoint=payload.service_endpoint)
    await db.commit()
    return DidResponse.model_validate(did)


@router.get("/user/{user_id}", response_model=DidListResponse, summary="A user's DIDs")
async def list_user_dids(
    user_id: str,
    user: User = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
) -> DidListResponse:
    # DIDs are private to their holder
    if user_id != user.id:
        raise DidNotFoundError(user_id=user_id)
    dids = await identity.list_dids(user.id)
    return DidListResponse(total=len(dids), dids=[DidResponse.model_validate(did) for did in dids])


@router.get("/{did_id}", response_model=DidResponse, summary="One of the caller's DIDs")
async def get_did(
    did_id: int,
    user: User = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
) -> DidResponse:
    return DidResponse.model_validate(await identity.get_did(did_id, user.id))


@router.post("/{did_id}/anchor", response_model=DidResponse, summary="Retry anchoring a pending DID")
async def anchor_did(
    did_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    identity: IdentityService = Depends(get_identity_service),
) -> DidResponse:
    did = await identity.anchor_pending(did_id, user.id)
    await db.commit()
    return DidResponse.model_validate(did)


@router.post("/{did_id}/revoke", response_model=DidResponse, summary="Revoke a DID")
async def revoke_did(
    did_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    identity: IdentityService = Depends(get_identity_service),
) -> DidResponse:
    did = await identity.revoke_did(did_id, user.id)
    await db.commit()
    return DidResponse.model_validate(did)


@router.post(
    "/{did_id}/credentials",
    response_model=CredentialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue a verifiable credential",
)
async def issue_credential(
    did_id: int,
    payload: CredentialIssueRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    identity: IdentityService = Depends(get_identity_service),
) -> CredentialResponse:
    credential = await identity.issue_credential(
        user.id,
        did_id,
        payload.credential_type,
        payload.claims,
        expires_in_days=payload.expires_in_days,
    )
    await db.commit()
    return CredentialResponse.model_validate(credential)


@router.get("/{did_id}/credentials", response_model=CredentialListResponse, summary="Credentials of a DID")
async def list_credentials(
    did_id: int,
    user: User = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
) -> CredentialListResponse:
    credentials = await identity.list_credentials(did_id, user.id)
    return CredentialListResponse(
        total=len(credentials),
        credentials=[CredentialResponse.model_validate(credential) for credential in credentials],
    )


@router.post("/credentials/{credential_id}/revoke", response_model=CredentialResponse, summary="Revoke a credential")
async def revoke_credential(
    credential_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    identity: IdentityService = Depends(get_identity_service),
) -> CredentialResponse:
    credential = await identity.revoke_credential(credential_id, user.id)
    await db.commit()
    return CredentialResponse.model_validate(credential)
