"""Registration, login and profile endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.security import create_access_token
from superwallet.interfaces.http.deps import get_account_service, get_current_user, get_db_session
from superwallet.modules.accounts import AccountService, ProfileUpdateInput, User, UserCreateInput
from superwallet.schemas import (
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    SuccessResponse,
    TokenResponse,
    UserResponse,
)

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED, summary="Register")
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    user = await account_service.register(UserCreateInput(**payload.model_dump()))
    await db.commit()
    return _token_response(user)


@router.post("/login", response_model=TokenResponse, summary="Log in with email and password")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    user = await account_service.authenticate(payload.email, payload.password)
    return _token_response(user)


@router.get("/me", response_model=UserResponse, summary="Current user")
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.patch("/profile", response_model=UserResponse, summary="Update profile fields")
async def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
) -> UserResponse:
    updated = await account_service.update_profile(
        user.id, ProfileUpdateInput(**payload.model_dump(exclude_unset=True))
    )
    await db.commit()
    return UserResponse.model_validate(updated)


@router.post("/password", response_model=SuccessResponse, summary="Change password")
async def change_password(
    payload: PasswordChangeRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
) -> SuccessResponse:
    await account_service.change_password(user.id, payload.current_password, payload.new_password)
    await db.commit()
    return SuccessResponse(message="Password changed")
