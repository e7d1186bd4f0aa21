"""Bearer token authentication dependency."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from superwallet.core.exceptions import AuthenticationError
from superwallet.core.security import decode_access_token
from superwallet.modules.accounts import AccountService, User

from .services import get_account_service

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    account_service: AccountService = Depends(get_account_service),
) -> User:
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    token_data = decode_access_token(credentials.credentials)
    user = await account_service.get_by_id(token_data.user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Account does not exist or is disabled")
    return user


__all__ = ["get_current_user"]
