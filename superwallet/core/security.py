"""JWT helpers."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from superwallet.core.config import get_settings
from superwallet.core.exceptions import AuthenticationError
from superwallet.schemas import TokenData


def create_access_token(user_id: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
    security = get_settings().security
    expire_delta = expires_delta or timedelta(minutes=security.access_token_expire_minutes)
    payload = {
        "sub": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, security.secret_key, algorithm=security.algorithm)


def decode_access_token(token: str) -> TokenData:
    security = get_settings().security
    try:
        payload = jwt.decode(token, security.secret_key, algorithms=[security.algorithm])
    except JWTError as exc:
        raise AuthenticationError() from exc

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise AuthenticationError()
    return TokenData(user_id=user_id, email=email)


__all__ = ["create_access_token", "decode_access_token"]
