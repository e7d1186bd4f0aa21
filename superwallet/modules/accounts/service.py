"""Domain services for user accounts."""

from __future__ import annotations

import logging
from dataclasses import fields

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.exceptions import InvalidArgument
from superwallet.infrastructure.database.models import User as UserModel
from superwallet.infrastructure.database.repositories.user_repository import SqlUserRepository

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError, InvalidCredentialsError
from .passwords import check_password_policy, hash_password, verify_password
from .models import SUPPORTED_LANGUAGES, UNSET, ProfileUpdateInput, User, UserCreateInput
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates registration, login and profile use cases."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        return cls(SqlUserRepository(session))

    async def get_by_id(self, user_id: str) -> User | None:
        return self._to_domain(await self._repository.get_by_id(user_id))

    async def require(self, user_id: str) -> User:
        user = await self.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError(user_id=user_id)
        return user

    async def register(self, payload: UserCreateInput) -> User:
        email = payload.email.strip()
        if "@" not in email:
            raise InvalidArgument("email is not valid", field="email")
        check_password_policy(payload.password)
        self._check_language(payload.language)
        if await self._repository.get_by_email(email) is not None:
            raise AccountAlreadyExistsError(email=email)

        model = await self._repository.create(
            {
                "email": email,
                "password_hash": hash_password(payload.password),
                "first_name": payload.first_name,
                "last_name": payload.last_name,
                "nationality": payload.nationality,
                "wallet_address": payload.wallet_address,
                "language": payload.language,
                "country": payload.country,
            }
        )
        logger.info("Registered user %s", model.id)
        return self._to_domain(model)

    async def authenticate(self, email: str, password: str) -> User:
        model = await self._repository.get_by_email(email.strip())
        if model is None or not model.is_active or not verify_password(password, model.password_hash):
            raise InvalidCredentialsError()
        return self._to_domain(model)

    async def update_profile(self, user_id: str, payload: ProfileUpdateInput) -> User:
        values = {
            f.name: getattr(payload, f.name)
            for f in fields(payload)
            if getattr(payload, f.name) is not UNSET
        }
        if "language" in values:
            self._check_language(values["language"])
        if values.get("email"):
            existing = await self._repository.get_by_email(values["email"])
            if existing is not None and existing.id != user_id:
                raise AccountAlreadyExistsError(email=values["email"])
        model = await self._repository.update(user_id, values)
        if model is None:
            raise AccountNotFoundError(user_id=user_id)
        return self._to_domain(model)

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        model = await self._repository.get_by_id(user_id)
        if model is None:
            raise AccountNotFoundError(user_id=user_id)
        if not verify_password(current_password, model.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")
        check_password_policy(new_password)
        await self._repository.update(user_id, {"password_hash": hash_password(new_password)})
        logger.info("Password changed for user %s", user_id)

    @staticmethod
    def _check_language(language: str | None) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise InvalidArgument(f"Unsupported language: {language}", field="language")

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            email=model.email,
            is_active=bool(model.is_active),
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            nationality=model.nationality,
            wallet_address=model.wallet_address,
            language=model.language or "ko",
            country=model.country or "KR",
            is_verified=bool(model.is_verified),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
