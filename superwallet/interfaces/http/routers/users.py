"""Per-user preference endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.interfaces.http.deps import get_account_service, get_current_user, get_db_session
from superwallet.modules.accounts import SUPPORTED_LANGUAGES, AccountService, ProfileUpdateInput, User
from superwallet.schemas import LanguageSettingsRequest, LanguageSettingsResponse

router = APIRouter()


@router.get("/language-settings", response_model=LanguageSettingsResponse, summary="Language and country")
async def get_language_settings(user: User = Depends(get_current_user)) -> LanguageSettingsResponse:
    return LanguageSettingsResponse(
        language=user.language or "ko",
        country=user.country or "KR",
        supported_languages=list(SUPPORTED_LANGUAGES),
    )


@router.post("/language-settings", response_model=LanguageSettingsResponse, summary="Change language and country")
async def update_language_settings(
    payload: LanguageSettingsRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    account_service: AccountService = Depends(get_account_service),
) -> LanguageSettingsResponse:
    changes = payload.model_dump(exclude_none=True)
    if "country" in changes:
        changes["country"] = changes["country"].upper()
    updated = await account_service.update_profile(user.id, ProfileUpdateInput(**changes))
    await db.commit()
    return LanguageSettingsResponse(
        language=updated.language,
        country=updated.country,
        supported_languages=list(SUPPORTED_LANGUAGES),
        message="Language settings updated",
    )
