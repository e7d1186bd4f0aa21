"""Account domain exports"""

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError, InvalidCredentialsError
from .models import SUPPORTED_LANGUAGES, UNSET, ProfileUpdateInput, User, UserCreateInput
from .service import AccountService

__all__ = [
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "InvalidCredentialsError",
    "SUPPORTED_LANGUAGES",
    "UNSET",
    "ProfileUpdateInput",
    "User",
    "UserCreateInput",
    "AccountService",
]
