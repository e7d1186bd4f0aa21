"""Account domain specific exceptions."""

from superwallet.core.exceptions import AuthenticationError, InvalidArgument, NotFound


class AccountAlreadyExistsError(InvalidArgument):
    """Raised when attempting to register an email that is already taken."""

    code = "account_exists"
    status_code = 409
    default_message = "Email is already registered"


class AccountNotFoundError(NotFound):
    """Raised when the requested user cannot be found."""

    default_message = "User not found"


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not match."""

    code = "invalid_credentials"
    default_message = "Invalid credentials"
