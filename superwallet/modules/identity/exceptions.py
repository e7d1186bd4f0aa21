"""Identity specific exceptions."""

from superwallet.core.exceptions import InvalidArgument, NotFound


class DidNotFoundError(NotFound):
    default_message = "DID not found"


class CredentialNotFoundError(NotFound):
    default_message = "Credential not found"


class DidAlreadyExistsError(InvalidArgument):
    """Raised when a public key is registered a second time."""

    code = "did_exists"
    status_code = 409
    default_message = "A DID for this public key already exists"
