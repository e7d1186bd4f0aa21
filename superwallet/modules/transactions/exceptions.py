"""Transaction domain specific exceptions."""

from superwallet.core.exceptions import InvalidArgument, NotFound


class TransactionNotFoundError(NotFound):
    """Raised when the requested transaction cannot be found."""

    default_message = "Transaction not found"


class DuplicateTransactionHashError(InvalidArgument):
    """Raised when a transaction hash is already recorded."""

    code = "duplicate_tx_hash"
    default_message = "Transaction hash already recorded"
