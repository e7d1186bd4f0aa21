"""Refund workflow specific exceptions."""

from superwallet.core.exceptions import NotFound


class RefundNotFoundError(NotFound):
    """Raised when the requested refund application does not exist."""

    default_message = "Tax refund not found"
