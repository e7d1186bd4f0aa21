"""Error taxonomy shared by every module.

Each error carries a stable ``code`` and the HTTP status the API layer maps it
to. Feature modules subclass these in their own ``exceptions`` module.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any


class SuperWalletError(Exception):
    """Base class for all domain errors."""

    code = "error"
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None, **details: Any) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        for key, value in self.details.items():
            payload[key] = str(value) if isinstance(value, Decimal) else value
        return payload


class InvalidArgument(SuperWalletError):
    """Malformed or out-of-range input."""

    code = "invalid_argument"
    status_code = 400
    default_message = "Invalid argument"


class InsufficientBalance(SuperWalletError):
    """A debit exceeds the balance stored for an address."""

    code = "insufficient_balance"
    status_code = 400
    default_message = "Insufficient balance"

    def __init__(self, *, address: str, current_balance: Decimal, requested_amount: Decimal) -> None:
        super().__init__(
            f"Insufficient balance for {address}: {current_balance} < {requested_amount}",
            address=address,
            current_balance=current_balance,
            requested_amount=requested_amount,
        )
        self.address = address
        self.current_balance = current_balance
        self.requested_amount = requested_amount


class NotFound(SuperWalletError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class InvalidTransition(SuperWalletError):
    """A status change that the current state does not allow."""

    code = "invalid_transition"
    status_code = 409
    default_message = "Invalid state transition"


class StorageUnavailable(SuperWalletError):
    code = "storage_unavailable"
    status_code = 503
    default_message = "Storage is unavailable"


class ChainUnavailable(SuperWalletError):
    code = "chain_unavailable"
    status_code = 503
    default_message = "All chain RPC endpoints are unavailable"


class AuthenticationError(SuperWalletError):
    code = "unauthorized"
    status_code = 401
    default_message = "Could not validate credentials"


__all__ = [
    "SuperWalletError",
    "InvalidArgument",
    "InsufficientBalance",
    "NotFound",
    "InvalidTransition",
    "StorageUnavailable",
    "ChainUnavailable",
    "AuthenticationError",
]
