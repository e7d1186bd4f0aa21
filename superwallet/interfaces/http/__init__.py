from fastapi import APIRouter

from superwallet.interfaces.http.routers import (
    auth,
    contracts,
    documents,
    exchange,
    identity,
    ledger,
    network,
    refunds,
    transactions,
    users,
    van,
)


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/user", tags=["user"])
    router.include_router(ledger.router, prefix="/ledger", tags=["ledger"])
    router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
    router.include_router(refunds.router, prefix="/tax-refund", tags=["tax-refund"])
    router.include_router(exchange.router, prefix="/exchange", tags=["exchange"])
    router.include_router(van.router, prefix="/van", tags=["van"])
    router.include_router(network.router, prefix="/network", tags=["network"])
    router.include_router(identity.router, prefix="/did", tags=["did"])
    router.include_router(documents.router, prefix="/documents", tags=["documents"])
    router.include_router(contracts.router, prefix="/contracts", tags=["contracts"])
    return router


__all__ = [
    "create_api_router",
]
