"""Price, chain status and RPC proxy endpoints."""
import asyncio

from fastapi import APIRouter, Depends, Query

from superwallet.core.container import ApplicationContainer
from superwallet.interfaces.http.deps import get_app_container, get_current_user
from superwallet.modules.accounts import User
from superwallet.schemas import (
    NetworkStatusResponse,
    PriceResponse,
    RpcRequest,
    RpcResponse,
    WalletAddressResponse,
)

router = APIRouter()


@router.get("/price", response_model=PriceResponse, summary="Current asset price")
async def get_price(
    symbol: str = Query("XP", min_length=1, max_length=16),
    container: ApplicationContainer = Depends(get_app_container),
) -> PriceResponse:
    quote = await asyncio.to_thread(container.price_feed.quote, symbol)
    return PriceResponse.model_validate(quote)


@router.get("/status", response_model=NetworkStatusResponse, summary="Chain connectivity")
async def network_status(container: ApplicationContainer = Depends(get_app_container)) -> NetworkStatusResponse:
    status = await asyncio.to_thread(container.chain.network_status)
    return NetworkStatusResponse.model_validate(status)


@router.post("/rpc", response_model=RpcResponse, summary="Forward a JSON-RPC call")
async def rpc_proxy(
    payload: RpcRequest,
    _: User = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_app_container),
) -> RpcResponse:
    result = await asyncio.to_thread(container.chain.call, payload.method, payload.params)
    return RpcResponse(method=payload.method, result=result)


@router.get("/wallet-address", response_model=WalletAddressResponse, summary="Demo wallet address")
async def wallet_address(
    _: User = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_app_container),
) -> WalletAddressResponse:
    settings = container.settings
    return WalletAddressResponse(
        address=settings.wallet.demo_address,
        asset_type=settings.wallet.ledger_asset,
        network_id=settings.integrations.network_id,
    )
