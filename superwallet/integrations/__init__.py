"""External capability interfaces and the factories that pick an implementation."""

from __future__ import annotations

from superwallet.core.config import IntegrationSettings

from .chain import ChainRPC, JsonRpcChain, MockChainRPC, NetworkStatus
from .documents import DocumentExtractor, ExtractedDocument, MockDocumentExtractor
from .price_feed import CoinMarketCapPriceFeed, PriceFeed, PriceQuote, StaticPriceFeed


def build_price_feed(settings: IntegrationSettings) -> PriceFeed:
    static = StaticPriceFeed(settings.static_price_usd, settings.usd_krw_rate)
    if settings.price_feed == "coinmarketcap":
        return CoinMarketCapPriceFeed(
            settings.coinmarketcap_api_key,
            url=settings.coinmarketcap_url,
            usd_krw_rate=settings.usd_krw_rate,
            fallback=static,
        )
    return static


def build_chain_rpc(settings: IntegrationSettings) -> ChainRPC:
    if settings.chain_rpc == "jsonrpc":
        return JsonRpcChain(
            settings.rpc_endpoints,
            chain_id=settings.chain_id,
            network_id=settings.network_id,
            timeout=settings.rpc_timeout,
        )
    return MockChainRPC(chain_id=settings.chain_id, network_id=settings.network_id)


def build_document_extractor(settings: IntegrationSettings) -> DocumentExtractor:
    return MockDocumentExtractor()


__all__ = [
    "ChainRPC",
    "JsonRpcChain",
    "MockChainRPC",
    "NetworkStatus",
    "DocumentExtractor",
    "ExtractedDocument",
    "MockDocumentExtractor",
    "CoinMarketCapPriceFeed",
    "PriceFeed",
    "PriceQuote",
    "StaticPriceFeed",
    "build_price_feed",
    "build_chain_rpc",
    "build_document_extractor",
]
