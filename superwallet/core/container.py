"""Simple dependency container for wiring external capabilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable

from superwallet.core.config import Settings, get_settings
from superwallet.infrastructure.database.session import get_engine
from superwallet.integrations import (
    ChainRPC,
    DocumentExtractor,
    PriceFeed,
    build_chain_rpc,
    build_document_extractor,
    build_price_feed,
)
from superwallet.modules.transactions import HashGenerator, RandomHashGenerator
from superwallet.modules.van import VanIdGenerator


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    price_feed: PriceFeed
    chain: ChainRPC
    document_extractor: DocumentExtractor
    hash_generator: HashGenerator = field(default_factory=RandomHashGenerator)
    van_id_factory: Callable[[], str] = field(default_factory=VanIdGenerator)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationContainer":
        return cls(
            settings=settings,
            price_feed=build_price_feed(settings.integrations),
            chain=build_chain_rpc(settings.integrations),
            document_extractor=build_document_extractor(settings.integrations),
        )

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer.from_settings(get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
