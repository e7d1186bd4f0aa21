"""
Price feed, chain RPC and document extractor tests with fake HTTP sessions.
"""
from decimal import Decimal

import pytest
import requests

from superwallet.core.config import IntegrationSettings
from superwallet.core.exceptions import ChainUnavailable, InvalidArgument
from superwallet.integrations import (
    CoinMarketCapPriceFeed,
    JsonRpcChain,
    MockChainRPC,
    MockDocumentExtractor,
    StaticPriceFeed,
    build_chain_rpc,
    build_price_feed,
)


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    """Returns queued responses (or raises queued exceptions) in order."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def _next(self, url, kwargs):
        self.calls.append((url, kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url, **kwargs):
        return self._next(url, kwargs)

    def post(self, url, **kwargs):
        return self._next(url, kwargs)


class TestPriceFeeds:

    def test_static_quote_converts_to_krw(self):
        quote = StaticPriceFeed(Decimal("0.001"), Decimal("1300")).quote("xp")

        assert quote.symbol == "XP"
        assert quote.price_krw == Decimal("1.3")
        assert quote.source == "static"

    def test_coinmarketcap_quote(self):
        session = FakeSession(
            FakeResponse({"data": {"XP": {"quote": {"USD": {"price": 0.0025, "percent_change_24h": -1.5}}}}})
        )
        feed = CoinMarketCapPriceFeed(
            "key", url="https://cmc.test", usd_krw_rate=Decimal(1000), fallback=StaticPriceFeed(), session=session
        )

        quote = feed.quote("XP")

        assert quote.price_usd == Decimal("0.0025")
        assert quote.price_krw == Decimal("2.5")
        assert quote.change_24h == Decimal("-1.5")
        assert session.calls[0][1]["headers"]["X-CMC_PRO_API_KEY"] == "key"

    @pytest.mark.parametrize(
        "outcome",
        [requests.exceptions.ConnectionError("down"), FakeResponse({}, 500), FakeResponse({"data": {}})],
    )
    def test_coinmarketcap_falls_back(self, outcome):
        feed = CoinMarketCapPriceFeed(
            None,
            url="https://cmc.test",
            usd_krw_rate=Decimal(1300),
            fallback=StaticPriceFeed(),
            session=FakeSession(outcome),
        )

        assert feed.quote("XP").source == "static"


class TestJsonRpcChain:

    def _chain(self, *outcomes):
        return JsonRpcChain(
            ["https://rpc-a.test", "https://rpc-b.test"],
            chain_id="0x59d",
            network_id="xphere-mainnet",
            session=FakeSession(*outcomes),
        )

    def test_falls_through_to_next_endpoint(self):
        chain = self._chain(
            requests.exceptions.Timeout("slow"),
            FakeResponse({"jsonrpc": "2.0", "id": 1, "result": hex(2 * 10**18)}),
        )

        assert chain.get_balance("0xabc") == Decimal(2)
        assert [url for url, _ in chain.session.calls] == ["https://rpc-a.test", "https://rpc-b.test"]

    def test_all_endpoints_down(self):
        chain = self._chain(requests.exceptions.ConnectionError("a"), FakeResponse({}, 502))

        with pytest.raises(ChainUnavailable):
            chain.call("eth_blockNumber")

    def test_rpc_error_is_not_retried(self):
        chain = self._chain(FakeResponse({"error": {"code": -32601, "message": "method not found"}}))

        with pytest.raises(InvalidArgument):
            chain.call("eth_nope")
        assert len(chain.session.calls) == 1

    def test_network_status_when_unreachable(self):
        chain = self._chain(requests.exceptions.ConnectionError("a"), requests.exceptions.ConnectionError("b"))

        status = chain.network_status()

        assert status.is_connected is False
        assert status.latest_block == 0


class TestMockChain:

    def test_answers_basic_methods(self):
        chain = MockChainRPC(chain_id="0x59d", network_id="xphere-mainnet", hash_generator=lambda: "0x" + "f" * 64)
        chain.balances["0xabc"] = 3 * 10**18

        assert chain.get_balance("0xABC") == Decimal(3)
        assert chain.call("eth_chainId") == "0x59d"
        assert chain.call("eth_sendTransaction", [{}]) == "0x" + "f" * 64
        assert chain.network_status().latest_block == 1_000_001

    def test_contract_creation_receipt(self):
        chain = MockChainRPC(chain_id="0x59d", network_id="xphere-mainnet", hash_generator=lambda: "0x" + "e" * 64)

        tx_hash = chain.call("eth_sendTransaction", [{"from": "0xabc", "data": "0x6080", "gas": hex(100_000)}])
        receipt = chain.call("eth_getTransactionReceipt", [tx_hash])

        assert receipt["status"] == "0x1"
        assert int(receipt["gasUsed"], 16) == 80_000
        assert len(receipt["contractAddress"]) == 42
        assert chain.call("eth_getTransactionReceipt", ["0x" + "0" * 64]) is None

    def test_sign_is_deterministic(self):
        chain = MockChainRPC(chain_id="0x59d", network_id="xphere-mainnet")

        signature = chain.call("eth_sign", ["0xABC", "0x1234"])

        assert signature == chain.call("eth_sign", ["0xabc", "0x1234"])
        assert signature != chain.call("eth_sign", ["0xabc", "0x1235"])
        assert len(signature) == 132
        with pytest.raises(InvalidArgument):
            chain.call("eth_sign", ["0xabc"])

    def test_unsupported_method(self):
        with pytest.raises(InvalidArgument):
            MockChainRPC(chain_id="0x1", network_id="n").call("debug_traceTransaction")


class TestDocumentExtractor:

    def test_parses_key_value_lines(self):
        document = MockDocumentExtractor().extract(
            "passport", "Surname: KIM\nGiven Names: MINJI\nnoise line", country_hint="kr"
        )

        assert document.fields == {"surname": "KIM", "given_names": "MINJI"}
        assert document.verified is False
        assert document.country_hint == "KR"

    def test_unknown_document_type(self):
        with pytest.raises(InvalidArgument):
            MockDocumentExtractor().extract("library_card", "name: x")


def test_factories_follow_settings():
    assert isinstance(build_price_feed(IntegrationSettings()), StaticPriceFeed)
    assert isinstance(build_chain_rpc(IntegrationSettings()), MockChainRPC)
    assert isinstance(build_price_feed(IntegrationSettings(price_feed="coinmarketcap")), CoinMarketCapPriceFeed)
    assert isinstance(build_chain_rpc(IntegrationSettings(chain_rpc="jsonrpc")), JsonRpcChain)
