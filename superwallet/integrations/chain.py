"""JSON-RPC access to the Xphere chain."""

from __future__ import annotations

import hashlib
import itertools
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Protocol, Sequence

import requests

from superwallet.core.exceptions import ChainUnavailable, InvalidArgument
from superwallet.modules.transactions.hashing import HashGenerator, RandomHashGenerator

logger = logging.getLogger(__name__)

WEI_PER_COIN = Decimal(10) ** 18


@dataclass(frozen=True, slots=True)
class NetworkStatus:
    is_connected: bool
    latest_block: int
    network_id: str
    chain_id: str
    gas_price: Optional[int] = None


class ChainRPC(Protocol):
    def call(self, method: str, params: Optional[list[Any]] = None) -> Any:
        ...

    def get_balance(self, address: str) -> Decimal:
        ...

    def network_status(self) -> NetworkStatus:
        ...


def wei_to_coin(value: str) -> Decimal:
    return Decimal(int(value, 16)) / WEI_PER_COIN


class JsonRpcChain:
    """Tries each configured endpoint in order until one answers."""

    def __init__(
        self,
        endpoints: Sequence[str],
        *,
        chain_id: str,
        network_id: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not endpoints:
            raise ValueError("at least one RPC endpoint is required")
        self.endpoints = list(endpoints)
        self.chain_id = chain_id
        self.network_id = network_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def call(self, method: str, params: Optional[list[Any]] = None) -> Any:
        payload = {"jsonrpc": "2.0", "method": method, "params": params or [], "id": next(self._ids)}
        last_error: Optional[str] = None
        for endpoint in self.endpoints:
            try:
                response = self.session.post(
                    endpoint,
                    json=payload,
                    headers={"User-Agent": "SuperWallet/1.0"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
                body = response.json()
            except (requests.exceptions.RequestException, ValueError) as exc:
                last_error = str(exc)
                logger.warning("RPC endpoint %s failed for %s: %s", endpoint, method, exc)
                continue
            if body.get("error"):
                error = body["error"]
                message = error.get("message") if isinstance(error, dict) else str(error)
                raise InvalidArgument(f"RPC error: {message}", method=method)
            return body.get("result")
        raise ChainUnavailable(last_error=last_error)

    def get_balance(self, address: str) -> Decimal:
        result = self.call("eth_getBalance", [address, "latest"])
        return wei_to_coin(result or "0x0")

    def network_status(self) -> NetworkStatus:
        try:
            network_id = self.call("net_version")
            latest_block = int(self.call("eth_blockNumber") or "0x0", 16)
            gas_price = int(self.call("eth_gasPrice") or "0x0", 16)
        except ChainUnavailable:
            return NetworkStatus(False, 0, self.network_id, self.chain_id)
        return NetworkStatus(True, latest_block, str(network_id or self.network_id), self.chain_id, gas_price)


class MockChainRPC:
    """In-process stand-in for the chain; balances and receipts live in dicts.

    ``eth_sign`` returns a deterministic 65-byte signature derived from the
    signer and payload. A transaction with ``data`` and no ``to`` creates a
    contract whose address is derived from the transaction hash, and every
    transaction uses 80% of its gas limit.
    """

    GAS_PRICE_WEI = 10**9
    DEFAULT_GAS = 21_000

    def __init__(
        self,
        *,
        chain_id: str,
        network_id: str,
        start_block: int = 1_000_000,
        hash_generator: Optional[HashGenerator] = None,
    ) -> None:
        self.chain_id = chain_id
        self.network_id = network_id
        self.block_number = start_block
        self.balances: dict[str, int] = {}
        self.receipts: dict[str, dict[str, Any]] = {}
        self.hash_generator = hash_generator or RandomHashGenerator()

    def call(self, method: str, params: Optional[list[Any]] = None) -> Any:
        params = params or []
        if method == "net_version":
            return self.network_id
        if method == "eth_chainId":
            return self.chain_id
        if method == "eth_blockNumber":
            return hex(self.block_number)
        if method == "eth_gasPrice":
            return hex(self.GAS_PRICE_WEI)
        if method == "eth_getBalance":
            if not params:
                raise InvalidArgument("eth_getBalance requires an address", method=method)
            return hex(self.balances.get(params[0].lower(), 0))
        if method in {"eth_sendTransaction", "eth_sendRawTransaction"}:
            return self._send(params[0] if params and isinstance(params[0], dict) else {})
        if method == "eth_getTransactionReceipt":
            if not params:
                raise InvalidArgument("eth_getTransactionReceipt requires a hash", method=method)
            return self.receipts.get(params[0])
        if method == "eth_sign":
            if len(params) != 2:
                raise InvalidArgument("eth_sign requires an address and data", method=method)
            return self._sign(str(params[0]), str(params[1]))
        raise InvalidArgument(f"Unsupported RPC method: {method}", method=method)

    def get_balance(self, address: str) -> Decimal:
        return wei_to_coin(self.call("eth_getBalance", [address]))

    def network_status(self) -> NetworkStatus:
        return NetworkStatus(True, self.block_number, self.network_id, self.chain_id, self.GAS_PRICE_WEI)

    def _send(self, tx: dict[str, Any]) -> str:
        self.block_number += 1
        tx_hash = self.hash_generator()
        gas = int(tx.get("gas") or hex(self.DEFAULT_GAS), 16)
        contract_address = None
        if tx.get("data") and not tx.get("to"):
            contract_address = "0x" + hashlib.sha256(tx_hash.encode("ascii")).hexdigest()[:40]
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "blockNumber": hex(self.block_number),
            "gasUsed": hex(gas * 4 // 5),
            "contractAddress": contract_address,
            "status": "0x1",
        }
        return tx_hash

    @staticmethod
    def _sign(address: str, data: str) -> str:
        seed = f"{address.lower()}:{data}".encode("utf-8")
        return "0x" + hashlib.sha256(seed).hexdigest() + hashlib.sha256(seed[::-1]).hexdigest() + "1b"


__all__ = ["NetworkStatus", "ChainRPC", "JsonRpcChain", "MockChainRPC", "wei_to_coin"]
