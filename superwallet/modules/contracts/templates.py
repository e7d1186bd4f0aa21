"""Precompiled contracts that can be deployed from the wallet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

COMPILATION_METADATA = {
    "compiler": "solc",
    "version": "0.8.19",
    "settings": {"optimizer": {"enabled": True, "runs": 200}},
}


@dataclass(frozen=True, slots=True)
class ContractTemplate:
    name: str
    abi: list[dict[str, Any]]
    bytecode: str

    @property
    def constructor_inputs(self) -> list[dict[str, Any]]:
        for entry in self.abi:
            if entry.get("type") == "constructor":
                return entry.get("inputs", [])
        return []


def _function(name: str, inputs: list[tuple[str, str]], outputs: list[str], mutability: str) -> dict[str, Any]:
    return {
        "inputs": [{"name": arg, "type": kind} for arg, kind in inputs],
        "name": name,
        "outputs": [{"name": "", "type": kind} for kind in outputs],
        "stateMutability": mutability,
        "type": "function",
    }


SUPER_WALLET_TOKEN = ContractTemplate(
    name="SuperWalletToken",
    abi=[
        {
            "inputs": [
                {"name": "_name", "type": "string"},
                {"name": "_symbol", "type": "string"},
                {"name": "_decimals", "type": "uint8"},
                {"name": "_totalSupply", "type": "uint256"},
            ],
            "stateMutability": "nonpayable",
            "type": "constructor",
        },
        _function("transfer", [("to", "address"), ("amount", "uint256")], ["bool"], "nonpayable"),
        _function("balanceOf", [("account", "address")], ["uint256"], "view"),
        _function("registerDID", [("did", "string")], [], "nonpayable"),
        _function(
            "storeDocument",
            [("docHash", "bytes32"), ("ipfsHash", "string"), ("documentType", "string")],
            [],
            "nonpayable",
        ),
    ],
    bytecode="0x608060405234801561001057600080fd5b506040516200100038038062001000833981016040819052610031916101a9565b",
)

DOCUMENT_REGISTRY = ContractTemplate(
    name="DocumentRegistry",
    abi=[
        _function(
            "storeDocument",
            [("docHash", "bytes32"), ("ipfsHash", "string"), ("documentType", "string")],
            [],
            "nonpayable",
        ),
        _function("isRegistered", [("docHash", "bytes32")], ["bool"], "view"),
    ],
    bytecode="0x608060405234801561001057600080fd5b50610150806100206000396000f3fe608060405234801561001057600080fd5b50",
)

CONTRACT_TEMPLATES: dict[str, ContractTemplate] = {
    template.name: template for template in (SUPER_WALLET_TOKEN, DOCUMENT_REGISTRY)
}
