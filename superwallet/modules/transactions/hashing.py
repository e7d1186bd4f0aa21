"""Transaction hash generation."""

from __future__ import annotations

import re
import secrets
from typing import Protocol

TX_HASH_LENGTH = 64
TX_HASH_PATTERN = re.compile(r"^0x[0-9a-f]{%d}$" % TX_HASH_LENGTH)


class HashGenerator(Protocol):
    def __call__(self) -> str:
        ...


class RandomHashGenerator:
    """``0x`` followed by 64 lowercase hex characters from ``secrets``."""

    def __call__(self) -> str:
        return "0x" + secrets.token_hex(TX_HASH_LENGTH // 2)


def is_valid_tx_hash(value: str) -> bool:
    return bool(TX_HASH_PATTERN.match(value))


__all__ = ["HashGenerator", "RandomHashGenerator", "TX_HASH_PATTERN", "is_valid_tx_hash"]
