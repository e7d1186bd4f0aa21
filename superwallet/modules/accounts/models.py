"""Domain models for user accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

SUPPORTED_LANGUAGES = ("ko", "en", "ja", "zh")


@dataclass(slots=True)
class User:
    id: str
    email: str
    is_active: bool
    password_hash: str = field(repr=False)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    wallet_address: Optional[str] = None
    language: str = "ko"
    country: str = "KR"
    is_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class UserCreateInput:
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    wallet_address: Optional[str] = None
    language: str = "ko"
    country: str = "KR"


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class ProfileUpdateInput:
    email: Optional[str] | object = UNSET
    first_name: Optional[str] | object = UNSET
    last_name: Optional[str] | object = UNSET
    nationality: Optional[str] | object = UNSET
    language: Optional[str] | object = UNSET
    country: Optional[str] | object = UNSET
