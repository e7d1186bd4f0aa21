"""DID registration and credential issuance.

Identifiers are derived from the holder's public key. DIDs and credential
digests are anchored with a transaction from the service wallet, and
credentials are signed by that wallet through the chain RPC. When anchoring
fails the DID stays ``pending`` and can be anchored again later.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.config import IdentitySettings
from superwallet.core.exceptions import ChainUnavailable, InvalidArgument, InvalidTransition
from superwallet.infrastructure.database.models import Credential as CredentialModel
from superwallet.infrastructure.database.models import Did as DidModel
from superwallet.infrastructure.database.repositories.identity_repository import SqlIdentityRepository
from superwallet.integrations.chain import ChainRPC

from .exceptions import CredentialNotFoundError, DidAlreadyExistsError, DidNotFoundError
from .models import CREDENTIAL_TYPES, DidRecord, VerifiableCredential
from .repository import IdentityRepository

logger = logging.getLogger(__name__)

# compressed (33 byte) or uncompressed (65 byte) secp256k1 keys
PUBLIC_KEY_PATTERN = re.compile(r"^0x(?:[0-9a-f]{66}|[0-9a-f]{130})$")
DID_CONTEXT = "https://www.w3.org/ns/did/v1"
CREDENTIAL_CONTEXT = "https://www.w3.org/2018/credentials/v1"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _digest(payload: dict[str, Any]) -> str:
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return "0x" + hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def build_did_document(identifier: str, public_key: str, service_endpoint: Optional[str] = None) -> dict[str, Any]:
    key_id = f"{identifier}#key-1"
    document: dict[str, Any] = {
        "@context": [DID_CONTEXT],
        "id": identifier,
        "controller": identifier,
        "verificationMethod": [
            {
                "id": key_id,
                "type": "EcdsaSecp256k1VerificationKey2019",
                "controller": identifier,
                "publicKeyHex": public_key[2:],
            }
        ],
        "authentication": [key_id],
    }
    if service_endpoint:
        document["service"] = [
            {"id": f"{identifier}#wallet", "type": "WalletService", "serviceEndpoint": service_endpoint}
        ]
    return document


@dataclass(slots=True)
class IdentityService:
    repository: IdentityRepository
    chain: ChainRPC
    settings: IdentitySettings
    service_address: str

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        chain: ChainRPC,
        settings: IdentitySettings,
        service_address: str,
    ) -> "IdentityService":
        return cls(SqlIdentityRepository(session), chain, settings, service_address)

    def identifier_for(self, public_key: str) -> str:
        fingerprint = hashlib.sha256(bytes.fromhex(public_key[2:])).hexdigest()[:40]
        return f"did:{self.settings.did_method}:{fingerprint}"

    async def create_did(
        self,
        user_id: str,
        public_key: str,
        *,
        service_endpoint: Optional[str] = None,
    ) -> DidRecord:
        public_key = (public_key or "").strip().lower()
        if not public_key.startswith("0x"):
            public_key = "0x" + public_key
        if not PUBLIC_KEY_PATTERN.match(public_key):
            raise InvalidArgument("public_key must be a hex encoded secp256k1 key", field="public_key")

        identifier = self.identifier_for(public_key)
        if await self.repository.get_did_by_identifier(identifier) is not None:
            raise DidAlreadyExistsError(did_identifier=identifier)

        tx_hash = await self._anchor(_digest({"did": identifier, "publicKey": public_key}))
        now = datetime.now(timezone.utc)
        model = await self.repository.add_did(
            {
                "user_id": user_id,
                "did_identifier": identifier,
                "did_document": json.dumps(build_did_document(identifier, public_key, service_endpoint)),
                "public_key": public_key,
                "blockchain_tx_hash": tx_hash,
                "status": "active" if tx_hash else "pending",
                "issued_at": now,
                "expires_at": now + timedelta(days=self.settings.did_validity_days),
                "created_at": now,
            }
        )
        if model is None:
            raise DidAlreadyExistsError(did_identifier=identifier)
        logger.info("Registered %s for user %s (%s)", identifier, user_id, model.status)
        return self._to_did(model)

    async def list_dids(self, user_id: str) -> list[DidRecord]:
        return [self._to_did(row) for row in await self.repository.list_dids(user_id)]

    async def get_did(self, did_id: int, user_id: str) -> DidRecord:
        return self._to_did(await self._owned_did(did_id, user_id))

    async def anchor_pending(self, did_id: int, user_id: str) -> DidRecord:
        """Retry anchoring a DID whose first anchoring attempt failed."""
        did = await self._owned_did(did_id, user_id)
        if did.status != "pending":
            raise InvalidTransition(f"DID {did_id} is {did.status}, expected pending", current_status=did.status)
        tx_hash = await self._anchor(_digest({"did": did.did_identifier, "publicKey": did.public_key}))
        if tx_hash is None:
            raise ChainUnavailable()
        model = await self._transition_did(did_id, ("pending",), {"status": "active", "blockchain_tx_hash": tx_hash})
        return self._to_did(model)

    async def revoke_did(self, did_id: int, user_id: str) -> DidRecord:
        await self._owned_did(did_id, user_id)
        model = await self._transition_did(
            did_id,
            ("pending", "active"),
            {"status": "revoked", "revoked_at": datetime.now(timezone.utc)},
        )
        logger.info("Revoked DID %s", model.did_identifier)
        return self._to_did(model)

    async def issue_credential(
        self,
        user_id: str,
        did_id: int,
        credential_type: str,
        claims: dict[str, Any],
        *,
        expires_in_days: Optional[int] = None,
    ) -> VerifiableCredential:
        did = await self._owned_did(did_id, user_id)
        if did.status != "active":
            raise InvalidTransition(
                f"DID {did_id} is {did.status}; credentials need an active DID",
                current_status=did.status,
            )
        if credential_type not in CREDENTIAL_TYPES:
            raise InvalidArgument(f"Unsupported credential type: {credential_type}", field="credential_type")
        if not isinstance(claims, dict):
            raise InvalidArgument("claims must be an object", field="claims")
        days = expires_in_days if expires_in_days is not None else self.settings.credential_validity_days
        if days <= 0:
            raise InvalidArgument("expires_in_days must be positive", field="expires_in_days")

        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(days=days)
        credential_data = {
            "@context": [CREDENTIAL_CONTEXT],
            "type": ["VerifiableCredential", credential_type],
            "issuer": self.settings.issuer_did,
            "issuanceDate": now.isoformat(),
            "expirationDate": expires_at.isoformat(),
            "credentialSubject": {**claims, "id": did.did_identifier},
        }
        digest = _digest(credential_data)
        signature = await asyncio.to_thread(self.chain.call, "eth_sign", [self.service_address, digest])
        model = await self.repository.add_credential(
            {
                "did_id": did_id,
                "credential_type": credential_type,
                "credential_data": json.dumps(credential_data),
                "issuer_did": self.settings.issuer_did,
                "issuer_signature": str(signature),
                "blockchain_tx_hash": await self._anchor(digest),
                "status": "valid",
                "issued_at": now,
                "expires_at": expires_at,
                "created_at": now,
            }
        )
        logger.info("Issued %s credential %s for %s", credential_type, model.id, did.did_identifier)
        return self._to_credential(model)

    async def list_credentials(self, did_id: int, user_id: str) -> list[VerifiableCredential]:
        await self._owned_did(did_id, user_id)
        return [self._to_credential(row) for row in await self.repository.list_credentials(did_id)]

    async def revoke_credential(self, credential_id: int, user_id: str) -> VerifiableCredential:
        credential = await self.repository.get_credential(credential_id)
        if credential is None:
            raise CredentialNotFoundError(credential_id=credential_id)
        try:
            await self._owned_did(credential.did_id, user_id)
        except DidNotFoundError:
            raise CredentialNotFoundError(credential_id=credential_id) from None
        model = await self.repository.transition_credential(
            credential_id,
            from_status="valid",
            values={"status": "revoked", "revoked_at": datetime.now(timezone.utc)},
        )
        if model is None:
            raise InvalidTransition(
                f"Credential {credential_id} is {credential.status}, expected valid",
                current_status=credential.status,
            )
        logger.info("Revoked credential %s", credential_id)
        return self._to_credential(model)

    async def _owned_did(self, did_id: int, user_id: str) -> DidModel:
        model = await self.repository.get_did(did_id)
        if model is None or model.user_id != user_id:
            raise DidNotFoundError(did_id=did_id)
        return model

    async def _transition_did(self, did_id: int, from_statuses: tuple[str, ...], values: dict) -> DidModel:
        model = await self.repository.transition_did(did_id, from_statuses=from_statuses, values=values)
        if model is not None:
            return model
        current = await self.repository.get_did(did_id)
        if current is None:
            raise DidNotFoundError(did_id=did_id)
        raise InvalidTransition(
            f"DID {did_id} is {current.status}, expected one of {', '.join(from_statuses)}",
            current_status=current.status,
        )

    async def _anchor(self, data: str) -> Optional[str]:
        tx = {"from": self.service_address, "to": self.service_address, "data": data}
        try:
            return await asyncio.to_thread(self.chain.call, "eth_sendTransaction", [tx])
        except ChainUnavailable:
            logger.warning("Could not anchor %s, leaving it unanchored", data)
            return None

    @staticmethod
    def _to_did(model: DidModel) -> DidRecord:
        return DidRecord(
            id=model.id,
            user_id=model.user_id,
            did_identifier=model.did_identifier,
            did_document=json.loads(model.did_document),
            public_key=model.public_key,
            blockchain_tx_hash=model.blockchain_tx_hash,
            status=model.status,
            issued_at=_as_utc(model.issued_at),
            expires_at=_as_utc(model.expires_at),
            revoked_at=_as_utc(model.revoked_at),
            created_at=_as_utc(model.created_at),
        )

    @staticmethod
    def _to_credential(model: CredentialModel) -> VerifiableCredential:
        expires_at = _as_utc(model.expires_at)
        status = model.status
        if status == "valid" and expires_at is not None and expires_at <= datetime.now(timezone.utc):
            status = "expired"
        return VerifiableCredential(
            id=model.id,
            did_id=model.did_id,
            credential_type=model.credential_type,
            credential_data=json.loads(model.credential_data),
            issuer_did=model.issuer_did,
            issuer_signature=model.issuer_signature,
            blockchain_tx_hash=model.blockchain_tx_hash,
            status=status,
            issued_at=_as_utc(model.issued_at),
            expires_at=expires_at,
            revoked_at=_as_utc(model.revoked_at),
            created_at=_as_utc(model.created_at),
        )
