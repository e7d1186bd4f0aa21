"""
End-to-end HTTP tests through FastAPI's TestClient.
"""
import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from superwallet.core.config import get_settings
from superwallet.core.container import get_container
from superwallet.infrastructure.database import dispose_engine
from superwallet.main import create_app


@pytest.fixture
def client(monkeypatch, db_url):
    monkeypatch.setenv("DATABASE__URL", db_url)
    monkeypatch.setenv("INTEGRATIONS__PRICE_FEED", "static")
    monkeypatch.setenv("INTEGRATIONS__CHAIN_RPC", "mock")
    get_settings.cache_clear()
    get_container.cache_clear()
    asyncio.run(dispose_engine())

    with TestClient(create_app()) as test_client:
        yield test_client

    get_settings.cache_clear()
    get_container.cache_clear()


def _register(client, email="lee@example.com"):
    response = client.post("/api/auth/register", json={"email": email, "password": "secret1"})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth(client):
    return _register(client)


class TestAuth:

    def test_register_login_and_me(self, client, auth):
        login = client.post("/api/auth/login", json={"email": "lee@example.com", "password": "secret1"})
        me = client.get("/api/auth/me", headers=auth)

        assert login.status_code == 200
        assert login.json()["user"]["email"] == "lee@example.com"
        assert me.json()["language"] == "ko"

    def test_wrong_password(self, client, auth):
        response = client.post("/api/auth/login", json={"email": "lee@example.com", "password": "wrong1"})

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"

    def test_duplicate_registration(self, client, auth):
        response = client.post("/api/auth/register", json={"email": "lee@example.com", "password": "secret1"})

        assert response.status_code == 409
        assert response.json()["error"] == "account_exists"

    def test_missing_and_bad_tokens(self, client):
        missing = client.get("/api/auth/me")

        assert missing.status_code == 401
        assert missing.json()["error"] == "unauthorized"
        assert client.get("/api/auth/me", headers={"Authorization": "Bearer nope"}).status_code == 401

    def test_profile_update(self, client, auth):
        response = client.patch("/api/auth/profile", json={"language": "en"}, headers=auth)

        assert response.status_code == 200
        assert response.json()["language"] == "en"


class TestLedger:

    def test_deposit_send_and_history(self, client, auth):
        deposit = client.post("/api/ledger/deposit", json={"amount": "1"}, headers=auth)
        send = client.post("/api/ledger/send", json={"to_address": "0xfriend", "amount": "0.4"}, headers=auth)
        balance = client.get("/api/ledger/balance", headers=auth)
        history = client.get("/api/transactions", headers=auth)

        assert deposit.status_code == 200, deposit.text
        assert Decimal(send.json()["new_balance"]) == Decimal("0.6")
        assert Decimal(balance.json()["balance"]) == Decimal("0.6")
        assert balance.json()["source"] == "ledger"
        assert [t["transaction_type"] for t in history.json()["transactions"]] == ["send", "receive"]

    def test_overdraft(self, client, auth):
        client.post("/api/ledger/deposit", json={"amount": "3"}, headers=auth)

        response = client.post("/api/ledger/send", json={"to_address": "0xfriend", "amount": "5"}, headers=auth)
        balance = client.get("/api/ledger/balance", headers=auth)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "insufficient_balance"
        assert Decimal(body["current_balance"]) == Decimal(3)
        assert Decimal(body["requested_amount"]) == Decimal(5)
        assert Decimal(balance.json()["balance"]) == Decimal(3)

    def test_unknown_address_falls_back_to_chain(self, client, auth):
        response = client.get("/api/ledger/balance", params={"address": "0xunknown"}, headers=auth)

        assert response.json()["source"] == "chain"
        assert Decimal(response.json()["balance"]) == Decimal(0)

    def test_invalid_amount(self, client, auth):
        response = client.post("/api/ledger/deposit", json={"amount": "-1"}, headers=auth)

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"

    def test_transactions_are_private(self, client, auth):
        client.post("/api/ledger/deposit", json={"amount": "1"}, headers=auth)
        transaction_id = client.get("/api/transactions", headers=auth).json()["transactions"][0]["id"]
        other = _register(client, "park@example.com")

        assert client.get(f"/api/transactions/{transaction_id}", headers=auth).status_code == 200
        assert client.get(f"/api/transactions/{transaction_id}", headers=other).status_code == 404


class TestTaxRefund:

    def test_estimate(self, client):
        response = client.post("/api/tax-refund/estimate", json={"gross_income": 10_000_000, "tax_paid": 1_000_000})

        body = response.json()
        assert Decimal(body["tax_rate"]) == Decimal("0.06")
        assert Decimal(body["refund_amount"]) == Decimal("400000")
        assert body["eligibility_score"] == 90
        assert len(body["required_documents"]) == 3

    def test_application_lifecycle(self, client, auth):
        submitted = client.post(
            "/api/tax-refund/submit",
            json={"gross_income": 10_000_000, "tax_paid": 1_000_000, "tax_year": 2025},
            headers=auth,
        )
        refund_id = submitted.json()["id"]

        approved = client.post(f"/api/tax-refund/{refund_id}/process", json={"action": "approve"}, headers=auth)
        again = client.post(f"/api/tax-refund/{refund_id}/process", json={"action": "approve"}, headers=auth)
        completed = client.post(f"/api/tax-refund/{refund_id}/complete", json={}, headers=auth)
        status = client.get(f"/api/tax-refund/{refund_id}/status", headers=auth)
        statistics = client.get("/api/tax-refund/statistics", headers=auth)
        history = client.get("/api/tax-refund/history", headers=auth)

        assert submitted.status_code == 201
        assert approved.json()["status"] == "approved"
        assert again.status_code == 409
        assert again.json()["error"] == "invalid_transition"
        assert completed.json()["status"] == "completed"
        assert all(step["completed"] for step in status.json()["steps"])
        assert Decimal(statistics.json()["success_rate"]) == Decimal(100)
        assert history.json()["total"] == 1

    def test_malformed_numbers_are_invalid_arguments(self, client):
        response = client.post("/api/tax-refund/estimate", json={"gross_income": "lots", "tax_paid": 0})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"

    def test_oversized_application_is_an_invalid_argument(self, client, auth):
        response = client.post(
            "/api/tax-refund/submit",
            json={"gross_income": "1e17", "tax_paid": "0"},
            headers=auth,
        )
        history = client.get("/api/tax-refund/history", headers=auth)

        assert response.status_code == 400
        assert response.json()["field"] == "gross_income"
        assert history.json()["total"] == 0

    def test_missing_refund(self, client, auth):
        response = client.post("/api/tax-refund/999/process", json={"action": "approve"}, headers=auth)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestExchangeVanNetwork:

    def test_rates_and_convert(self, client):
        rates = client.get("/api/exchange/rates")
        converted = client.post(
            "/api/exchange/convert", json={"amount": "10000", "from_currency": "KRW", "to_currency": "KWAN"}
        )

        assert len(rates.json()["rates"]) == 6
        assert Decimal(converted.json()["amount"]) == Decimal("9.98")

    def test_van_payment(self, client, auth):
        created = client.post("/api/van/process", json={"amount": 15000, "merchant_id": "M-1"}, headers=auth)
        history = client.get("/api/van/history", params={"status": "all"}, headers=auth)

        assert created.status_code == 201
        assert created.json()["status"] == "approved"
        assert created.json()["van_tx_id"].startswith("VAN")
        assert history.json()["total"] == 1

    def test_price_status_and_wallet(self, client, auth):
        price = client.get("/api/network/price")
        status = client.get("/api/network/status")
        wallet = client.get("/api/network/wallet-address", headers=auth)
        rpc = client.post("/api/network/rpc", json={"method": "eth_chainId"}, headers=auth)

        assert Decimal(price.json()["price_usd"]) == Decimal("0.001")
        assert status.json()["is_connected"] is True
        assert wallet.json()["address"] == "0xb8c1f75bb7550bb51039c64e92c78d15ad9dbbe1"
        assert rpc.json()["result"] == "0x59d"

    def test_document_extraction(self, client, auth):
        response = client.post(
            "/api/documents/extract",
            json={"document_type": "passport", "content": "Surname: KIM"},
            headers=auth,
        )

        assert response.json()["fields"] == {"surname": "KIM"}
        assert response.json()["verified"] is False


class TestUserSettings:

    def test_language_settings(self, client, auth):
        before = client.get("/api/user/language-settings", headers=auth)
        updated = client.post("/api/user/language-settings", json={"language": "ja", "country": "jp"}, headers=auth)
        rejected = client.post("/api/user/language-settings", json={"language": "xx"}, headers=auth)

        assert before.json()["language"] == "ko"
        assert before.json()["supported_languages"] == ["ko", "en", "ja", "zh"]
        assert updated.status_code == 200
        assert updated.json()["language"] == "ja"
        assert updated.json()["country"] == "JP"
        assert rejected.status_code == 400
        assert client.get("/api/auth/me", headers=auth).json()["language"] == "ja"


class TestIdentityDocumentsContracts:

    def test_did_lifecycle(self, client, auth):
        user_id = client.get("/api/auth/me", headers=auth).json()["id"]
        created = client.post("/api/did/create", json={"public_key": "0x02" + "11" * 32}, headers=auth)
        duplicate = client.post("/api/did/create", json={"public_key": "0x02" + "11" * 32}, headers=auth)
        listed = client.get(f"/api/did/user/{user_id}", headers=auth)
        did_id = created.json()["id"]
        credential = client.post(
            f"/api/did/{did_id}/credentials",
            json={"credential_type": "passport", "claims": {"name": "Lee"}},
            headers=auth,
        )

        assert created.status_code == 201
        assert created.json()["status"] == "active"
        assert created.json()["did_identifier"].startswith("did:xphere:")
        assert duplicate.status_code == 409
        assert duplicate.json()["error"] == "did_exists"
        assert listed.json()["total"] == 1
        assert credential.status_code == 201
        assert credential.json()["credential_data"]["credentialSubject"]["name"] == "Lee"

    def test_dids_of_other_users_are_hidden(self, client, auth):
        created = client.post("/api/did/create", json={"public_key": "0x02" + "11" * 32}, headers=auth)
        other = _register(client, "park@example.com")
        other_id = client.get("/api/auth/me", headers=other).json()["id"]

        assert client.get(f"/api/did/{created.json()['id']}", headers=other).status_code == 404
        assert client.get(f"/api/did/user/{other_id}", headers=auth).status_code == 404

    def test_document_signing(self, client, auth):
        created = client.post(
            "/api/documents",
            json={"title": "Lease", "document_type": "contract", "content": "Rent is due monthly."},
            headers=auth,
        )
        document_id = created.json()["id"]
        other = _register(client, "park@example.com")
        signed = client.post(f"/api/documents/{document_id}/sign", json={}, headers=other)
        again = client.post(f"/api/documents/{document_id}/sign", json={}, headers=other)
        finalized = client.post(f"/api/documents/{document_id}/finalize", headers=auth)
        mine = client.get("/api/documents/user", headers=auth)

        assert created.status_code == 201
        assert created.json()["status"] == "draft"
        assert signed.json()["status"] == "signed"
        assert len(signed.json()["signatures"]) == 1
        assert again.status_code == 409
        assert finalized.json()["status"] == "finalized"
        assert mine.json()["total"] == 1
        assert client.get(f"/api/documents/{document_id}", headers=other).status_code == 200
        assert client.get("/api/documents/999", headers=auth).status_code == 404

    def test_contract_deployment(self, client, auth):
        templates = client.get("/api/contracts/templates", headers=auth)
        deployed = client.post(
            "/api/contracts/deploy",
            json={"contract_name": "DocumentRegistry", "gas_limit": 500000},
            headers=auth,
        )
        bad = client.post(
            "/api/contracts/deploy",
            json={"contract_name": "SuperWalletToken", "constructor_args": []},
            headers=auth,
        )
        listed = client.get("/api/contracts/deployments", headers=auth)
        other = _register(client, "park@example.com")

        assert {t["name"] for t in templates.json()} == {"SuperWalletToken", "DocumentRegistry"}
        assert deployed.status_code == 201
        assert deployed.json()["status"] == "deployed"
        assert deployed.json()["gas_used"] == 400000
        assert bad.status_code == 400
        assert bad.json()["field"] == "constructor_args"
        assert listed.json()["total"] == 1
        assert client.get(f"/api/contracts/deployments/{deployed.json()['id']}", headers=other).status_code == 404
