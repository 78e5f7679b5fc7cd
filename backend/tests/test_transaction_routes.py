"""
Transaction Ledger Backend — /transactions Endpoint Tests
==========================================================

What we test:
    ✅ Create: 201 with the type reference checked first
    ✅ Create: 400 listing every violation, 404 for an unknown type
    ✅ List / Get: type resolved to {id, name, bank}, newest first
    ✅ Update: partial semantics, type re-checked only when supplied
    ✅ Delete: 200 with null data, then 404
    ✅ Malformed JSON, non-object bodies and non-finite numbers → 400
    ✅ Long strings are stored as sent
    ✅ Store and commit failures become a 500 envelope
"""

import json
import uuid
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from txledger.exceptions import StoreError
from txledger.services.transaction_service import transaction_service


@pytest.fixture
def bound_payload(transaction_payload, bca_type):
    transaction_payload["transaction_type"] = bca_type["id"]
    return transaction_payload


@pytest_asyncio.fixture
async def stored_transaction(client, bound_payload):
    response = await client.post("/transactions/", json=bound_payload)
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateTransaction:

    @pytest.mark.asyncio
    async def test_create(self, client, bound_payload, bca_type):
        response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 201
        body = response.json()
        assert body["code"] == 201
        assert body["status"] == "success"
        assert body["message"] == "Transaction created successfully"

        data = body["data"]
        assert data["mid"] == "000071000123"
        assert data["transaction_type"] == bca_type["id"]
        assert data["amount"] == 1500000
        assert data["date"] == "2024-03-15"
        uuid.UUID(data["id"])

    @pytest.mark.asyncio
    async def test_optional_fields_may_be_absent(self, client, bca_type):
        response = await client.post(
            "/transactions/",
            json={
                "mid": "M1",
                "transaction_type": bca_type["id"],
                "amount": 0,
                "net_amount": 0,
                "status": "pending",
            },
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["tid"] is None
        assert data["date"] is None
        assert data["difference"] is None

    @pytest.mark.asyncio
    async def test_missing_mid(self, client, bound_payload):
        del bound_payload["mid"]
        response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 400
        details = response.json()["data"]["details"]
        assert [(d["field"], d["type"]) for d in details] == [("mid", "required")]

    @pytest.mark.asyncio
    async def test_every_violation_reported(self, client, bound_payload):
        bound_payload.update(amount=-1, net_amount="10", date="2024-03-15", mid="")
        response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 400
        types = {d["field"]: d["type"] for d in response.json()["data"]["details"]}
        assert types == {
            "mid": "stringEmpty",
            "amount": "numberMin",
            "net_amount": "number",
            "date": "datePattern",
        }

    @pytest.mark.asyncio
    async def test_validation_runs_before_type_check(self, client, transaction_payload):
        transaction_payload["transaction_type"] = str(uuid.uuid4())
        transaction_payload["status"] = 5
        response = await client.post("/transactions/", json=transaction_payload)
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("type_id", [str(uuid.uuid4()), "nope"])
    async def test_unknown_type(self, client, transaction_payload, type_id):
        transaction_payload["transaction_type"] = type_id
        response = await client.post("/transactions/", json=transaction_payload)
        assert response.status_code == 404
        assert response.json()["data"]["error"] == "Transaction type not found"

        listing = await client.get("/transactions/list")
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_malformed_json(self, client):
        response = await client.post(
            "/transactions/",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["data"]["details"][0]["type"] == "json"

    @pytest.mark.asyncio
    async def test_non_object_body(self, client):
        response = await client.post("/transactions/", json=["mid"])
        assert response.status_code == 400
        assert response.json()["data"]["details"][0]["type"] == "object"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN", "1e400"])
    async def test_non_finite_amount(self, client, bound_payload, literal):
        del bound_payload["amount"]
        body = json.dumps(bound_payload)[:-1] + f', "amount": {literal}}}'
        response = await client.post(
            "/transactions/",
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        details = response.json()["data"]["details"]
        assert [(d["field"], d["type"]) for d in details] == [("amount", "number")]

        listing = await client.get("/transactions/list")
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_long_strings_round_trip(self, client, bound_payload):
        bound_payload.update(mid="7" * 300, status="s" * 101, batch="b" * 500)
        response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["mid"] == "7" * 300
        assert data["status"] == "s" * 101
        assert data["batch"] == "b" * 500


class TestReadTransactions:

    @pytest.mark.asyncio
    async def test_get_resolves_type(self, client, stored_transaction, bca_type):
        response = await client.get(f"/transactions/{stored_transaction['id']}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["transaction_type"] == {
            "id": bca_type["id"],
            "name": "BCA (Debit & Credit)",
            "bank": "BCA",
        }
        assert data["date"] == "2024-03-15"

    @pytest.mark.asyncio
    async def test_list_newest_first(self, client, bound_payload):
        ids = []
        for mid in ("M-1", "M-2", "M-3"):
            bound_payload["mid"] = mid
            response = await client.post("/transactions/", json=bound_payload)
            ids.append(response.json()["data"]["id"])

        response = await client.get("/transactions/list")
        assert response.status_code == 200
        data = response.json()["data"]
        assert [t["id"] for t in data] == list(reversed(ids))
        assert all(t["transaction_type"]["name"] == "BCA (Debit & Credit)" for t in data)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("transaction_id", [str(uuid.uuid4()), "12345"])
    async def test_get_not_found(self, client, transaction_id):
        response = await client.get(f"/transactions/{transaction_id}")
        assert response.status_code == 404
        assert response.json()["data"]["error"] == "Transaction not found"


class TestUpdateTransaction:

    @pytest.mark.asyncio
    async def test_partial_update(self, client, stored_transaction):
        response = await client.put(
            f"/transactions/{stored_transaction['id']}",
            json={"status": "refunded", "date": "12/31/2023"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "refunded"
        assert data["date"] == "2023-12-31"
        assert data["mid"] == stored_transaction["mid"]
        assert data["amount"] == stored_transaction["amount"]

    @pytest.mark.asyncio
    async def test_empty_body_leaves_record_unchanged(self, client, stored_transaction):
        response = await client.put(f"/transactions/{stored_transaction['id']}", json={})
        assert response.status_code == 200
        data = response.json()["data"]
        for field in ("mid", "tid", "batch", "amount", "status", "date", "transaction_type"):
            assert data[field] == stored_transaction[field]

    @pytest.mark.asyncio
    async def test_required_field_cannot_be_nulled(self, client, stored_transaction):
        response = await client.put(
            f"/transactions/{stored_transaction['id']}", json={"mid": None}
        )
        assert response.status_code == 400
        details = response.json()["data"]["details"]
        assert [(d["field"], d["type"]) for d in details] == [("mid", "required")]

    @pytest.mark.asyncio
    async def test_change_type(self, client, stored_transaction):
        other = await client.post("/transactions-type", json={"name": "Mandiri"})
        other_id = other.json()["data"]["id"]

        response = await client.put(
            f"/transactions/{stored_transaction['id']}", json={"transaction_type": other_id}
        )
        assert response.status_code == 200
        assert response.json()["data"]["transaction_type"] == other_id

        detail = await client.get(f"/transactions/{stored_transaction['id']}")
        assert detail.json()["data"]["transaction_type"]["name"] == "Mandiri"

    @pytest.mark.asyncio
    async def test_unknown_type(self, client, stored_transaction):
        response = await client.put(
            f"/transactions/{stored_transaction['id']}",
            json={"transaction_type": str(uuid.uuid4())},
        )
        assert response.status_code == 404
        assert response.json()["data"]["error"] == "Transaction type not found"

        detail = await client.get(f"/transactions/{stored_transaction['id']}")
        assert detail.json()["data"]["transaction_type"]["bank"] == "BCA"

    @pytest.mark.asyncio
    async def test_unknown_transaction(self, client):
        response = await client.put(f"/transactions/{uuid.uuid4()}", json={"status": "x"})
        assert response.status_code == 404
        assert response.json()["data"]["error"] == "Transaction not found"


class TestDeleteTransaction:

    @pytest.mark.asyncio
    async def test_delete_then_gone(self, client, stored_transaction):
        response = await client.delete(f"/transactions/{stored_transaction['id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Transaction deleted successfully"
        assert body["data"] is None

        response = await client.get(f"/transactions/{stored_transaction['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client):
        response = await client.delete(f"/transactions/{uuid.uuid4()}")
        assert response.status_code == 404


class TestStoreFailures:

    @pytest.mark.asyncio
    async def test_create(self, client, bound_payload):
        with patch.object(
            transaction_service.store,
            "create",
            AsyncMock(side_effect=StoreError("value too long for type character varying")),
        ):
            response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["data"]["error"] == "value too long for type character varying"

    @pytest.mark.asyncio
    async def test_list(self, client):
        with patch.object(
            transaction_service.store,
            "find_all_sorted",
            AsyncMock(side_effect=StoreError("connection refused")),
        ):
            response = await client.get("/transactions/list")
        assert response.status_code == 500
        assert response.json()["message"] == "connection refused"

    @pytest.mark.asyncio
    async def test_type_lookup_during_create(self, client, bound_payload):
        with patch.object(
            transaction_service.type_store,
            "find_by_id",
            AsyncMock(side_effect=StoreError("connection reset by peer")),
        ):
            response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 500
        assert response.json()["message"] == "connection reset by peer"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_single_record_operations(self, client, stored_transaction, method):
        attribute = {"GET": "find_by_id", "PUT": "find_by_id", "DELETE": "delete_by_id"}[method]
        with patch.object(
            transaction_service.store,
            attribute,
            AsyncMock(side_effect=StoreError("server closed the connection")),
        ):
            response = await client.request(
                method, f"/transactions/{stored_transaction['id']}", json={"status": "x"}
            )
        assert response.status_code == 500
        assert response.json()["message"] == "server closed the connection"

    @pytest.mark.asyncio
    async def test_failed_commit_is_reported_and_rolled_back(self, client, bound_payload):
        with patch.object(
            AsyncSession,
            "commit",
            AsyncMock(
                side_effect=OperationalError("COMMIT", {}, Exception("could not serialize access"))
            ),
        ):
            response = await client.post("/transactions/", json=bound_payload)
        assert response.status_code == 500
        assert response.json()["message"] == "could not serialize access"

        listing = await client.get("/transactions/list")
        assert listing.json()["data"] == []
