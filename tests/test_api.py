"""
Tailors Backend - CRUD API Tests
================================

What:  End-to-end requests against a bootstrapped SQLite database.

What we test:
    ✅ Customer create / list / search / update / delete
    ✅ Measurements and orders tied to a live customer
    ✅ Order payment recording and derived balance
    ✅ Updates answer with the stored (rounded) values
    ✅ Search treats % and _ literally
    ✅ Customer delete cascades through the API
"""

from decimal import Decimal

import pytest


async def _create_customer(client, headers, **overrides):
    payload = {"name": "Asha Patil", "phone": "9820012345", "address": "Shivaji Nagar, Pune"}
    payload.update(overrides)
    response = await client.post("/customers", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_order(client, headers, customer_id, **overrides):
    payload = {
        "customer_id": customer_id,
        "dress_type": "Sherwani",
        "price": "8500.00",
        "delivery_date": "2026-12-01",
    }
    payload.update(overrides)
    response = await client.post("/orders", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCustomersApi:

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client, auth_headers):
        created = await _create_customer(client, auth_headers)

        assert created["id"] > 0
        assert created["created_at"] is not None

        response = await client.get(f"/customers/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Asha Patil"

    @pytest.mark.asyncio
    async def test_list_and_search(self, client, auth_headers):
        await _create_customer(client, auth_headers, name="Asha Patil")
        await _create_customer(client, auth_headers, name="Ravi Deshmukh", phone="9811100000")

        everyone = await client.get("/customers", headers=auth_headers)
        by_name = await client.get("/customers", params={"search": "ravi"}, headers=auth_headers)
        by_phone = await client.get("/customers", params={"search": "98200"}, headers=auth_headers)

        assert len(everyone.json()) == 2
        assert [c["name"] for c in by_name.json()] == ["Ravi Deshmukh"]
        assert [c["name"] for c in by_phone.json()] == ["Asha Patil"]

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, client, auth_headers):
        await _create_customer(client, auth_headers, name="Asha Patil")
        await _create_customer(client, auth_headers, name="Sale_50% Boutique", phone="9811100000")

        percent = await client.get("/customers", params={"search": "%"}, headers=auth_headers)
        underscore = await client.get("/customers", params={"search": "_"}, headers=auth_headers)
        exact = await client.get("/customers", params={"search": "e_50%"}, headers=auth_headers)

        assert [c["name"] for c in percent.json()] == ["Sale_50% Boutique"]
        assert [c["name"] for c in underscore.json()] == ["Sale_50% Boutique"]
        assert [c["name"] for c in exact.json()] == ["Sale_50% Boutique"]

    @pytest.mark.asyncio
    async def test_update(self, client, auth_headers):
        created = await _create_customer(client, auth_headers)

        response = await client.put(
            f"/customers/{created['id']}",
            json={"phone": "9000000000"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "9000000000"
        assert response.json()["name"] == created["name"]

    @pytest.mark.asyncio
    async def test_empty_update_is_400(self, client, auth_headers):
        created = await _create_customer(client, auth_headers)

        response = await client.put(f"/customers/{created['id']}", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"

    @pytest.mark.asyncio
    async def test_missing_customer_is_404(self, client, auth_headers):
        response = await client.get("/customers/4040", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "customer with ID '4040' was not found"

    @pytest.mark.asyncio
    async def test_delete_cascades(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        await client.post(
            "/measurements",
            json={"customer_id": customer["id"], "chest": 40, "waist": 34, "shoulder": 18, "length": 42},
            headers=auth_headers,
        )
        order = await _create_order(client, auth_headers, customer["id"])

        response = await client.delete(f"/customers/{customer['id']}", headers=auth_headers)
        assert response.status_code == 204

        measurements = await client.get(
            "/measurements", params={"customer_id": customer["id"]}, headers=auth_headers
        )
        gone = await client.get(f"/orders/{order['id']}", headers=auth_headers)
        assert measurements.json() == []
        assert gone.status_code == 404


class TestMeasurementsApi:

    @pytest.mark.asyncio
    async def test_create_update_delete(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)

        created = await client.post(
            "/measurements",
            json={"customer_id": customer["id"], "chest": "40.5", "waist": 34, "shoulder": 18, "length": 42},
            headers=auth_headers,
        )
        assert created.status_code == 201
        measurement = created.json()
        assert Decimal(measurement["chest"]) == Decimal("40.5")

        updated = await client.put(
            f"/measurements/{measurement['id']}",
            json={"waist": "33.25"},
            headers=auth_headers,
        )
        assert updated.status_code == 200
        assert Decimal(updated.json()["waist"]) == Decimal("33.25")

        deleted = await client.delete(f"/measurements/{measurement['id']}", headers=auth_headers)
        assert deleted.status_code == 204

    @pytest.mark.asyncio
    async def test_update_returns_stored_values(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        created = await client.post(
            "/measurements",
            json={"customer_id": customer["id"], "chest": 40, "waist": 34, "shoulder": 18, "length": 42},
            headers=auth_headers,
        )
        measurement_id = created.json()["id"]

        updated = await client.put(f"/measurements/{measurement_id}", json={"chest": 41.5}, headers=auth_headers)
        fetched = await client.get(f"/measurements/{measurement_id}", headers=auth_headers)

        assert updated.json()["chest"] == fetched.json()["chest"] == "41.50"

    @pytest.mark.asyncio
    async def test_unknown_customer_is_404(self, client, auth_headers):
        response = await client.post(
            "/measurements",
            json={"customer_id": 999, "chest": 40, "waist": 34, "shoulder": 18, "length": 42},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert "customer" in response.json()["message"]


class TestOrdersApi:

    @pytest.mark.asyncio
    async def test_defaults_on_create(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)

        order = await _create_order(client, auth_headers, customer["id"])

        assert order["status"] == "Pending"
        assert Decimal(order["paid_amount"]) == 0
        assert Decimal(order["balance_due"]) == Decimal("8500")
        assert order["trial_date"] is None
        assert order["payment_mode"] is None

    @pytest.mark.asyncio
    async def test_record_payment(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        order = await _create_order(client, auth_headers, customer["id"])

        response = await client.patch(
            f"/orders/{order['id']}/payment",
            json={"paid_amount": "3000", "payment_mode": "Cash", "payment_date": "2026-10-19"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["paid_amount"]) == Decimal("3000")
        assert body["payment_mode"] == "Cash"
        assert body["payment_date"] == "2026-10-19"
        assert Decimal(body["balance_due"]) == Decimal("5500")

    @pytest.mark.asyncio
    async def test_negative_payment_is_422(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        order = await _create_order(client, auth_headers, customer["id"])

        response = await client.patch(
            f"/orders/{order['id']}/payment",
            json={"paid_amount": "-10"},
            headers=auth_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_filter_by_status_and_customer(self, client, auth_headers):
        asha = await _create_customer(client, auth_headers)
        ravi = await _create_customer(client, auth_headers, name="Ravi")
        await _create_order(client, auth_headers, asha["id"])
        delivered = await _create_order(client, auth_headers, ravi["id"], status="Delivered")

        by_status = await client.get("/orders", params={"status": "Delivered"}, headers=auth_headers)
        by_customer = await client.get("/orders", params={"customer_id": asha["id"]}, headers=auth_headers)

        assert [o["id"] for o in by_status.json()] == [delivered["id"]]
        assert all(o["customer_id"] == asha["id"] for o in by_customer.json())
        assert len(by_customer.json()) == 1

    @pytest.mark.asyncio
    async def test_update_status(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        order = await _create_order(client, auth_headers, customer["id"], trial_date="2026-11-20")

        response = await client.put(
            f"/orders/{order['id']}",
            json={"status": "Ready", "trial_date": None},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Ready"
        assert response.json()["trial_date"] is None

    @pytest.mark.asyncio
    async def test_update_returns_stored_values(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        order = await _create_order(client, auth_headers, customer["id"])

        updated = await client.put(f"/orders/{order['id']}", json={"price": 20.5}, headers=auth_headers)
        fetched = await client.get(f"/orders/{order['id']}", headers=auth_headers)

        assert updated.status_code == 200
        assert updated.json()["price"] == fetched.json()["price"] == "20.50"

    @pytest.mark.asyncio
    async def test_payment_returns_stored_values(self, client, auth_headers):
        customer = await _create_customer(client, auth_headers)
        order = await _create_order(client, auth_headers, customer["id"])

        paid = await client.patch(
            f"/orders/{order['id']}/payment", json={"paid_amount": 100.5}, headers=auth_headers
        )
        fetched = await client.get(f"/orders/{order['id']}", headers=auth_headers)

        assert paid.json()["paid_amount"] == fetched.json()["paid_amount"] == "100.50"
