"""Integration tests for staff and admin management endpoints."""

import pytest

from backoffice.models.enums import PrincipalType
from tests.conftest import auth_headers


@pytest.mark.asyncio
class TestCustomerAdministration:
    async def test_staff_reads_customer(self, staff_client, customer):
        resp = await staff_client.get(f"/api/v1/staff/customers/{customer.id}")
        assert resp.status_code == 200
        assert resp.json()["data"]["username"] == "alice"

    async def test_missing_customer(self, staff_client):
        resp = await staff_client.get("/api/v1/staff/customers/missing")
        assert resp.status_code == 404
        assert resp.json() == {"status": "error", "message": "Can't find that customer!"}

    async def test_block_customer_locks_them_out(self, staff_client, customer, tokens):
        resp = await staff_client.post(
            "/api/v1/staff/customers/status", json={"id": customer.id, "status": "blocked"}
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "blocked"

        me = await staff_client.get(
            "/api/v1/customers/me",
            headers=auth_headers(tokens, PrincipalType.customer, customer.id),
        )
        assert me.status_code == 403
        assert me.json()["message"] == "Your account is blocked!"

    async def test_unknown_status(self, staff_client, customer):
        resp = await staff_client.post(
            "/api/v1/staff/customers/status", json={"id": customer.id, "status": "frozen"}
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Status is not valid!"
        assert customer.status == "active"

    async def test_customer_cannot_change_statuses(self, customer_client, customer):
        resp = await customer_client.post(
            "/api/v1/staff/customers/status", json={"id": customer.id, "status": "active"}
        )
        assert resp.status_code == 403


@pytest.mark.asyncio
class TestStaffAdministration:
    async def test_list_staffs_hides_admins(self, admin_client, staff_member):
        resp = await admin_client.get("/api/v1/admin/staffs")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total"] == 1
        assert [s["username"] for s in data["items"]] == ["teller"]

    async def test_list_staffs_filter(self, admin_client, store):
        store.add_staff(username="anna")
        store.add_staff(username="bert")
        resp = await admin_client.get("/api/v1/admin/staffs", params={"username__like": "ann"})
        assert resp.status_code == 200
        assert [s["username"] for s in resp.json()["data"]["items"]] == ["anna"]

    async def test_list_staffs_rejects_other_sort_keys(self, admin_client, staff_member):
        resp = await admin_client.get(
            "/api/v1/admin/staffs", params={"order_by": "-hashed_password"}
        )
        assert resp.status_code == 400
        assert "hashed_password" in resp.json()["message"]

    async def test_create_staff(self, admin_client):
        resp = await admin_client.post(
            "/api/v1/admin/staffs",
            json={"username": "newbie", "password": "Passw0rd!", "name": "New Bie"},
        )
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["username"] == "newbie"
        assert data["role"] == {"description": "staff"}

    async def test_create_staff_weak_password(self, admin_client):
        resp = await admin_client.post(
            "/api/v1/admin/staffs", json={"username": "newbie", "password": "password"}
        )
        assert resp.status_code == 400

    async def test_create_duplicate_staff(self, admin_client, staff_member):
        resp = await admin_client.post(
            "/api/v1/admin/staffs", json={"username": "teller", "password": "Passw0rd!"}
        )
        assert resp.status_code == 400

    async def test_get_staff(self, admin_client, staff_member):
        resp = await admin_client.get(f"/api/v1/admin/staffs/{staff_member.id}")
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == staff_member.id

    async def test_admin_not_visible(self, admin_client, admin):
        resp = await admin_client.get(f"/api/v1/admin/staffs/{admin.id}")
        assert resp.status_code == 404

    async def test_deactivate_staff(self, admin_client, staff_member):
        resp = await admin_client.post(
            "/api/v1/admin/staffs/status", json={"id": staff_member.id, "status": "inactive"}
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "inactive"

    async def test_staff_role_forbidden_on_admin_routes(self, staff_client):
        resp = await staff_client.get("/api/v1/admin/staffs")
        assert resp.status_code == 403
        assert resp.json()["status"] == "error"

    async def test_deleted_staff_loses_access(self, client, store, tokens, admin, staff_member):
        staff_headers = auth_headers(tokens, PrincipalType.staff, staff_member.id)
        admin_headers = auth_headers(tokens, PrincipalType.staff, admin.id)

        resp = await client.post(
            "/api/v1/admin/staffs/status",
            json={"id": staff_member.id, "status": "deleted"},
            headers=admin_headers,
        )
        assert resp.status_code == 200

        me = await client.get("/api/v1/staff/me", headers=staff_headers)
        assert me.status_code == 401

    async def test_audit_log_written(self, admin_client, staff_member, caplog):
        caplog.set_level("INFO", logger="audit")
        await admin_client.post(
            "/api/v1/admin/staffs/status", json={"id": staff_member.id, "status": "blocked"}
        )
        assert "AUDIT action=update_staff_status principal=staff:root role=admin" in caplog.text
