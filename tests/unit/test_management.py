"""Unit tests for staff management and administrative status changes."""

from unittest.mock import AsyncMock

import pytest

from backoffice.auth.security import verify_password
from backoffice.errors import (
    BackofficeError,
    DuplicateAccount,
    InvalidStatusTransition,
    RecordNotFound,
    UnknownStatus,
    WeakPassword,
)
from backoffice.filters.staff import StaffFilter
from backoffice.models.enums import AccountStatus, PrincipalType
from backoffice.services.management import ManagementService


@pytest.fixture()
def management(store) -> ManagementService:
    return ManagementService(store, bcrypt_rounds=4)


class TestCreateStaff:
    @pytest.mark.asyncio
    async def test_always_assigns_staff_role(self, management, store):
        staff = await management.create_staff("newbie", "Passw0rd!", "New Bie")
        assert staff.role_id == store.roles["staff"].id
        assert staff.status == "active"
        assert verify_password("Passw0rd!", staff.hashed_password)

    @pytest.mark.asyncio
    async def test_weak_password(self, management, store):
        with pytest.raises(WeakPassword):
            await management.create_staff("newbie", "password", None)
        assert store.staff == {}

    @pytest.mark.asyncio
    async def test_duplicate_username(self, management, staff_member):
        with pytest.raises(DuplicateAccount):
            await management.create_staff("teller", "Passw0rd!", None)

    @pytest.mark.asyncio
    async def test_missing_role_table_entry(self, management, store):
        del store.roles["staff"]
        with pytest.raises(BackofficeError, match="Can't find staff role!") as exc_info:
            await management.create_staff("newbie", "Passw0rd!", None)
        assert exc_info.value.status_code == 500


class TestStaffQueries:
    @pytest.mark.asyncio
    async def test_admins_are_invisible(self, management, admin, staff_member):
        staffs, total = await management.list_staff(StaffFilter())
        assert [s.id for s in staffs] == [staff_member.id]
        assert total == 1

        with pytest.raises(RecordNotFound, match="Can't find that staff!"):
            await management.get_staff(admin.id)

    @pytest.mark.asyncio
    async def test_filter_and_paginate(self, management, store):
        for name in ("anna", "annabel", "bert"):
            store.add_staff(username=name)
        staffs, total = await management.list_staff(
            StaffFilter(username__like="anna"), page=1, size=1
        )
        assert total == 2
        assert len(staffs) == 1

    @pytest.mark.asyncio
    async def test_get_customer_not_found(self, management):
        with pytest.raises(RecordNotFound, match="Can't find that customer!") as exc_info:
            await management.get_customer("missing")
        assert exc_info.value.status_code == 404


class TestStatusChanges:
    @pytest.mark.asyncio
    async def test_block_customer(self, management, customer):
        updated = await management.change_customer_status(customer.id, "blocked")
        assert updated.status == "blocked"

    @pytest.mark.asyncio
    async def test_deactivate_staff(self, management, staff_member):
        updated = await management.change_staff_status(staff_member.id, "inactive")
        assert updated.status == "inactive"

    @pytest.mark.asyncio
    async def test_unknown_status_rejected_before_lookup(self):
        store = AsyncMock()
        with pytest.raises(UnknownStatus):
            await ManagementService(store).change_customer_status("c-1", "frozen")
        store.find_customer.assert_not_awaited()
        store.update_principal_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_same_status_is_a_no_op(self):
        store = AsyncMock()
        record = type("Record", (), {"id": "c-1", "status": "active"})()
        store.find_customer.return_value = record

        assert await ManagementService(store).change_customer_status("c-1", "active") is record
        store.update_principal_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_deleted_customer_cannot_be_revived(self, management, customer):
        await management.change_customer_status(customer.id, "deleted")
        with pytest.raises(RecordNotFound):
            await management.change_customer_status(customer.id, "active")

    @pytest.mark.asyncio
    async def test_deleted_record_is_terminal(self):
        store = AsyncMock()
        store.find_managed_staff.return_value = type(
            "Record", (), {"id": "s-1", "status": "deleted"}
        )()
        with pytest.raises(InvalidStatusTransition):
            await ManagementService(store).change_staff_status("s-1", "active")

    @pytest.mark.asyncio
    async def test_admin_status_cannot_be_changed(self, management, admin):
        with pytest.raises(RecordNotFound):
            await management.change_staff_status(admin.id, "blocked")
        assert admin.status == AccountStatus.active

    @pytest.mark.asyncio
    async def test_store_receives_validated_enum(self):
        store = AsyncMock()
        store.find_managed_staff.return_value = type(
            "Record", (), {"id": "s-1", "status": "active"}
        )()
        await ManagementService(store).change_staff_status("s-1", "blocked")
        store.update_principal_status.assert_awaited_once_with(
            PrincipalType.staff, "s-1", AccountStatus.blocked
        )

