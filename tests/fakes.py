"""In-memory :class:`PrincipalStore` used by unit and API tests."""

import asyncio
import uuid
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

from backoffice.errors import DuplicateAccount
from backoffice.models.enums import AccountStatus, PrincipalType, RoleName


class InMemoryPrincipalStore:
    """Dict-backed store with the same uniqueness rules as the database."""

    def __init__(self) -> None:
        self.customers: dict[str, SimpleNamespace] = {}
        self.staff: dict[str, SimpleNamespace] = {}
        self.identities: dict[str, SimpleNamespace] = {}
        self.roles: dict[str, SimpleNamespace] = {
            name.value: SimpleNamespace(id=str(uuid.uuid4()), description=name.value)
            for name in RoleName
        }

    # -- helpers --------------------------------------------------------------

    def _table(self, principal_type: PrincipalType) -> dict[str, SimpleNamespace]:
        if principal_type == PrincipalType.customer:
            return self.customers
        return self.staff

    @staticmethod
    def _stamp(fields: dict[str, Any]) -> SimpleNamespace:
        now = datetime.now(UTC)
        data = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        data.update(fields)
        return SimpleNamespace(**data)

    def add_customer(self, **fields: Any) -> SimpleNamespace:
        data = {
            "username": "customer",
            "email": "customer@example.com",
            "hashed_password": "$2b$04$placeholder",
            "name": None,
            "date_of_birth": datetime(1990, 1, 1).date(),
            "phone_number": None,
            "address": None,
            "verify_code": str(uuid.uuid4()),
            "status": AccountStatus.active.value,
            "password_updated_at": None,
        }
        data.update(fields)
        record = self._stamp(data)
        self.customers[record.id] = record
        return record

    def add_staff(self, role: str = RoleName.staff.value, **fields: Any) -> SimpleNamespace:
        data = {
            "username": "staff",
            "hashed_password": "$2b$04$placeholder",
            "name": None,
            "role_id": self.roles[role].id,
            "role": self.roles[role],
            "status": AccountStatus.active.value,
            "password_updated_at": None,
        }
        data.update(fields)
        record = self._stamp(data)
        self.staff[record.id] = record
        return record

    def _update(
        self, principal_type: PrincipalType, principal_id: str, fields: dict[str, Any]
    ) -> SimpleNamespace | None:
        record = self._table(principal_type).get(principal_id)
        if record is None:
            return None
        for key, value in fields.items():
            setattr(record, key, value)
        record.updated_at = datetime.now(UTC)
        return record

    # -- PrincipalStore -------------------------------------------------------

    async def find_principal(self, principal_type: PrincipalType, principal_id: str):
        return self._table(principal_type).get(principal_id)

    async def find_principal_by_credential(self, principal_type: PrincipalType, login: str):
        live = [
            record
            for record in self._table(principal_type).values()
            if record.status != AccountStatus.deleted
        ]
        by_username = [record for record in live if record.username == login]
        by_email = [record for record in live if getattr(record, "email", None) == login]
        return next(iter(by_username + by_email), None)

    async def create_customer_with_identity(
        self, customer_fields: dict[str, Any], identity_fields: dict[str, Any]
    ):
        # Yield first so concurrent registrations interleave.
        await asyncio.sleep(0)
        for record in self.customers.values():
            if (
                record.username == customer_fields["username"]
                or record.email == customer_fields["email"]
            ):
                raise DuplicateAccount()
        customer = self.add_customer(**customer_fields)
        self.identities[customer.id] = SimpleNamespace(customer_id=customer.id, **identity_fields)
        return customer

    async def update_principal_status(
        self, principal_type: PrincipalType, principal_id: str, status: AccountStatus
    ):
        return self._update(principal_type, principal_id, {"status": AccountStatus(status).value})

    async def update_principal_profile(
        self, principal_type: PrincipalType, principal_id: str, fields: dict[str, Any]
    ):
        return self._update(principal_type, principal_id, fields)

    async def update_principal_password(
        self, principal_type: PrincipalType, principal_id: str, hashed_password: str
    ):
        return self._update(
            principal_type,
            principal_id,
            {"hashed_password": hashed_password, "password_updated_at": datetime.now(UTC)},
        )

    async def find_customer(self, customer_id: str):
        record = self.customers.get(customer_id)
        if record is None or record.status == AccountStatus.deleted:
            return None
        return record

    async def find_role(self, description: str):
        return self.roles.get(description)

    async def create_staff(self, fields: dict[str, Any]):
        if any(s.username == fields["username"] for s in self.staff.values()):
            raise DuplicateAccount()
        role = next(r for r in self.roles.values() if r.id == fields["role_id"])
        return self.add_staff(role=role.description, **fields)

    def _managed(self) -> list[SimpleNamespace]:
        return [
            s
            for s in self.staff.values()
            if s.role.description != RoleName.admin and s.status != AccountStatus.deleted
        ]

    async def find_managed_staff(self, staff_id: str):
        return next((s for s in self._managed() if s.id == staff_id), None)

    async def list_managed_staff(self, filters, page: int, size: int):
        items = self._managed()
        if filters.username__like:
            items = [s for s in items if filters.username__like in s.username]
        if filters.name__like:
            items = [s for s in items if s.name and filters.name__like in s.name]
        items.sort(key=lambda s: s.updated_at)
        start = (page - 1) * size
        return items[start : start + size], len(items)
