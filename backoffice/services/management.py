"""Staff-management surface: staff lifecycle and customer status changes."""

from typing import Any

from backoffice.auth.security import hash_password
from backoffice.auth.status import ensure_transition, parse_status
from backoffice.errors import BackofficeError, RecordNotFound, WeakPassword
from backoffice.filters.staff import StaffFilter
from backoffice.models.enums import AccountStatus, PrincipalType, RoleName
from backoffice.repositories.principal_store import PrincipalStore
from backoffice.services.registration import is_strong_password
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


class ManagementService:
    """Administrative actions on other principals.

    Admin accounts are invisible here: they cannot be listed, fetched or
    have their status changed.
    """

    def __init__(self, store: PrincipalStore, bcrypt_rounds: int | None = None) -> None:
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    async def create_staff(self, username: str, password: str, name: str | None) -> Any:
        if not is_strong_password(password):
            raise WeakPassword()

        role = await self.store.find_role(RoleName.staff.value)
        if role is None:
            logger.error("Role %r is missing from the roles table", RoleName.staff.value)
            raise BackofficeError("Can't find staff role!")

        staff = await self.store.create_staff(
            {
                "username": username,
                "hashed_password": hash_password(password, rounds=self.bcrypt_rounds),
                "name": name,
                "role_id": role.id,
                "status": AccountStatus.active.value,
            }
        )
        logger.info("Created staff %s", staff.id)
        return staff

    async def list_staff(
        self, filters: StaffFilter, page: int = 1, size: int = 10
    ) -> tuple[list[Any], int]:
        return await self.store.list_managed_staff(filters, page=page, size=size)

    async def get_staff(self, staff_id: str) -> Any:
        staff = await self.store.find_managed_staff(staff_id)
        if staff is None:
            raise RecordNotFound("Can't find that staff!")
        return staff

    async def get_customer(self, customer_id: str) -> Any:
        customer = await self.store.find_customer(customer_id)
        if customer is None:
            raise RecordNotFound("Can't find that customer!")
        return customer

    async def change_staff_status(self, staff_id: str, raw_status: object) -> Any:
        target = parse_status(raw_status)
        staff = await self.get_staff(staff_id)
        return await self._transition(PrincipalType.staff, staff, target)

    async def change_customer_status(self, customer_id: str, raw_status: object) -> Any:
        target = parse_status(raw_status)
        customer = await self.get_customer(customer_id)
        return await self._transition(PrincipalType.customer, customer, target)

    async def _transition(
        self, principal_type: PrincipalType, record: Any, target: AccountStatus
    ) -> Any:
        current = AccountStatus(record.status)
        ensure_transition(current, target)
        if current == target:
            return record

        updated = await self.store.update_principal_status(principal_type, record.id, target)
        if updated is None:
            raise RecordNotFound()
        logger.info(
            "Status of %s %s changed %s -> %s", principal_type, record.id, current, target
        )
        return updated
