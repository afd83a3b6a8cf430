"""Store interface consumed by the auth core, and its SQL implementation."""

import asyncio
import uuid
from collections.abc import Awaitable
from datetime import UTC, datetime
from typing import Any, Protocol, TypeVar, assert_never

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import StoreTimeout, StoreUnavailable
from backoffice.filters.staff import StaffFilter
from backoffice.models.enums import AccountStatus, PrincipalType
from backoffice.models.staff import Staff
from backoffice.repositories.customer_repository import CustomerRepository
from backoffice.repositories.staff_repository import StaffRepository
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def parse_record_id(value: str) -> str | None:
    """Canonical form of a UUID primary key, or None when ``value`` is not one."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return None


class PrincipalStore(Protocol):
    """Persistence operations the core needs.

    Every method may raise :class:`StoreTimeout` or :class:`StoreUnavailable`.
    """

    async def find_principal(self, principal_type: PrincipalType, principal_id: str) -> Any: ...

    async def find_principal_by_credential(
        self, principal_type: PrincipalType, login: str
    ) -> Any: ...

    async def create_customer_with_identity(
        self, customer_fields: dict[str, Any], identity_fields: dict[str, Any]
    ) -> Any: ...

    async def update_principal_status(
        self, principal_type: PrincipalType, principal_id: str, status: AccountStatus
    ) -> Any: ...

    async def update_principal_profile(
        self, principal_type: PrincipalType, principal_id: str, fields: dict[str, Any]
    ) -> Any: ...

    async def update_principal_password(
        self, principal_type: PrincipalType, principal_id: str, hashed_password: str
    ) -> Any: ...

    async def find_customer(self, customer_id: str) -> Any: ...

    async def find_role(self, description: str) -> Any: ...

    async def create_staff(self, fields: dict[str, Any]) -> Any: ...

    async def find_managed_staff(self, staff_id: str) -> Any: ...

    async def list_managed_staff(
        self, filters: StaffFilter, page: int, size: int
    ) -> tuple[list[Any], int]: ...


class SqlPrincipalStore:
    """:class:`PrincipalStore` over the customer and staff repositories.

    Each call is bounded by ``timeout`` seconds.
    """

    def __init__(self, session: AsyncSession, timeout: float | None = None) -> None:
        self.customers = CustomerRepository(session)
        self.staff = StaffRepository(session)
        self.timeout = timeout

    async def _call(self, operation: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except TimeoutError as err:
            logger.warning("Store call timed out after %ss", self.timeout)
            raise StoreTimeout() from err
        except (OperationalError, InterfaceError, ConnectionError) as err:
            logger.error("Store unavailable: %s", err)
            raise StoreUnavailable() from err

    async def find_principal(self, principal_type: PrincipalType, principal_id: str):
        principal_id = parse_record_id(principal_id)
        if principal_id is None:
            return None
        match principal_type:
            case PrincipalType.customer:
                return await self._call(self.customers.get_by_id(principal_id))
            case PrincipalType.staff:
                return await self._call(self.staff.get_by_id(principal_id))
            case _:
                assert_never(principal_type)

    async def find_principal_by_credential(self, principal_type: PrincipalType, login: str):
        match principal_type:
            case PrincipalType.customer:
                return await self._call(self.customers.get_by_login(login))
            case PrincipalType.staff:
                return await self._call(self.staff.get_by_username(login))
            case _:
                assert_never(principal_type)

    async def create_customer_with_identity(
        self, customer_fields: dict[str, Any], identity_fields: dict[str, Any]
    ):
        return await self._call(
            self.customers.create_with_identity(customer_fields, identity_fields)
        )

    async def _update(
        self, principal_type: PrincipalType, principal_id: str, fields: dict[str, Any]
    ):
        record = await self.find_principal(principal_type, principal_id)
        if record is None:
            return None
        match principal_type:
            case PrincipalType.customer:
                return await self._call(self.customers.update(record, fields))
            case PrincipalType.staff:
                return await self._call(self.staff.update(record, fields))
            case _:
                assert_never(principal_type)

    async def update_principal_status(
        self, principal_type: PrincipalType, principal_id: str, status: AccountStatus
    ):
        # Re-validated here so no caller can write a value outside the enum.
        status = AccountStatus(status)
        return await self._update(principal_type, principal_id, {"status": status.value})

    async def update_principal_profile(
        self, principal_type: PrincipalType, principal_id: str, fields: dict[str, Any]
    ):
        return await self._update(principal_type, principal_id, fields)

    async def update_principal_password(
        self, principal_type: PrincipalType, principal_id: str, hashed_password: str
    ):
        return await self._update(
            principal_type,
            principal_id,
            {"hashed_password": hashed_password, "password_updated_at": datetime.now(UTC)},
        )

    async def find_customer(self, customer_id: str):
        customer_id = parse_record_id(customer_id)
        if customer_id is None:
            return None
        return await self._call(self.customers.get_active_by_id(customer_id))

    async def find_role(self, description: str):
        return await self._call(self.staff.get_role(description))

    async def create_staff(self, fields: dict[str, Any]):
        return await self._call(self.staff.create(Staff(**fields)))

    async def find_managed_staff(self, staff_id: str):
        staff_id = parse_record_id(staff_id)
        if staff_id is None:
            return None
        return await self._call(self.staff.get_managed(staff_id))

    async def list_managed_staff(self, filters: StaffFilter, page: int, size: int):
        return await self._call(self.staff.get_all_managed(filters, page=page, size=size))
