"""Load the principal named by a verified token."""

from typing import assert_never

from backoffice.auth.principals import CustomerPrincipal, Principal, StaffPrincipal
from backoffice.errors import PrincipalNotFound
from backoffice.models.enums import AccountStatus, PrincipalType
from backoffice.repositories.principal_store import PrincipalStore


class PrincipalResolver:
    """Turn ``(type, id)`` into a live principal.

    Missing and soft-deleted records both raise :class:`PrincipalNotFound`.
    Store failures propagate unchanged so a timeout is never mistaken for a
    missing account.
    """

    def __init__(self, store: PrincipalStore) -> None:
        self.store = store

    async def resolve(self, principal_type: PrincipalType, principal_id: str) -> Principal:
        match principal_type:
            case PrincipalType.customer:
                return await self._resolve_customer(principal_id)
            case PrincipalType.staff:
                return await self._resolve_staff(principal_id)
            case _:
                assert_never(principal_type)

    async def _resolve_customer(self, principal_id: str) -> CustomerPrincipal:
        customer = await self.store.find_principal(PrincipalType.customer, principal_id)
        self._ensure_live(customer)
        return CustomerPrincipal(customer)

    async def _resolve_staff(self, principal_id: str) -> StaffPrincipal:
        staff = await self.store.find_principal(PrincipalType.staff, principal_id)
        self._ensure_live(staff)
        return StaffPrincipal(staff)

    @staticmethod
    def _ensure_live(record) -> None:
        if record is None or record.status == AccountStatus.deleted:
            raise PrincipalNotFound()
