"""Repository for staff and role data access."""

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import DuplicateAccount
from backoffice.filters.staff import StaffFilter
from backoffice.models.enums import AccountStatus, RoleName
from backoffice.models.staff import Role, Staff


def _managed(query: Select) -> Select:
    """Restrict a staff query to non-deleted, non-admin members."""
    return query.join(Staff.role).where(
        Role.description != RoleName.admin.value,
        Staff.status != AccountStatus.deleted.value,
    )


class StaffRepository:
    """Data access layer for staff members."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, staff_id: str) -> Staff | None:
        result = await self.session.execute(select(Staff).where(Staff.id == staff_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Staff | None:
        """Match a non-deleted staff member by username."""
        result = await self.session.execute(
            select(Staff).where(
                Staff.username == username,
                Staff.status != AccountStatus.deleted.value,
            )
        )
        return result.scalar_one_or_none()

    async def get_managed(self, staff_id: str) -> Staff | None:
        """Fetch a staff member visible to staff management (never an admin)."""
        result = await self.session.execute(_managed(select(Staff)).where(Staff.id == staff_id))
        return result.scalar_one_or_none()

    async def get_all_managed(
        self,
        filters: StaffFilter,
        page: int = 1,
        size: int = 10,
    ) -> tuple[list[Staff], int]:
        query = filters.filter(_managed(select(Staff)))
        count_query = filters.filter(_managed(select(func.count()).select_from(Staff)))

        total = (await self.session.execute(count_query)).scalar() or 0

        query = filters.sort(query) if filters.order_by else query.order_by(Staff.updated_at)
        query = query.offset((page - 1) * size).limit(size)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_role(self, description: str) -> Role | None:
        result = await self.session.execute(select(Role).where(Role.description == description))
        return result.scalar_one_or_none()

    async def create(self, staff: Staff) -> Staff:
        self.session.add(staff)
        try:
            await self.session.flush()
        except IntegrityError as err:
            await self.session.rollback()
            raise DuplicateAccount() from err
        await self.session.refresh(staff)
        return staff

    async def update(self, staff: Staff, fields: dict[str, object]) -> Staff:
        for field, value in fields.items():
            setattr(staff, field, value)

        await self.session.flush()
        await self.session.refresh(staff)
        return staff
