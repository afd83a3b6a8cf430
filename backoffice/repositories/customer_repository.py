"""Repository for customer data access."""

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import DuplicateAccount
from backoffice.models.customer import Customer, Identity
from backoffice.models.enums import AccountStatus


class CustomerRepository:
    """Data access layer for customers and their identity documents."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, customer_id: str) -> Customer | None:
        result = await self.session.execute(select(Customer).where(Customer.id == customer_id))
        return result.scalar_one_or_none()

    async def get_active_by_id(self, customer_id: str) -> Customer | None:
        """Fetch a customer unless soft-deleted."""
        result = await self.session.execute(
            select(Customer).where(
                Customer.id == customer_id,
                Customer.status != AccountStatus.deleted.value,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_login(self, login: str) -> Customer | None:
        """Match a non-deleted customer by username or email.

        One customer's username may equal another's email; the username
        match wins.
        """
        result = await self.session.execute(
            select(Customer)
            .where(
                or_(Customer.username == login, Customer.email == login),
                Customer.status != AccountStatus.deleted.value,
            )
            .order_by((Customer.username == login).desc())
            .limit(1)
        )
        return result.scalars().first()

    async def create_with_identity(
        self, customer_fields: dict[str, object], identity_fields: dict[str, object]
    ) -> Customer:
        """Insert a customer and its identity document in a single flush.

        Both rows belong to the same transaction; a unique-constraint
        violation rolls both back and surfaces as :class:`DuplicateAccount`.
        """
        customer = Customer(**customer_fields)
        customer.identity = Identity(**identity_fields)
        self.session.add(customer)
        try:
            await self.session.flush()
        except IntegrityError as err:
            await self.session.rollback()
            raise DuplicateAccount() from err
        await self.session.refresh(customer)
        return customer

    async def update(self, customer: Customer, fields: dict[str, object]) -> Customer:
        for field, value in fields.items():
            setattr(customer, field, value)

        await self.session.flush()
        await self.session.refresh(customer)
        return customer
