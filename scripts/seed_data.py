"""Seed script for the back-office database.

Seeds roles, staff accounts and a few demo customers with identity documents.
Run: python -m scripts.seed_data
"""

import asyncio
import io
import logging
import uuid
from datetime import date

from PIL import Image
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from backoffice.auth.security import hash_password
from backoffice.config import get_settings
from backoffice.models import Customer, Identity, Role, Staff
from backoffice.models.enums import AccountStatus, RoleName
from backoffice.services.images import normalize_image

logger = logging.getLogger(__name__)

# ── Staff accounts ────────────────────────────────────────────────────────────

STAFF_USERS = [
    {
        "username": "admin",
        "password": "Admin@2024",
        "name": "System Administrator",
        "role": "admin",
    },
    {
        "username": "teller",
        "password": "Teller@2024",
        "name": "Front Desk Teller",
        "role": "staff",
    },
    {
        "username": "auditor",
        "password": "Audit@2024",
        "name": "Branch Auditor",
        "role": "staff",
    },
]

# ── Demo customers ────────────────────────────────────────────────────────────

DEMO_CUSTOMERS = [
    {
        "username": "thabo",
        "email": "thabo.mokoena@example.com",
        "password": "Thabo@2024",
        "name": "Thabo Mokoena",
        "date_of_birth": date(1990, 3, 14),
        "phone_number": "+27821234567",
        "address": "12 Long Street, Cape Town",
        "identity_number": "900314502",
        "registration_date": date(2015, 6, 1),
    },
    {
        "username": "naledi",
        "email": "naledi.dlamini@example.com",
        "password": "Naledi@2024",
        "name": "Naledi Dlamini",
        "date_of_birth": date(1985, 11, 2),
        "phone_number": "+27831112222",
        "address": "4 Church Street, Pretoria",
        "identity_number": "851102502608",
        "registration_date": date(2012, 1, 20),
    },
]


def _placeholder_scan(color: tuple[int, int, int]) -> bytes:
    """Render a flat-colour PNG standing in for a scanned document side."""
    buffer = io.BytesIO()
    Image.new("RGB", (320, 200), color).save(buffer, format="PNG")
    return normalize_image(buffer.getvalue())


async def seed_roles(session: AsyncSession) -> dict[str, str]:
    role_ids: dict[str, str] = {}
    for role_name in RoleName:
        existing = (
            await session.execute(select(Role).where(Role.description == role_name.value))
        ).scalar_one_or_none()
        if existing:
            logger.info(f"Role '{role_name.value}' already exists, skipping")
            role_ids[role_name.value] = existing.id
            continue

        role = Role(id=str(uuid.uuid4()), description=role_name.value)
        session.add(role)
        role_ids[role_name.value] = role.id
        logger.info(f"Created role: {role_name.value}")

    await session.commit()
    return role_ids


async def seed_staff(session: AsyncSession, role_ids: dict[str, str]) -> None:
    for user_data in STAFF_USERS:
        existing = await session.execute(
            select(Staff).where(Staff.username == user_data["username"])
        )
        if existing.scalar_one_or_none():
            logger.info(f"Staff '{user_data['username']}' already exists, skipping")
            continue

        staff = Staff(
            id=str(uuid.uuid4()),
            username=user_data["username"],
            hashed_password=hash_password(user_data["password"]),
            name=user_data["name"],
            role_id=role_ids[user_data["role"]],
            status=AccountStatus.active.value,
        )
        session.add(staff)
        logger.info(f"Created staff: {user_data['username']} ({user_data['role']})")

    await session.commit()


async def seed_customers(session: AsyncSession) -> None:
    front = _placeholder_scan((220, 220, 220))
    back = _placeholder_scan((180, 180, 180))

    for cust_data in DEMO_CUSTOMERS:
        existing = await session.execute(
            select(Customer).where(Customer.username == cust_data["username"])
        )
        if existing.scalar_one_or_none():
            logger.info(f"Customer '{cust_data['username']}' already exists, skipping")
            continue

        customer = Customer(
            id=str(uuid.uuid4()),
            username=cust_data["username"],
            email=cust_data["email"],
            hashed_password=hash_password(cust_data["password"]),
            name=cust_data["name"],
            date_of_birth=cust_data["date_of_birth"],
            phone_number=cust_data["phone_number"],
            address=cust_data["address"],
            verify_code=str(uuid.uuid4()),
            status=AccountStatus.active.value,
        )
        customer.identity = Identity(
            id=str(uuid.uuid4()),
            identity_number=cust_data["identity_number"],
            registration_date=cust_data["registration_date"],
            front_image=front,
            back_image=back,
        )
        session.add(customer)
        logger.info(f"Created customer {cust_data['username']} with identity document")

    await session.commit()


async def main() -> None:
    """Run all seed scripts."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    settings = get_settings()
    engine = create_async_engine(str(settings.database_url))
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        logger.info("Seeding roles...")
        role_ids = await seed_roles(session)

        logger.info("Seeding staff accounts...")
        await seed_staff(session, role_ids)

        logger.info("Seeding demo customers...")
        await seed_customers(session)

    await engine.dispose()
    logger.info("Seeding complete!")


if __name__ == "__main__":
    asyncio.run(main())
