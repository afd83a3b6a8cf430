"""Database models package."""

from backoffice.models.base import Base
from backoffice.models.customer import Customer, Identity
from backoffice.models.enums import AccountStatus, PrincipalType, RoleName
from backoffice.models.staff import Role, Staff

__all__ = [
    "Base",
    "Customer",
    "Identity",
    "Staff",
    "Role",
    "AccountStatus",
    "PrincipalType",
    "RoleName",
]
