"""Enumerations shared by customer and staff principals."""

import enum


class PrincipalType(enum.StrEnum):
    customer = "customer"
    staff = "staff"


class AccountStatus(enum.StrEnum):
    active = "active"
    inactive = "inactive"
    blocked = "blocked"
    deleted = "deleted"


class RoleName(enum.StrEnum):
    staff = "staff"
    admin = "admin"
