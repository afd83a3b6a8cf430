"""Authenticated principal variants.

A principal is either a :class:`CustomerPrincipal` or a
:class:`StaffPrincipal`; callers branch on the variant, never on a type
string.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from backoffice.models.enums import AccountStatus, PrincipalType


@dataclass(frozen=True)
class CustomerPrincipal:
    kind: ClassVar[PrincipalType] = PrincipalType.customer

    account: Any

    @property
    def id(self) -> str:
        return self.account.id

    @property
    def username(self) -> str:
        return self.account.username

    @property
    def status(self) -> AccountStatus:
        return AccountStatus(self.account.status)

    @property
    def role(self) -> None:
        return None


@dataclass(frozen=True)
class StaffPrincipal:
    kind: ClassVar[PrincipalType] = PrincipalType.staff

    account: Any

    @property
    def id(self) -> str:
        return self.account.id

    @property
    def username(self) -> str:
        return self.account.username

    @property
    def status(self) -> AccountStatus:
        return AccountStatus(self.account.status)

    @property
    def role(self) -> str | None:
        role = getattr(self.account, "role", None)
        return role.description if role is not None else None


Principal = CustomerPrincipal | StaffPrincipal
