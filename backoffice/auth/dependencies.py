"""FastAPI dependencies wiring the access gate into routes."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from backoffice.auth.gate import AccessGate, check_roles
from backoffice.auth.principals import CustomerPrincipal, Principal
from backoffice.auth.resolver import PrincipalResolver
from backoffice.dependencies import Store, Tokens
from backoffice.errors import Forbidden
from backoffice.models.enums import RoleName

STAFF_ROLES = frozenset({RoleName.staff, RoleName.admin})
ADMIN_ROLES = frozenset({RoleName.admin})


def get_access_gate(store: Store, tokens: Tokens) -> AccessGate:
    return AccessGate(tokens, PrincipalResolver(store))


async def get_current_principal(
    request: Request,
    gate: Annotated[AccessGate, Depends(get_access_gate)],
) -> Principal:
    """Authenticate the caller; the result is the request's authorized context."""
    principal = await gate.authenticate(request.headers.get("Authorization"))
    request.state.principal = principal
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


@dataclass(frozen=True)
class RequireRoles:
    """Route-level role restriction, declared as data.

    Usage::

        router = APIRouter(dependencies=[Depends(RequireRoles(ADMIN_ROLES))])
    """

    roles: frozenset[RoleName]

    async def __call__(self, principal: CurrentPrincipal) -> Principal:
        return check_roles(principal, self.roles)


async def get_current_customer(principal: CurrentPrincipal) -> CustomerPrincipal:
    """Customer-only routes: any other principal is forbidden."""
    if not isinstance(principal, CustomerPrincipal):
        raise Forbidden()
    return principal


CurrentCustomer = Annotated[CustomerPrincipal, Depends(get_current_customer)]
