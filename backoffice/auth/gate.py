"""Per-request access gate.

The checks run in a fixed order and stop at the first failure:

1. bearer token present
2. token verifies
3. principal exists and is not deleted
4. account status allows access
5. principal holds one of the route's roles (if the route declares any)

Credential validity is settled before business status, and status before
roles, so a blocked admin is rejected as blocked and never reaches a role
check.
"""

from collections.abc import Set

from backoffice.auth.principals import Principal, StaffPrincipal
from backoffice.auth.resolver import PrincipalResolver
from backoffice.auth.status import enforce_access
from backoffice.auth.tokens import TokenService
from backoffice.errors import (
    Forbidden,
    InvalidToken,
    MissingCredential,
    PrincipalGone,
    PrincipalNotFound,
    TokenError,
)
from backoffice.models.enums import RoleName
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

RoleSet = Set[RoleName]

_BEARER_PREFIX = "Bearer "


def extract_bearer(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise MissingCredential()
    token = authorization[len(_BEARER_PREFIX) :].strip()
    if not token or " " in token:
        raise MissingCredential()
    return token


def check_roles(principal: Principal, required_roles: RoleSet | None) -> Principal:
    """Step 5: role-set membership. ``None`` means any active principal."""
    if required_roles is None:
        return principal
    if not isinstance(principal, StaffPrincipal) or principal.role not in required_roles:
        logger.info(
            "Role check failed for %s %s (role=%s, required=%s)",
            principal.kind,
            principal.id,
            principal.role,
            sorted(required_roles),
        )
        raise Forbidden()
    return principal


class AccessGate:
    """Authenticate a request and decide whether it may proceed."""

    def __init__(self, tokens: TokenService, resolver: PrincipalResolver) -> None:
        self.tokens = tokens
        self.resolver = resolver

    async def authenticate(self, authorization: str | None) -> Principal:
        """Steps 1-4: identify the caller and check their account status."""
        token = extract_bearer(authorization)

        try:
            claims = self.tokens.verify(token)
        except TokenError as err:
            raise InvalidToken() from err

        try:
            principal = await self.resolver.resolve(claims.principal_type, claims.principal_id)
        except PrincipalNotFound as err:
            raise PrincipalGone() from err

        enforce_access(principal.status)
        return principal

    async def authorize(
        self, authorization: str | None, required_roles: RoleSet | None = None
    ) -> Principal:
        """Run the full pipeline for a route declaring ``required_roles``."""
        principal = await self.authenticate(authorization)
        return check_roles(principal, required_roles)
