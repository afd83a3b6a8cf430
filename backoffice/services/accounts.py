"""Login, password changes and self-service profile updates."""

from functools import lru_cache
from typing import Any

from backoffice.auth.principals import Principal
from backoffice.auth.security import hash_password, verify_password
from backoffice.auth.tokens import TokenService
from backoffice.errors import IncorrectCredentials, IncorrectPassword, PrincipalGone, WeakPassword
from backoffice.models.enums import PrincipalType
from backoffice.repositories.principal_store import PrincipalStore
from backoffice.services.registration import is_strong_password
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

PROFILE_FIELDS: dict[PrincipalType, frozenset[str]] = {
    PrincipalType.customer: frozenset({"name", "phone_number", "address"}),
    PrincipalType.staff: frozenset({"name"}),
}


@lru_cache
def _decoy_hash(rounds: int | None) -> str:
    return hash_password("decoy-password", rounds=rounds)


def normalize_login(principal_type: PrincipalType, login: str) -> str:
    """Customers are stored case-folded; staff usernames are matched as given."""
    if principal_type == PrincipalType.customer:
        return login.strip().lower()
    return login


class AccountService:
    """Operations a principal performs on their own account."""

    def __init__(
        self,
        store: PrincipalStore,
        tokens: TokenService,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    async def login(self, principal_type: PrincipalType, login: str, password: str) -> str:
        """Return a token, or raise one generic error for any mismatch."""
        record = await self.store.find_principal_by_credential(
            principal_type, normalize_login(principal_type, login)
        )
        # Unknown logins still pay for one bcrypt check.
        hashed = _decoy_hash(self.bcrypt_rounds) if record is None else record.hashed_password
        if not verify_password(password, hashed) or record is None:
            logger.info("Failed %s login attempt", principal_type)
            raise IncorrectCredentials()

        return self.tokens.issue(principal_type, record.id)

    async def update_password(
        self, principal: Principal, current_password: str, new_password: str
    ) -> str:
        """Change the caller's password and return a fresh token."""
        if not verify_password(current_password, principal.account.hashed_password):
            raise IncorrectPassword()
        if not is_strong_password(new_password):
            raise WeakPassword()

        updated = await self.store.update_principal_password(
            principal.kind,
            principal.id,
            hash_password(new_password, rounds=self.bcrypt_rounds),
        )
        if updated is None:
            raise PrincipalGone()
        return self.tokens.issue(principal.kind, principal.id)

    async def update_profile(self, principal: Principal, fields: dict[str, Any]) -> Any:
        allowed = PROFILE_FIELDS[principal.kind]
        changes = {key: value for key, value in fields.items() if key in allowed}
        if not changes:
            return principal.account

        updated = await self.store.update_principal_profile(principal.kind, principal.id, changes)
        if updated is None:
            raise PrincipalGone()
        return updated
