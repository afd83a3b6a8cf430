"""Signed, expiring identity tokens for customers and staff."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from backoffice.config import Settings
from backoffice.errors import ExpiredToken, MalformedToken
from backoffice.models.enums import PrincipalType

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class TokenConfig:
    """Signing parameters for :class:`TokenService`."""

    secret_key: str
    algorithm: str = "HS256"
    lifetime: timedelta = timedelta(hours=24)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(minutes=settings.jwt_access_token_expire_minutes),
        )


@dataclass(frozen=True)
class TokenClaims:
    principal_type: PrincipalType
    principal_id: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issue and verify bearer tokens carrying ``{type, id}``.

    Verification only checks the token itself (encoding, signature, claim
    shape and expiry). Whether the principal still exists is decided by
    :class:`~backoffice.auth.resolver.PrincipalResolver`.
    """

    def __init__(self, config: TokenConfig, clock: Clock = utc_now) -> None:
        self.config = config
        self._clock = clock

    def issue(self, principal_type: PrincipalType, principal_id: str) -> str:
        now = self._clock()
        payload = {
            "type": PrincipalType(principal_type).value,
            "id": str(principal_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.config.lifetime).timestamp()),
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            # Expiry is checked below against the injected clock.
            payload: dict[str, Any] = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as err:
            raise MalformedToken() from err

        try:
            principal_type = PrincipalType(payload["type"])
            principal_id = payload["id"]
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (KeyError, TypeError, ValueError) as err:
            raise MalformedToken() from err
        if not isinstance(principal_id, str) or not principal_id:
            raise MalformedToken()

        if self._clock() >= expires_at:
            raise ExpiredToken()

        return TokenClaims(
            principal_type=principal_type,
            principal_id=principal_id,
            issued_at=issued_at,
            expires_at=expires_at,
        )
