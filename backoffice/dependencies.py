"""Dependency providers: database engine, sessions and core services."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from backoffice.auth.tokens import TokenConfig, TokenService
from backoffice.config import Settings, get_settings
from backoffice.repositories.principal_store import PrincipalStore, SqlPrincipalStore
from backoffice.services.accounts import AccountService
from backoffice.services.management import ManagementService
from backoffice.services.registration import RegistrationService


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: commit on success, roll back on error."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_principal_store(db: DBSession, settings: AppSettings) -> PrincipalStore:
    return SqlPrincipalStore(db, timeout=settings.store_timeout_seconds)


def get_token_service(settings: AppSettings) -> TokenService:
    return TokenService(TokenConfig.from_settings(settings))


Store = Annotated[PrincipalStore, Depends(get_principal_store)]
Tokens = Annotated[TokenService, Depends(get_token_service)]


def get_registration_service(
    store: Store, tokens: Tokens, settings: AppSettings
) -> RegistrationService:
    return RegistrationService(
        store,
        tokens,
        image_quality=settings.identity_image_quality,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_account_service(store: Store, tokens: Tokens, settings: AppSettings) -> AccountService:
    return AccountService(store, tokens, bcrypt_rounds=settings.bcrypt_rounds)


def get_management_service(store: Store, settings: AppSettings) -> ManagementService:
    return ManagementService(store, bcrypt_rounds=settings.bcrypt_rounds)


Registration = Annotated[RegistrationService, Depends(get_registration_service)]
Accounts = Annotated[AccountService, Depends(get_account_service)]
Management = Annotated[ManagementService, Depends(get_management_service)]
