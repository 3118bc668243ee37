from typing import Annotated

from fastapi import Depends, Request

from passwords.application.password_service import PasswordService
from passwords.domain.ports.blocker import BlockerPort
from passwords.domain.ports.credential_repository import CredentialRepositoryPort
from passwords.domain.ports.password_hasher import PasswordHasherPort
from passwords.infrastructure.db.credentials_repo import PgCredentialRepository
from passwords.infrastructure.db.pool import get_pool
from passwords.infrastructure.security.password import BcryptHasher
from passwords.settings import get_settings


def get_repository() -> CredentialRepositoryPort:
    return PgCredentialRepository(get_pool())


def get_hasher() -> PasswordHasherPort:
    settings = get_settings()
    return BcryptHasher(settings.hash_salt, rounds=settings.bcrypt_rounds)


def get_blocker(request: Request) -> BlockerPort:
    # This is set in passwords.main lifespan()
    return request.app.state.blocker


def get_password_service(
    repository: Annotated[CredentialRepositoryPort, Depends(get_repository)],
    hasher: Annotated[PasswordHasherPort, Depends(get_hasher)],
    blocker: Annotated[BlockerPort, Depends(get_blocker)],
) -> PasswordService:
    return PasswordService(
        repository=repository,
        hasher=hasher,
        blocker=blocker,
        lifetime=get_settings().password_lifetime,
    )
