from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

from passwords.domain.entities import Credential
from passwords.domain.errors import CredentialAlreadyExists, CredentialNotFound
from passwords.domain.ports.blocker import BlockerPort
from passwords.domain.ports.credential_repository import CredentialRepositoryPort
from passwords.domain.ports.password_hasher import PasswordHasherPort
from passwords.domain.services import as_utc, utc_now

logger = logging.getLogger(__name__)


class PasswordService:
    """
    Policy for adding and checking passwords.

    Expired and consumed one-time credentials are not disabled here; their
    ids are handed to the blocker, which persists the change later.
    """

    def __init__(
        self,
        *,
        repository: CredentialRepositoryPort,
        hasher: PasswordHasherPort,
        blocker: BlockerPort,
        lifetime: timedelta,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._hasher = hasher
        self._blocker = blocker
        self._lifetime = lifetime
        self._now = now

    async def add(
        self,
        login: UUID,
        password: str,
        one_time: bool = False,
        valid_until: datetime | None = None,
    ) -> Credential:
        """
        Store a new password for the login.

        Raises CredentialAlreadyExists if the login already has a credential
        with this password, whether or not that one is disabled.
        """
        try:
            existing = await self._repository.find_all_by_login(login)
        except CredentialNotFound:
            existing = []

        for credential in existing:
            if await asyncio.to_thread(
                self._hasher.check, login, password, credential.password_hash
            ):
                raise CredentialAlreadyExists()

        password_hash = await asyncio.to_thread(self._hasher.hash, login, password)

        if valid_until is None:
            valid_until = self._now() + self._lifetime
        else:
            valid_until = as_utc(valid_until)

        stored = await self._repository.insert(
            Credential(
                login=login,
                password_hash=password_hash,
                one_time=one_time,
                valid_until=valid_until,
            )
        )
        logger.info(
            "password added",
            extra={"login": str(login), "id": str(stored.id), "one_time": one_time},
        )
        return stored

    async def check(self, login: UUID, password: str) -> bool:
        """
        True if the password matches an active, unexpired credential.

        Unknown logins, wrong passwords and expired credentials all give
        False. A matching expired credential, or a matching one-time
        credential, is registered with the blocker.
        """
        try:
            credentials = await self._repository.find_active_by_login(login)
        except CredentialNotFound:
            return False

        for credential in credentials:
            if not await asyncio.to_thread(
                self._hasher.check, login, password, credential.password_hash
            ):
                continue

            if credential.is_expired(self._now()):
                self._blocker.register(credential.id)
                logger.info(
                    "expired password used",
                    extra={"login": str(login), "id": str(credential.id)},
                )
                return False

            if credential.one_time:
                self._blocker.register(credential.id)

            return True

        return False

    def block(self, credential_id: UUID) -> None:
        self._blocker.register(credential_id)

    async def page(
        self, login: UUID, page: int, limit: int
    ) -> tuple[int, list[Credential]]:
        """1-based page of the login's credentials and the login's total."""
        total = await self._repository.count(login)
        records = await self._repository.page(login, page - 1, limit)
        return total, records
