from __future__ import annotations

from typing import Protocol
from uuid import UUID

from passwords.domain.entities import Credential


class CredentialFinderPort(Protocol):
    async def find_all_by_login(self, login: UUID) -> list[Credential]:
        """
        Return every credential of the login, disabled ones included.
        Raise CredentialNotFound if there are none.
        """

    async def find_active_by_login(self, login: UUID) -> list[Credential]:
        """
        Return the non-disabled credentials of the login.
        Raise CredentialNotFound if there are none.
        """


class CredentialSaverPort(Protocol):
    async def insert(self, credential: Credential) -> Credential:
        """Persist a new credential; the store assigns id and created_at."""


class CredentialDisablerPort(Protocol):
    async def disable_by_ids(self, *ids: UUID) -> bool:
        """
        Mark the given credentials disabled.
        Raise CredentialNotFound if no row changed.
        """


class CredentialPaginatorPort(Protocol):
    async def count(self, login: UUID) -> int:
        """Number of credentials stored for the login."""

    async def page(self, login: UUID, page: int, limit: int) -> list[Credential]:
        """Zero-based page of the login's credentials; empty past the end."""


class CredentialRepositoryPort(
    CredentialFinderPort,
    CredentialSaverPort,
    CredentialDisablerPort,
    CredentialPaginatorPort,
    Protocol,
):
    pass
