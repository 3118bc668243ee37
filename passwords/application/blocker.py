from __future__ import annotations

import logging
import threading
from uuid import UUID

from passwords.domain.ports.blocker import BlockerPort
from passwords.domain.ports.credential_repository import CredentialDisablerPort

logger = logging.getLogger(__name__)


class Blocker(BlockerPort):
    """
    In-memory buffer of credential ids waiting to be disabled.

    Request handlers call register() and never wait on the store; the
    repeater calls flush() periodically to persist the whole batch with a
    single disable_by_ids() call. The lock guards the pending list only and
    is released before the store is called.

    A batch whose store call fails is dropped, not requeued.
    """

    def __init__(self, repository: CredentialDisablerPort) -> None:
        self._repository = repository
        self._lock = threading.Lock()
        self._pending: list[UUID] = []

    @property
    def pending(self) -> tuple[UUID, ...]:
        with self._lock:
            return tuple(self._pending)

    def register(self, credential_id: UUID) -> None:
        with self._lock:
            self._pending.append(credential_id)

    async def flush(self) -> None:
        with self._lock:
            if not self._pending:
                return
            batch = self._pending
            self._pending = []

        logger.info("disabling credentials", extra={"count": len(batch)})
        await self._repository.disable_by_ids(*batch)
