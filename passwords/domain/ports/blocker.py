from typing import Protocol
from uuid import UUID


class BlockerPort(Protocol):
    def register(self, credential_id: UUID) -> None:
        """Queue a credential for disablement on the next flush."""

    async def flush(self) -> None:
        """Disable every queued credential in one store call."""
