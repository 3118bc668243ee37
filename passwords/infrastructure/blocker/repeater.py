from __future__ import annotations

import asyncio
import logging

from passwords.domain.errors import CredentialNotFound
from passwords.domain.ports.blocker import BlockerPort

logger = logging.getLogger(__name__)


class BlockRepeater:
    """
    Flushes the blocker every `interval` seconds until told to stop.

    Flush errors are logged and the loop keeps going. When the stop event
    is set the loop returns right away, without a final flush.
    """

    def __init__(self, *, blocker: BlockerPort, interval: float = 10.0) -> None:
        self.blocker = blocker
        self.interval = interval

    async def run_until_stopped(self, stop: asyncio.Event) -> None:
        logger.info("repeater: started", extra={"interval": self.interval})
        while True:
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

            # stop wins over a timer that fired at the same time
            if stop.is_set():
                logger.info("repeater: shutdown")
                return

            await self.run_once()

    async def run_once(self) -> None:
        logger.debug("repeater: passwords blocking")
        try:
            await self.blocker.flush()
        except CredentialNotFound:
            logger.info("repeater: no credential changed by this batch")
        except Exception:  # noqa: BLE001
            logger.exception("repeater: blocking failed; batch dropped")
