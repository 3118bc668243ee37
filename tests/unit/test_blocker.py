import asyncio
import threading
from uuid import uuid4

import pytest

from passwords.application.blocker import Blocker
from tests.fakes import FakeDisabler


@pytest.mark.asyncio
async def test_flush_sends_all_registered_ids_in_one_call():
    disabler = FakeDisabler()
    blocker = Blocker(disabler)
    a, b = uuid4(), uuid4()

    blocker.register(a)
    blocker.register(b)
    await blocker.flush()

    assert disabler.calls == [(a, b)]
    assert blocker.pending == ()


@pytest.mark.asyncio
async def test_empty_flush_does_not_touch_store():
    disabler = FakeDisabler()
    blocker = Blocker(disabler)

    await blocker.flush()

    assert disabler.calls == []


@pytest.mark.asyncio
async def test_duplicates_are_kept():
    disabler = FakeDisabler()
    blocker = Blocker(disabler)
    a = uuid4()

    blocker.register(a)
    blocker.register(a)
    assert blocker.pending == (a, a)

    await blocker.flush()
    assert disabler.calls == [(a, a)]


@pytest.mark.asyncio
async def test_failed_flush_drops_the_batch():
    disabler = FakeDisabler(error=RuntimeError("db down"))
    blocker = Blocker(disabler)
    blocker.register(uuid4())

    with pytest.raises(RuntimeError, match="db down"):
        await blocker.flush()

    # not requeued: the next flush has nothing to send
    disabler.error = None
    await blocker.flush()
    assert len(disabler.calls) == 1
    assert blocker.pending == ()


@pytest.mark.asyncio
async def test_slow_store_does_not_block_registration():
    disabler = FakeDisabler()
    disabler.gate = asyncio.Event()
    blocker = Blocker(disabler)
    first, second = uuid4(), uuid4()

    blocker.register(first)
    flush_task = asyncio.create_task(blocker.flush())
    await asyncio.wait_for(disabler.entered.wait(), timeout=1)

    # store call is in flight; registering still works and is not in that batch
    blocker.register(second)
    assert blocker.pending == (second,)

    disabler.gate.set()
    await flush_task
    await blocker.flush()

    assert disabler.calls == [(first,), (second,)]


@pytest.mark.asyncio
async def test_concurrent_registrations_land_in_exactly_one_batch():
    disabler = FakeDisabler()
    blocker = Blocker(disabler)
    ids = [uuid4() for _ in range(4000)]

    def worker(chunk):
        for credential_id in chunk:
            blocker.register(credential_id)

    threads = [threading.Thread(target=worker, args=(ids[i::8],)) for i in range(8)]
    for t in threads:
        t.start()

    while any(t.is_alive() for t in threads):
        await asyncio.gather(*(blocker.flush() for _ in range(4)))
        await asyncio.sleep(0)

    for t in threads:
        t.join()
    await blocker.flush()

    flushed = [i for batch in disabler.calls for i in batch]
    assert len(flushed) == len(ids)
    assert set(flushed) == set(ids)
