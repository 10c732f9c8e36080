import asyncio
import uuid
from unittest.mock import MagicMock

import pytest
from fakeredis import FakeAsyncRedis, FakeServer
from sqlalchemy.exc import IntegrityError

from studyatlas.config import DiarySettings
from studyatlas.repositories.diary import DiaryRepository
from studyatlas.schemas.diary import ItemSnapshot
from studyatlas.services.diary.history import RemovalHistory, _history_key
from studyatlas.services.diary.service import DiaryService


def _snapshot(page_id: uuid.UUID, content: str = "note") -> ItemSnapshot:
    return ItemSnapshot(
        id=uuid.uuid4(),
        page_id=page_id,
        item_type="note",
        content=content,
        position_x=20,
        position_y=40,
        width=200,
        height=100,
        color="yellow",
    )


def _history(depth: int = 50, ttl_seconds: int = 3600):
    redis_client = FakeAsyncRedis(server=FakeServer(), decode_responses=True)
    return RemovalHistory(redis_client, depth=depth, ttl_seconds=ttl_seconds), redis_client


def test_undo_returns_newest_removal_first():
    async def scenario():
        history, _ = _history()
        page_id = uuid.uuid4()
        first, second = _snapshot(page_id, "first"), _snapshot(page_id, "second")

        await history.record_removal(first)
        await history.record_removal(second)

        assert (await history.pop_undo(page_id)).id == second.id
        assert (await history.pop_undo(page_id)).id == first.id
        assert await history.pop_undo(page_id) is None

    asyncio.run(scenario())


def test_snapshot_survives_the_round_trip():
    async def scenario():
        history, _ = _history()
        page_id = uuid.uuid4()
        snapshot = _snapshot(page_id, "Apply to the MLO lab")

        await history.record_removal(snapshot)

        assert await history.pop_undo(page_id) == snapshot

    asyncio.run(scenario())


def test_new_removal_clears_redo():
    async def scenario():
        history, _ = _history()
        page_id = uuid.uuid4()

        await history.push_redo(_snapshot(page_id))
        assert await history.status(page_id) == (False, True)

        await history.record_removal(_snapshot(page_id))
        assert await history.status(page_id) == (True, False)

    asyncio.run(scenario())


def test_stacks_are_bounded_and_expire():
    async def scenario():
        history, redis_client = _history(depth=3, ttl_seconds=120)
        page_id = uuid.uuid4()
        snapshots = [_snapshot(page_id, str(i)) for i in range(5)]

        for snapshot in snapshots:
            await history.record_removal(snapshot)

        key = _history_key(page_id, "undo")
        assert await redis_client.llen(key) == 3
        assert 0 < await redis_client.ttl(key) <= 120
        # the oldest two fell off the bottom
        popped = [(await history.pop_undo(page_id)).content for _ in range(3)]
        assert popped == ["4", "3", "2"]

    asyncio.run(scenario())


def test_pages_have_separate_histories():
    async def scenario():
        history, _ = _history()
        page_a, page_b = uuid.uuid4(), uuid.uuid4()

        await history.record_removal(_snapshot(page_a))

        assert await history.status(page_a) == (True, False)
        assert await history.status(page_b) == (False, False)

        await history.clear(page_a)
        assert await history.status(page_a) == (False, False)

    asyncio.run(scenario())


def test_failed_restore_keeps_the_undo_entry():
    async def scenario():
        history, _ = _history()
        page_id = uuid.uuid4()
        snapshot = _snapshot(page_id)
        await history.record_removal(snapshot)

        user_id = uuid.uuid4()
        repo = MagicMock(spec=DiaryRepository)
        repo.get_notebook.return_value.user_id = user_id
        repo.get_item.return_value = None
        repo.restore_item.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
        service = DiaryService(repo, MagicMock(), MagicMock(), history, DiarySettings())

        with pytest.raises(IntegrityError):
            await service.undo_removal(user_id, page_id)

        assert await history.status(page_id) == (True, False)
        assert (await history.pop_undo(page_id)).id == snapshot.id

    asyncio.run(scenario())
