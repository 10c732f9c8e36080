import logging
from typing import Optional, Tuple
from uuid import UUID

from redis.asyncio import Redis

from studyatlas.schemas.diary import ItemSnapshot

logger = logging.getLogger(__name__)

HISTORY_KEY_PREFIX = "diary:history"
HISTORY_VERSION = 1


def _history_key(page_id: UUID, stack: str) -> str:
    return f"{HISTORY_KEY_PREFIX}:v{HISTORY_VERSION}:{page_id}:{stack}"


class RemovalHistory:
    """Per-page undo/redo stacks of removed diary items, kept in Redis lists.

    The newest entry sits at the head of each list. Stacks are capped at
    ``depth`` entries and expire ``ttl_seconds`` after the last push.
    """

    def __init__(self, redis_client: Redis, depth: int = 50, ttl_seconds: int = 3600):
        self._redis = redis_client
        self.depth = depth
        self.ttl_seconds = ttl_seconds

    async def _push(self, page_id: UUID, stack: str, snapshot: ItemSnapshot) -> None:
        key = _history_key(page_id, stack)
        await self._redis.lpush(key, snapshot.model_dump_json())
        await self._redis.ltrim(key, 0, self.depth - 1)
        await self._redis.expire(key, self.ttl_seconds)

    async def _pop(self, page_id: UUID, stack: str) -> Optional[ItemSnapshot]:
        raw = await self._redis.lpop(_history_key(page_id, stack))
        if raw is None:
            return None
        return ItemSnapshot.model_validate_json(raw)

    async def record_removal(self, snapshot: ItemSnapshot) -> None:
        """A fresh removal starts a new branch: redo is discarded."""
        await self._push(snapshot.page_id, "undo", snapshot)
        await self._redis.delete(_history_key(snapshot.page_id, "redo"))
        logger.info(f"Recorded removal of item {snapshot.id} on page {snapshot.page_id}")

    async def pop_undo(self, page_id: UUID) -> Optional[ItemSnapshot]:
        return await self._pop(page_id, "undo")

    async def pop_redo(self, page_id: UUID) -> Optional[ItemSnapshot]:
        return await self._pop(page_id, "redo")

    async def push_undo(self, snapshot: ItemSnapshot) -> None:
        await self._push(snapshot.page_id, "undo", snapshot)

    async def push_redo(self, snapshot: ItemSnapshot) -> None:
        await self._push(snapshot.page_id, "redo", snapshot)

    async def status(self, page_id: UUID) -> Tuple[bool, bool]:
        """(can_undo, can_redo) for a page."""
        undo = await self._redis.llen(_history_key(page_id, "undo"))
        redo = await self._redis.llen(_history_key(page_id, "redo"))
        return undo > 0, redo > 0

    async def clear(self, page_id: UUID) -> None:
        await self._redis.delete(_history_key(page_id, "undo"), _history_key(page_id, "redo"))
