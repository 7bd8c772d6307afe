"""Redis-backed record store.

Each prompt is a hash at ``<prefix><id>`` whose fields are all strings.
"""

from typing import List, Optional

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from prompt_history.core.exceptions import NotFoundError, StoreError
from prompt_history.observability.logging import get_logger
from prompt_history.services.storage.base import Item, RecordStore, timed_call

logger = get_logger(__name__)

# KEYS[1] = hash key, ARGV = field, value, field, value, ...
# Returns the full hash after the write, or nil when the key is absent.
UPDATE_IF_EXISTS_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return nil
end
redis.call('HSET', KEYS[1], unpack(ARGV))
return redis.call('HGETALL', KEYS[1])
"""

SCAN_BATCH_SIZE = 500


def create_redis_client(url: str, max_connections: int) -> Redis:
    """Create a Redis client returning decoded strings."""
    return from_url(
        url,
        max_connections=max_connections,
        decode_responses=True,
    )


def _pairs_to_item(flat: list) -> Item:
    return {flat[i]: flat[i + 1] for i in range(0, len(flat), 2)}


class RedisRecordStore(RecordStore):
    """Record store over Redis hashes.

    Args:
        client: Redis client created with decode_responses=True
        key_prefix: Prefix for hash keys
    """

    def __init__(self, client: Redis, key_prefix: str = "prompt:"):
        self.client = client
        self.key_prefix = key_prefix
        self._update_script = client.register_script(UPDATE_IF_EXISTS_SCRIPT)

    @property
    def name(self) -> str:
        return "redis"

    def _key(self, item_id: str) -> str:
        return f"{self.key_prefix}{item_id}"

    def _wrap(self, operation: str, exc: Exception) -> StoreError:
        logger.error(
            f"Redis {operation} failed: {exc}",
            extra={"store": self.name, "operation": operation},
        )
        return StoreError(self.name, operation, str(exc))

    async def put(self, item: Item) -> None:
        with timed_call(self.name, "put"):
            try:
                async with self.client.pipeline(transaction=True) as pipe:
                    pipe.delete(self._key(item["id"]))
                    pipe.hset(self._key(item["id"]), mapping=item)
                    await pipe.execute()
            except RedisError as e:
                raise self._wrap("put", e) from e

    async def scan(self) -> List[Item]:
        with timed_call(self.name, "scan"):
            try:
                keys = [
                    key
                    async for key in self.client.scan_iter(
                        match=f"{self.key_prefix}*", count=SCAN_BATCH_SIZE
                    )
                ]
                if not keys:
                    return []
                async with self.client.pipeline(transaction=False) as pipe:
                    for key in keys:
                        pipe.hgetall(key)
                    results = await pipe.execute()
            except RedisError as e:
                raise self._wrap("scan", e) from e
        # Keys deleted between SCAN and HGETALL come back empty
        return [item for item in results if item]

    async def get(self, item_id: str) -> Optional[Item]:
        with timed_call(self.name, "get"):
            try:
                item = await self.client.hgetall(self._key(item_id))
            except RedisError as e:
                raise self._wrap("get", e) from e
        return item or None

    async def update(self, item_id: str, fields: Item) -> Item:
        args = []
        for field, value in fields.items():
            args.extend([field, value])

        with timed_call(self.name, "update"):
            try:
                result = await self._update_script(keys=[self._key(item_id)], args=args)
            except RedisError as e:
                raise self._wrap("update", e) from e
            if result is None:
                raise NotFoundError("Prompt", item_id)
        return _pairs_to_item(result)

    async def delete(self, item_id: str) -> None:
        with timed_call(self.name, "delete"):
            try:
                await self.client.delete(self._key(item_id))
            except RedisError as e:
                raise self._wrap("delete", e) from e

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        try:
            return await self.client.ping()
        except Exception:
            return False
