"""Record and blob store adapters."""

from contextlib import AsyncExitStack
from typing import Tuple

import aioboto3

from prompt_history.core.config import Settings
from prompt_history.services.storage.base import BlobStore, Item, RecordStore
from prompt_history.services.storage.dynamodb import DynamoRecordStore
from prompt_history.services.storage.redis_store import RedisRecordStore, create_redis_client
from prompt_history.services.storage.s3 import S3BlobStore


async def build_stores(
    config: Settings,
    stack: AsyncExitStack,
) -> Tuple[RecordStore, BlobStore]:
    """
    Create the configured record store and the media blob store.

    Clients are registered on ``stack`` and closed when it unwinds.

    Args:
        config: Application settings
        stack: Exit stack owned by the application lifespan

    Returns:
        Tuple of (record_store, blob_store)
    """
    session = aioboto3.Session()
    aws_kwargs = {"region_name": config.AWS_REGION}
    if config.AWS_ENDPOINT_URL:
        aws_kwargs["endpoint_url"] = config.AWS_ENDPOINT_URL

    if config.RECORD_STORE_BACKEND == "redis":
        redis = create_redis_client(config.REDIS_URL, config.REDIS_MAX_CONNECTIONS)
        stack.push_async_callback(redis.aclose)
        record_store: RecordStore = RedisRecordStore(redis, key_prefix=config.REDIS_KEY_PREFIX)
    else:
        dynamodb = await stack.enter_async_context(session.client("dynamodb", **aws_kwargs))
        record_store = DynamoRecordStore(dynamodb, config.DYNAMODB_TABLE)

    s3 = await stack.enter_async_context(session.client("s3", **aws_kwargs))
    blob_store = S3BlobStore(s3, config.MEDIA_BUCKET)

    return record_store, blob_store


__all__ = [
    "BlobStore",
    "DynamoRecordStore",
    "Item",
    "RecordStore",
    "RedisRecordStore",
    "S3BlobStore",
    "build_stores",
    "create_redis_client",
]
