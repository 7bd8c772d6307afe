"""S3-backed blob store for generated media."""

from botocore.exceptions import BotoCoreError, ClientError

from prompt_history.core.exceptions import StoreError
from prompt_history.observability.logging import get_logger
from prompt_history.services.storage.base import BlobStore, timed_call

logger = get_logger(__name__)


class S3BlobStore(BlobStore):
    """Blob store over a single S3 bucket.

    Args:
        client: An entered aioboto3 S3 client
        bucket: Bucket holding the media objects
    """

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    @property
    def name(self) -> str:
        return "s3"

    async def delete(self, key: str) -> None:
        with timed_call(self.name, "delete"):
            try:
                await self.client.delete_object(Bucket=self.bucket, Key=key)
            except (ClientError, BotoCoreError) as e:
                if isinstance(e, ClientError):
                    message = e.response.get("Error", {}).get("Message") or str(e)
                else:
                    message = str(e)
                logger.error(
                    f"S3 delete failed for {key}: {message}",
                    extra={"store": self.name, "bucket": self.bucket, "media_key": key},
                )
                raise StoreError(self.name, "delete", message) from e

    async def ping(self) -> bool:
        """Check the bucket is reachable."""
        try:
            await self.client.head_bucket(Bucket=self.bucket)
            return True
        except Exception as e:
            logger.error(f"S3 health check failed: {e}")
            return False
