"""DynamoDB-backed record store.

Every attribute is stored as a DynamoDB string (``{"S": value}``); the
table's partition key is ``id``.
"""

from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from prompt_history.core.exceptions import NotFoundError, StoreError
from prompt_history.observability.logging import get_logger
from prompt_history.services.storage.base import Item, RecordStore, timed_call

logger = get_logger(__name__)

NOT_FOUND_CODES = {"ConditionalCheckFailedException", "ResourceNotFoundException"}


def _encode(item: Item) -> Dict[str, Dict[str, str]]:
    return {key: {"S": value} for key, value in item.items()}


def _decode(attributes: Dict[str, Dict[str, Any]]) -> Item:
    return {key: value["S"] for key, value in attributes.items() if "S" in value}


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Message") or str(exc)
    return str(exc)


class DynamoRecordStore(RecordStore):
    """Record store over a DynamoDB table.

    Args:
        client: An entered aioboto3 DynamoDB client
        table_name: Table holding the prompt items
    """

    def __init__(self, client, table_name: str):
        self.client = client
        self.table_name = table_name

    @property
    def name(self) -> str:
        return "dynamodb"

    def _wrap(self, operation: str, exc: Exception) -> StoreError:
        message = _error_message(exc)
        logger.error(
            f"DynamoDB {operation} failed: {message}",
            extra={"store": self.name, "operation": operation, "table": self.table_name},
        )
        return StoreError(self.name, operation, message)

    async def put(self, item: Item) -> None:
        with timed_call(self.name, "put"):
            try:
                await self.client.put_item(TableName=self.table_name, Item=_encode(item))
            except (ClientError, BotoCoreError) as e:
                raise self._wrap("put", e) from e

    async def scan(self) -> List[Item]:
        items: List[Item] = []
        params: Dict[str, Any] = {"TableName": self.table_name}
        with timed_call(self.name, "scan"):
            try:
                while True:
                    page = await self.client.scan(**params)
                    items.extend(_decode(raw) for raw in page.get("Items", []))
                    last_key = page.get("LastEvaluatedKey")
                    if not last_key:
                        break
                    params["ExclusiveStartKey"] = last_key
            except (ClientError, BotoCoreError) as e:
                raise self._wrap("scan", e) from e
        return items

    async def get(self, item_id: str) -> Optional[Item]:
        with timed_call(self.name, "get"):
            try:
                response = await self.client.get_item(
                    TableName=self.table_name,
                    Key={"id": {"S": item_id}},
                    ConsistentRead=True,
                )
            except (ClientError, BotoCoreError) as e:
                raise self._wrap("get", e) from e
        raw = response.get("Item")
        return _decode(raw) if raw else None

    async def update(self, item_id: str, fields: Item) -> Item:
        names = {}
        values = {}
        assignments = []
        for i, (field, value) in enumerate(fields.items()):
            names[f"#f{i}"] = field
            values[f":v{i}"] = {"S": value}
            assignments.append(f"#f{i} = :v{i}")

        with timed_call(self.name, "update"):
            try:
                response = await self.client.update_item(
                    TableName=self.table_name,
                    Key={"id": {"S": item_id}},
                    UpdateExpression="SET " + ", ".join(assignments),
                    ConditionExpression="attribute_exists(id)",
                    ExpressionAttributeNames=names,
                    ExpressionAttributeValues=values,
                    ReturnValues="ALL_NEW",
                )
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
                    raise NotFoundError("Prompt", item_id) from e
                raise self._wrap("update", e) from e
            except BotoCoreError as e:
                raise self._wrap("update", e) from e
        return _decode(response.get("Attributes", {}))

    async def delete(self, item_id: str) -> None:
        with timed_call(self.name, "delete"):
            try:
                await self.client.delete_item(
                    TableName=self.table_name,
                    Key={"id": {"S": item_id}},
                )
            except (ClientError, BotoCoreError) as e:
                raise self._wrap("delete", e) from e

    async def ping(self) -> bool:
        """Check the table is reachable."""
        try:
            await self.client.describe_table(TableName=self.table_name)
            return True
        except Exception as e:
            logger.error(f"DynamoDB health check failed: {e}")
            return False
