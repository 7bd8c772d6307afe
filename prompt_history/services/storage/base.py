"""Base store interfaces consumed by the prompt service."""

import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from prompt_history.core.exceptions import NotFoundError
from prompt_history.observability.metrics import metrics

# Flat store item: attribute name -> string value
Item = Dict[str, str]


class RecordStore(ABC):
    """Abstract key-value store holding one item per prompt, keyed by id."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name used in logs, metrics and errors."""
        pass

    @abstractmethod
    async def put(self, item: Item) -> None:
        """
        Write an item, replacing any existing item with the same id.

        Raises:
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    async def scan(self) -> List[Item]:
        """
        Return every item in the store, in store order.

        Raises:
            StoreError: If the scan fails
        """
        pass

    @abstractmethod
    async def get(self, item_id: str) -> Optional[Item]:
        """
        Fetch a single item.

        Returns:
            The item, or None if no item has this id

        Raises:
            StoreError: If the read fails
        """
        pass

    @abstractmethod
    async def update(self, item_id: str, fields: Item) -> Item:
        """
        Overwrite fields of an existing item.

        The update only applies if the item exists; it never creates one.

        Returns:
            All attributes of the item after the update

        Raises:
            NotFoundError: If no item has this id
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    async def delete(self, item_id: str) -> None:
        """
        Delete an item. Deleting a missing item is not an error.

        Raises:
            StoreError: If the delete fails
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check store connectivity."""
        pass


class BlobStore(ABC):
    """Abstract object store supporting deletion by key."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name used in logs, metrics and errors."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete an object. Deleting a missing object is not an error.

        Raises:
            StoreError: If the delete fails
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check store connectivity."""
        pass


@contextmanager
def timed_call(store: str, operation: str) -> Iterator[None]:
    """Record the duration of a store call, and a failure if it raises."""
    start = time.perf_counter()
    try:
        yield
    except NotFoundError:
        raise
    except Exception:
        metrics.record_store_error(store, operation)
        raise
    finally:
        metrics.record_store_call(store, operation, time.perf_counter() - start)
