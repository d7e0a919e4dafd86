"""Single-object reads and writes against normalized store keys."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence, Type, TypeVar

import pydantic_core
from pydantic import BaseModel

from bucket_tools.core import get_logger
from bucket_tools.core.exceptions import InvalidObjectError
from bucket_tools.objectstorage.context import StorageContext
from bucket_tools.path import normalize_path

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def byte_range(start: Optional[int] = None, end: Optional[int] = None) -> Optional[str]:
    """Build an HTTP Range header value, or None for the whole object."""
    if start is not None and end is not None:
        return f"bytes={start}-{end}"
    if start is not None:
        return f"bytes={start}-"
    if end is not None:
        return f"bytes=0-{end}"
    return None


class S3ObjectOperations:
    """Reads and writes individual objects."""

    def __init__(self, context: StorageContext):
        self.context = context

    @property
    def store(self):
        return self.context.store

    async def get_object(
        self, object_path: str, start: Optional[int] = None, end: Optional[int] = None
    ) -> Dict[str, Any]:
        """Fetch an object, optionally a byte range of it.

        Args:
            object_path: Object path
            start: First byte offset (inclusive)
            end: Last byte offset (inclusive)

        Returns:
            Store response whose ``Body`` holds the object bytes

        Raises:
            ObjectNotFoundError: If the object does not exist
        """
        key = normalize_path(object_path).key
        logger.debug("Getting object", key=key, start=start, end=end)
        return await self.store.get(key, range=byte_range(start, end))

    async def get_object_bytes(self, object_path: str) -> bytes:
        """Fetch an object's body.

        Raises:
            InvalidObjectError: If the response has no body
        """
        return await self.read_key(normalize_path(object_path).key)

    async def read_key(self, key: str) -> bytes:
        """Fetch the body of an already-normalized key."""
        logger.debug("Getting object", key=key)
        response = await self.store.get(key)
        body = response.get("Body")
        if body is None:
            raise InvalidObjectError(f"Object has no readable body: {key}")
        return body

    async def get_object_text(self, object_path: str, encoding: str = "utf-8") -> str:
        return (await self.get_object_bytes(object_path)).decode(encoding)

    async def get_object_json(
        self, object_path: str, model: Optional[Type[ModelT]] = None
    ) -> Any:
        """Fetch and decode a JSON object.

        Args:
            object_path: Object path
            model: Optional pydantic model to validate the document into

        Returns:
            The model instance when ``model`` is given, else the decoded value
        """
        body = await self.get_object_bytes(object_path)
        if model is not None:
            return model.model_validate_json(body)
        return pydantic_core.from_json(body)

    async def head_object(self, object_path: str) -> Dict[str, Any]:
        key = normalize_path(object_path).key
        return await self.store.head(key)

    async def put_object(self, object_path: str, content: Any = None) -> Dict[str, Any]:
        """Write an object as a private, optionally KMS-encrypted, key.

        When ``content`` is None the body is the current UTC timestamp.
        """
        key = normalize_path(object_path).key
        if content is None:
            content = datetime.now(timezone.utc).isoformat()

        logger.debug("Putting object", key=key)
        return await self.store.put(key, content, **self.context.put_parameters())

    async def put_object_json(
        self, object_path: str, content: Any, pretty: bool = False
    ) -> Dict[str, Any]:
        """Serialize ``content`` as JSON and write it."""
        indent = 2 if pretty else None
        if isinstance(content, BaseModel):
            body = content.model_dump_json(indent=indent).encode("utf-8")
        else:
            body = pydantic_core.to_json(content, indent=indent)
        return await self.put_object(object_path, body)

    async def delete_key(self, key: str) -> Dict[str, Any]:
        """Delete one already-normalized key."""
        logger.debug("Deleting object", key=key)
        return await self.store.delete(key)

    async def delete_keys(self, keys: Sequence[str]) -> Dict[str, Any]:
        """Delete already-normalized keys in a single batch request."""
        logger.debug("Deleting objects", key_count=len(keys))
        return await self.store.delete_many(list(keys))
