"""Filesystem-style operations over an S3 bucket.

This module consolidates the object, existence, listing and directory
operations behind one interface. :class:`S3FileSystem` works on an explicit
:class:`StorageContext`; the module-level functions use the process-wide
context installed by :func:`configure`.

Example:
    configure(S3StorageConfig(bucket="my-bucket"))
    results = await copy_directory("reports/2024", "archive/reports/2024")
"""

from typing import Any, Dict, List, Optional, Sequence, Type, Union

from bucket_tools.core import get_logger
from bucket_tools.objectstorage.context import StorageContext, get_context
from bucket_tools.objectstorage.directories import S3DirectoryOperations
from bucket_tools.objectstorage.existence import S3ExistenceProber
from bucket_tools.objectstorage.listing import ListingPage, S3PrefixLister
from bucket_tools.objectstorage.objects import S3ObjectOperations

logger = get_logger(__name__)


class S3FileSystem:
    """All bucket operations bound to one storage context."""

    def __init__(self, context: StorageContext, page_size: Optional[int] = None):
        """Initialize the filesystem.

        Args:
            context: Storage context to operate on
            page_size: Keys per listing request; the store's default when None
        """
        self.context = context
        self.objects = S3ObjectOperations(context)
        self.prober = S3ExistenceProber(context)
        self.lister = S3PrefixLister(context, page_size=page_size)
        self.directories = S3DirectoryOperations(
            context, objects=self.objects, prober=self.prober, lister=self.lister
        )
        logger.info("S3 filesystem initialized", bucket=context.bucket)

    # Existence
    async def object_exists(self, object_path: str) -> bool:
        return await self.prober.object_exists(object_path)

    async def directory_exists(self, directory_path: str) -> bool:
        return await self.prober.directory_exists(directory_path)

    # Listing
    async def list_objects(
        self,
        directory_path: Optional[str] = None,
        continuation_token: Optional[str] = None,
    ) -> ListingPage:
        return await self.lister.list_objects(directory_path, continuation_token)

    # Single objects
    async def get_object(
        self, object_path: str, start: Optional[int] = None, end: Optional[int] = None
    ) -> Dict[str, Any]:
        return await self.objects.get_object(object_path, start, end)

    async def get_object_text(self, object_path: str, encoding: str = "utf-8") -> str:
        return await self.objects.get_object_text(object_path, encoding)

    async def get_object_json(self, object_path: str, model: Optional[Type] = None) -> Any:
        return await self.objects.get_object_json(object_path, model)

    async def head_object(self, object_path: str) -> Dict[str, Any]:
        return await self.objects.head_object(object_path)

    async def put_object(self, object_path: str, content: Any = None) -> Dict[str, Any]:
        return await self.objects.put_object(object_path, content)

    async def put_object_json(
        self, object_path: str, content: Any, pretty: bool = False
    ) -> Dict[str, Any]:
        return await self.objects.put_object_json(object_path, content, pretty)

    # Copy, move, delete, create
    async def copy_object(
        self, source_path: str, destination_path: str, delete_original: bool = False
    ) -> Dict[str, Any]:
        return await self.directories.copy_object(
            source_path, destination_path, delete_original
        )

    async def copy_directory(
        self,
        source_directory: str,
        destination_directory: str,
        delete_original: bool = False,
    ) -> List[Dict[str, Any]]:
        return await self.directories.copy_directory(
            source_directory, destination_directory, delete_original
        )

    async def move_object(self, source_path: str, destination_path: str) -> Dict[str, Any]:
        return await self.directories.move_object(source_path, destination_path)

    async def move_directory(
        self, source_directory: str, destination_directory: str
    ) -> List[Dict[str, Any]]:
        return await self.directories.move_directory(
            source_directory, destination_directory
        )

    async def delete_object(self, object_path: str) -> Optional[Dict[str, Any]]:
        return await self.directories.delete_object(object_path)

    async def delete_objects(
        self, object_paths: Union[str, Sequence[str]]
    ) -> Optional[Dict[str, Any]]:
        return await self.directories.delete_objects(object_paths)

    async def delete_directory(self, directory_path: str) -> Optional[Dict[str, Any]]:
        return await self.directories.delete_directory(directory_path)

    async def make_directory(self, directory_path: str) -> Optional[Dict[str, Any]]:
        return await self.directories.make_directory(directory_path)


def get_filesystem() -> S3FileSystem:
    """Return a filesystem over the configured default context.

    Raises:
        NotConfiguredError: If configure() has not been called
    """
    return S3FileSystem(get_context())


# Module-level operations on the default context
async def object_exists(object_path: str) -> bool:
    return await get_filesystem().object_exists(object_path)


async def directory_exists(directory_path: str) -> bool:
    return await get_filesystem().directory_exists(directory_path)


async def list_objects(
    directory_path: Optional[str] = None, continuation_token: Optional[str] = None
) -> ListingPage:
    return await get_filesystem().list_objects(directory_path, continuation_token)


async def get_object(
    object_path: str, start: Optional[int] = None, end: Optional[int] = None
) -> Dict[str, Any]:
    return await get_filesystem().get_object(object_path, start, end)


async def get_object_text(object_path: str, encoding: str = "utf-8") -> str:
    return await get_filesystem().get_object_text(object_path, encoding)


async def get_object_json(object_path: str, model: Optional[Type] = None) -> Any:
    return await get_filesystem().get_object_json(object_path, model)


async def head_object(object_path: str) -> Dict[str, Any]:
    return await get_filesystem().head_object(object_path)


async def put_object(object_path: str, content: Any = None) -> Dict[str, Any]:
    return await get_filesystem().put_object(object_path, content)


async def put_object_json(
    object_path: str, content: Any, pretty: bool = False
) -> Dict[str, Any]:
    return await get_filesystem().put_object_json(object_path, content, pretty)


async def copy_object(
    source_path: str, destination_path: str, delete_original: bool = False
) -> Dict[str, Any]:
    return await get_filesystem().copy_object(
        source_path, destination_path, delete_original
    )


async def copy_directory(
    source_directory: str, destination_directory: str, delete_original: bool = False
) -> List[Dict[str, Any]]:
    return await get_filesystem().copy_directory(
        source_directory, destination_directory, delete_original
    )


async def move_object(source_path: str, destination_path: str) -> Dict[str, Any]:
    return await get_filesystem().move_object(source_path, destination_path)


async def move_directory(
    source_directory: str, destination_directory: str
) -> List[Dict[str, Any]]:
    return await get_filesystem().move_directory(source_directory, destination_directory)


async def delete_object(object_path: str) -> Optional[Dict[str, Any]]:
    return await get_filesystem().delete_object(object_path)


async def delete_objects(
    object_paths: Union[str, Sequence[str]],
) -> Optional[Dict[str, Any]]:
    return await get_filesystem().delete_objects(object_paths)


async def delete_directory(directory_path: str) -> Optional[Dict[str, Any]]:
    return await get_filesystem().delete_directory(directory_path)


async def make_directory(directory_path: str) -> Optional[Dict[str, Any]]:
    return await get_filesystem().make_directory(directory_path)
