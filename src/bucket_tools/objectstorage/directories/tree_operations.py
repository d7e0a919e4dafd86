"""Recursive copy, move, delete and create for emulated directories.

Every operation is a strictly sequential walk: one store request is awaited
before the next is issued, one sub-directory at a time. Nothing is rolled
back if a walk fails or is cancelled part way through, so a tree may be left
partially copied or partially deleted.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from bucket_tools.core import get_logger, get_tracer
from bucket_tools.core.exceptions import (
    NotDirectoryError,
    NotFoundError,
    ValidationError,
)
from bucket_tools.objectstorage.context import StorageContext
from bucket_tools.objectstorage.existence import S3ExistenceProber
from bucket_tools.objectstorage.listing import S3PrefixLister
from bucket_tools.objectstorage.objects import S3ObjectOperations
from bucket_tools.path import normalize_path, relative_key

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class S3DirectoryOperations:
    """Copies, moves, deletes and creates directories and their objects."""

    def __init__(
        self,
        context: StorageContext,
        objects: Optional[S3ObjectOperations] = None,
        prober: Optional[S3ExistenceProber] = None,
        lister: Optional[S3PrefixLister] = None,
    ):
        """Initialize directory operations.

        Args:
            context: Storage context to operate on
            objects: Single-object operations (created from context if None)
            prober: Existence prober (created from context if None)
            lister: Directory lister (created from context if None)
        """
        self.context = context
        self.objects = objects or S3ObjectOperations(context)
        self.prober = prober or S3ExistenceProber(context)
        self.lister = lister or S3PrefixLister(context)

    async def copy_object(
        self, source_path: str, destination_path: str, delete_original: bool = False
    ) -> Dict[str, Any]:
        """Copy one object by reading it and writing it to the destination.

        Args:
            source_path: Object to copy
            destination_path: Key to write
            delete_original: Delete the source once the write has succeeded

        Returns:
            The store's put response

        Raises:
            ObjectNotFoundError: If the source does not exist
            InvalidObjectError: If the source has no readable body
        """
        source = normalize_path(source_path).key
        destination = normalize_path(destination_path).key
        return await self._copy_key(source, destination, delete_original)

    async def _copy_key(
        self, source: str, destination: str, delete_original: bool
    ) -> Dict[str, Any]:
        body = await self.objects.read_key(source)
        result = await self.context.store.put(
            destination, body, **self.context.put_parameters()
        )
        logger.debug("Object copied", source=source, destination=destination)

        if delete_original and source != destination:
            await self.objects.delete_key(source)

        return result

    async def copy_directory(
        self,
        source_directory: str,
        destination_directory: str,
        delete_original: bool = False,
    ) -> List[Dict[str, Any]]:
        """Copy a directory tree, level by level.

        Each key is mapped by stripping the source prefix and joining the
        remainder onto the destination prefix, so ``src/sub/b.txt`` copied
        to ``dst`` becomes ``dst/sub/b.txt``.

        Args:
            source_directory: Directory to copy
            destination_directory: Directory to copy into
            delete_original: Remove the source tree once copied

        Returns:
            Put responses for every object copied, across the whole tree

        Raises:
            NotFoundError: If the source directory does not exist
            ValidationError: If the destination lies inside the source
        """
        source = normalize_path(source_directory, directory=True).key
        destination = normalize_path(destination_directory, directory=True).key

        if destination.startswith(source):
            raise ValidationError(
                f"Cannot copy directory '{source}' into itself ('{destination}')"
            )

        with tracer.start_as_current_span(
            "copy_directory",
            attributes={"source": source, "destination": destination},
        ):
            if not await self.prober.directory_exists(source):
                raise NotFoundError(f"Object directory not found: {source}")

            logger.info(
                "Copying directory",
                source=source,
                destination=destination,
                delete_original=delete_original,
            )
            results = await self._copy_tree(source, destination, delete_original)

            if delete_original and await self.prober.directory_exists(source):
                await self._delete_tree(source)

            logger.info(
                "Directory copied",
                source=source,
                destination=destination,
                object_count=len(results),
            )
            return results

    async def _copy_tree(
        self, source: str, destination: str, delete_original: bool
    ) -> List[Dict[str, Any]]:
        # Listed keys and prefixes are store keys; they are never re-normalized.
        page = await self.lister.list_prefix(source)
        results: List[Dict[str, Any]] = []

        for key in page.object_keys:
            target = destination + relative_key(key, source)
            results.append(await self._copy_key(key, target, delete_original))

        for sub_directory in page.common_prefixes:
            target = destination + relative_key(sub_directory, source)
            results.extend(
                await self._copy_tree(sub_directory, target, delete_original)
            )

        return results

    async def delete_directory(self, directory_path: str) -> Optional[Dict[str, Any]]:
        """Delete a directory tree bottom-up.

        Every child directory is deleted first, then the objects directly
        under this level in one batch, then the directory marker.

        Returns:
            The marker delete response, or None when there was nothing to
            delete (or the directory is the bucket root, which has no marker)

        Raises:
            NotDirectoryError: If the path is not a directory path
        """
        normalized = normalize_path(directory_path, directory=True)
        if not normalized.is_directory:
            raise NotDirectoryError(f"Path not a directory: {directory_path}")

        with tracer.start_as_current_span(
            "delete_directory", attributes={"prefix": normalized.key}
        ):
            return await self._delete_tree(normalized.key)

    async def _delete_tree(self, prefix: str) -> Optional[Dict[str, Any]]:
        page = await self.lister.list_prefix(prefix)
        if page.is_empty:
            logger.debug("Directory already empty", prefix=prefix)
            return None

        logger.info(
            "Deleting directory",
            prefix=prefix,
            object_count=len(page.object_keys),
            prefix_count=len(page.common_prefixes),
        )

        for sub_directory in page.common_prefixes:
            await self._delete_tree(sub_directory)

        if page.object_keys:
            await self.objects.delete_keys(page.object_keys)

        if not prefix:
            return None
        return await self.objects.delete_key(prefix)

    async def delete_object(self, object_path: str) -> Optional[Dict[str, Any]]:
        """Delete an object, or a whole tree for directory-shaped paths."""
        normalized = normalize_path(object_path)
        if normalized.is_directory:
            return await self.delete_directory(normalized.key)
        return await self.objects.delete_key(normalized.key)

    async def delete_objects(
        self, object_paths: Union[str, Sequence[str]]
    ) -> Optional[Dict[str, Any]]:
        """Delete one path or a batch of object keys.

        A single string is handled by delete_object. A sequence is deleted
        in one batch request; an empty one returns None without a request.
        """
        if not object_paths:
            return None
        if isinstance(object_paths, str):
            return await self.delete_object(object_paths)

        keys = [normalize_path(path).key for path in object_paths]
        logger.info("Deleting objects", key_count=len(keys))
        return await self.objects.delete_keys(keys)

    async def move_object(
        self, source_path: str, destination_path: str
    ) -> Dict[str, Any]:
        return await self.copy_object(source_path, destination_path, True)

    async def move_directory(
        self, source_directory: str, destination_directory: str
    ) -> List[Dict[str, Any]]:
        return await self.copy_directory(source_directory, destination_directory, True)

    async def make_directory(self, directory_path: str) -> Optional[Dict[str, Any]]:
        """Create a directory by writing a zero-byte marker object.

        Returns:
            The put response, or None if the directory already exists
        """
        normalized = normalize_path(directory_path, directory=True)
        if normalized.is_root or await self.prober.directory_exists(normalized.key):
            logger.debug("Directory already exists", prefix=normalized.key)
            return None

        logger.info("Creating directory", prefix=normalized.key)
        return await self.context.store.put(
            normalized.key, b"", **self.context.put_parameters()
        )
