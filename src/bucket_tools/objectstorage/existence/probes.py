"""Existence checks for objects and emulated directories.

A directory exists when either its zero-byte marker object exists or at
least one key lives directly or indirectly beneath its prefix.
"""

from bucket_tools.core import get_logger
from bucket_tools.core.exceptions import NotFoundError
from bucket_tools.objectstorage.context import StorageContext
from bucket_tools.path import normalize_path

logger = get_logger(__name__)


class S3ExistenceProber:
    """Probes the store for objects and directories."""

    def __init__(self, context: StorageContext):
        """Initialize existence prober.

        Args:
            context: Storage context to probe
        """
        self.context = context

    async def object_exists(self, object_path: str) -> bool:
        """Check whether an object exists at the exact key.

        Only not-found conditions yield False; other store errors propagate.
        """
        key = normalize_path(object_path).key
        try:
            await self.context.store.head(key)
        except NotFoundError:
            logger.debug("Object not found", key=key)
            return False
        return True

    async def directory_exists(self, directory_path: str) -> bool:
        """Check whether a directory exists.

        The marker object is checked first to avoid a listing call; the
        bucket root has no marker and is always listed.
        """
        prefix = normalize_path(directory_path, directory=True).key

        if prefix and await self.object_exists(prefix):
            logger.debug("Directory marker found", prefix=prefix)
            return True

        try:
            page = await self.context.store.list(prefix, "/")
        except NotFoundError:
            logger.debug("Directory listing not found", prefix=prefix)
            return False

        exists = bool(page.get("Contents")) or bool(page.get("CommonPrefixes"))
        logger.debug("Directory probed", prefix=prefix, exists=exists)
        return exists
