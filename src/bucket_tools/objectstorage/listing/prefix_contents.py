"""One-level directory listing aggregated across truncated store pages."""

from dataclasses import dataclass
from typing import Optional

from bucket_tools.core import get_logger
from bucket_tools.objectstorage.context import StorageContext
from bucket_tools.path import normalize_path

logger = get_logger(__name__)

DELIMITER = "/"


@dataclass(frozen=True)
class ListingPage:
    """The complete contents of one directory level.

    Attributes:
        prefix: Normalized directory key that was listed
        object_keys: Keys directly under the prefix, in store order
        common_prefixes: Child directory keys, in first-seen order
        truncated: Always False once aggregation has finished
    """

    prefix: str
    object_keys: tuple[str, ...] = ()
    common_prefixes: tuple[str, ...] = ()
    truncated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.object_keys and not self.common_prefixes


class S3PrefixLister:
    """Lists objects and common prefixes (subdirectory equivalents)."""

    def __init__(self, context: StorageContext, page_size: Optional[int] = None):
        """Initialize S3 prefix lister.

        Args:
            context: Storage context to list from
            page_size: Keys per store request; the store's default when None
        """
        self.context = context
        self.page_size = page_size

    async def list_objects(
        self,
        directory_path: Optional[str] = None,
        continuation_token: Optional[str] = None,
    ) -> ListingPage:
        """List one directory level, following continuation tokens to the end.

        For example, with objects:
        - data/file.txt
        - data/2023/file1.txt
        - data/2024/file2.txt

        Listing ``data`` returns object key ``data/file.txt`` and common
        prefixes ``data/2023/`` and ``data/2024/``.

        Args:
            directory_path: Directory to list; the bucket root when None
            continuation_token: Token to resume a previous listing from

        Returns:
            ListingPage with every key and child prefix at this level
        """
        prefix = normalize_path(directory_path or "", directory=True).key
        return await self.list_prefix(prefix, continuation_token)

    async def list_prefix(
        self, prefix: str, continuation_token: Optional[str] = None
    ) -> ListingPage:
        """List one level under a store prefix exactly as given.

        Prefixes reported by the store are passed back here unchanged while
        walking a tree, so ``a//`` is listed as its own level rather than
        folded into ``a/``.
        """
        logger.info("Listing directory", prefix=prefix)

        object_keys: list[str] = []
        common_prefixes: dict[str, None] = {}
        token = continuation_token
        pages = 0

        while True:
            response = await self.context.store.list(
                prefix, DELIMITER, continuation_token=token, max_keys=self.page_size
            )
            pages += 1

            object_keys.extend(
                obj["Key"] for obj in response.get("Contents", []) if obj.get("Key")
            )
            for prefix_info in response.get("CommonPrefixes", []):
                if prefix_info.get("Prefix"):
                    common_prefixes.setdefault(prefix_info["Prefix"], None)

            if not response.get("IsTruncated"):
                break

            token = response.get("NextContinuationToken")
            if not token:
                break
            logger.debug("Listing truncated, fetching next page", prefix=prefix, page=pages)

        logger.info(
            "Directory listed",
            prefix=prefix,
            object_count=len(object_keys),
            prefix_count=len(common_prefixes),
            pages=pages,
        )
        return ListingPage(
            prefix=prefix,
            object_keys=tuple(object_keys),
            common_prefixes=tuple(common_prefixes),
        )
