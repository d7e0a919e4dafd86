"""Storage context: one configuration bound to one object store client.

Engine classes take a :class:`StorageContext` explicitly. For callers that
prefer module-level functions, :func:`configure` installs a process-wide
default context which :func:`get_context` returns. There is no implicit
configuration: using the default before :func:`configure` raises
NotConfiguredError.

Replacing the default with a second :func:`configure` call is last writer
wins and is not synchronized; concurrent first-time configuration from
several tasks should be avoided.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from bucket_tools.core import get_logger
from bucket_tools.core.config import StorageEnvironment
from bucket_tools.core.exceptions import NotConfiguredError
from bucket_tools.objectstorage.clients import ObjectStoreClient, S3ObjectStore
from bucket_tools.schemas import S3StorageConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class StorageContext:
    """An immutable pairing of storage configuration and store client."""

    config: S3StorageConfig
    store: ObjectStoreClient

    @classmethod
    def from_config(cls, config: S3StorageConfig) -> "StorageContext":
        """Create a context with a boto3-backed store for ``config``."""
        return cls(config=config, store=S3ObjectStore.from_config(config))

    @classmethod
    def from_environment(cls, **overrides: Any) -> "StorageContext":
        """Create a context from the SS_AWS_* environment variables."""
        return cls.from_config(StorageEnvironment().to_storage_config(**overrides))

    @property
    def bucket(self) -> str:
        return self.config.bucket

    def put_parameters(self) -> Dict[str, Any]:
        """Request parameters attached to every write."""
        return {"ACL": "private", **self.config.server_side_encryption()}


_default_context: Optional[StorageContext] = None


def configure(
    config: Optional[S3StorageConfig] = None,
    store: Optional[ObjectStoreClient] = None,
) -> StorageContext:
    """Install the process-wide default storage context.

    Args:
        config: Storage configuration; read from the environment when omitted
        store: Object store client; a boto3-backed store when omitted

    Returns:
        The installed StorageContext
    """
    global _default_context

    if config is None:
        config = StorageEnvironment().to_storage_config()

    if store is None:
        context = StorageContext.from_config(config)
    else:
        context = StorageContext(config=config, store=store)

    _default_context = context
    logger.info(
        "Storage context configured",
        bucket=config.bucket,
        region=config.region_name,
        kms=bool(config.kms_key_id),
    )
    return context


def get_context() -> StorageContext:
    """Return the default storage context.

    Raises:
        NotConfiguredError: If configure() has not been called
    """
    if _default_context is None:
        raise NotConfiguredError(
            "Storage is not configured; call bucket_tools.configure() first"
        )
    return _default_context


def reset_context() -> None:
    """Forget the default storage context."""
    global _default_context
    _default_context = None
