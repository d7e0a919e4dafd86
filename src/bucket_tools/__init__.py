"""Filesystem-style directories on top of S3-compatible object storage.

Object stores only know flat keys. This package emulates directories with
key prefixes and delimiter listings, and provides recursive copy, move and
delete over whole trees.

Recommended Usage:
    Configure a default context once, then use the module-level coroutines:

    >>> from bucket_tools import S3StorageConfig, configure, make_directory
    >>> configure(S3StorageConfig(bucket="my-bucket", region_name="eu-west-1"))

Advanced Usage:
    Build an explicit context and pass it around instead of a global:

    >>> from bucket_tools import S3FileSystem, StorageContext
    >>> fs = S3FileSystem(StorageContext.from_config(config))
"""

__version__ = "0.1.0"

from .core.exceptions import (
    BatchDeleteError,
    BucketToolsError,
    InvalidObjectError,
    NotConfiguredError,
    NotDirectoryError,
    NotFoundError,
    ObjectNotFoundError,
    ValidationError,
)
from .objectstorage import (
    ListingPage,
    ObjectStoreClient,
    S3FileSystem,
    S3ObjectStore,
    StorageContext,
    configure,
    copy_directory,
    copy_object,
    delete_directory,
    delete_object,
    delete_objects,
    directory_exists,
    get_context,
    get_object,
    get_object_json,
    get_object_text,
    head_object,
    list_objects,
    make_directory,
    move_directory,
    move_object,
    object_exists,
    put_object,
    put_object_json,
)
from .path import (
    NormalizedPath,
    generate_hidden_name,
    get_object_name,
    get_trimmed_object_name,
    is_hidden,
    normalize_path,
    trim_object_path,
)
from .schemas import S3StorageConfig

__all__ = [
    # Configuration
    "S3StorageConfig",
    "StorageContext",
    "configure",
    "get_context",
    # Paths
    "NormalizedPath",
    "generate_hidden_name",
    "get_object_name",
    "get_trimmed_object_name",
    "is_hidden",
    "normalize_path",
    "trim_object_path",
    # Operations
    "ListingPage",
    "ObjectStoreClient",
    "S3FileSystem",
    "S3ObjectStore",
    "copy_directory",
    "copy_object",
    "delete_directory",
    "delete_object",
    "delete_objects",
    "directory_exists",
    "get_object",
    "get_object_json",
    "get_object_text",
    "head_object",
    "list_objects",
    "make_directory",
    "move_directory",
    "move_object",
    "object_exists",
    "put_object",
    "put_object_json",
    # Errors
    "BatchDeleteError",
    "BucketToolsError",
    "InvalidObjectError",
    "NotConfiguredError",
    "NotDirectoryError",
    "NotFoundError",
    "ObjectNotFoundError",
    "ValidationError",
]
