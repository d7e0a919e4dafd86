"""Object storage operations for S3-compatible services."""

from .clients import ObjectStoreClient, S3ClientManager, S3ObjectStore
from .context import StorageContext, configure, get_context, reset_context
from .listing import ListingPage
from .s3_operations import (
    S3FileSystem,
    copy_directory,
    copy_object,
    delete_directory,
    delete_object,
    delete_objects,
    directory_exists,
    get_filesystem,
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

__all__ = [
    "ListingPage",
    "ObjectStoreClient",
    "S3ClientManager",
    "S3FileSystem",
    "S3ObjectStore",
    "StorageContext",
    "configure",
    "copy_directory",
    "copy_object",
    "delete_directory",
    "delete_object",
    "delete_objects",
    "directory_exists",
    "get_context",
    "get_filesystem",
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
    "reset_context",
]
