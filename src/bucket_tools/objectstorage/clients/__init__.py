"""S3 client management and the object store client protocol."""

from .s3_client import ObjectStoreClient, S3ClientManager, S3ObjectStore, is_not_found

__all__ = ["ObjectStoreClient", "S3ClientManager", "S3ObjectStore", "is_not_found"]
