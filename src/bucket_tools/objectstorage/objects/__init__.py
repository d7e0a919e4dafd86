"""Single-object operations."""

from .object_operations import S3ObjectOperations, byte_range

__all__ = ["S3ObjectOperations", "byte_range"]
