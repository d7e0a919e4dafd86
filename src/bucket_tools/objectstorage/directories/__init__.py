"""Recursive directory operations over flat object keys."""

from .tree_operations import S3DirectoryOperations

__all__ = ["S3DirectoryOperations"]
