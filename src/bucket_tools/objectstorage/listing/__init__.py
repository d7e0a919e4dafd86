"""Object storage listing operations."""

from .prefix_contents import ListingPage, S3PrefixLister

__all__ = ["ListingPage", "S3PrefixLister"]
