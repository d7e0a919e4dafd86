"""Object and directory existence checks."""

from .probes import S3ExistenceProber

__all__ = ["S3ExistenceProber"]
