"""Exception hierarchy for bucket-tools."""


class BucketToolsError(Exception):
    """Base exception for all bucket-tools errors."""

    pass


class ValidationError(BucketToolsError):
    """Raised when validation fails."""

    pass


class NotConfiguredError(BucketToolsError):
    """Raised when the default storage context is used before configure()."""

    pass


class NotFoundError(BucketToolsError):
    """Raised when an object or directory is required to exist but does not."""

    pass


class ObjectNotFoundError(NotFoundError):
    """Raised by an object store client when a key is absent."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Object not found: {key}")


class NotDirectoryError(BucketToolsError):
    """Raised when a directory operation is given a non-directory path."""

    pass


class InvalidObjectError(BucketToolsError):
    """Raised when a retrieved object has no readable body."""

    pass


class BatchDeleteError(BucketToolsError):
    """Raised when a batch delete leaves some keys in place."""

    def __init__(self, errors: list):
        self.errors = errors
        keys = ", ".join(str(error.get("Key")) for error in errors[:5])
        more = f" and {len(errors) - 5} more" if len(errors) > 5 else ""
        super().__init__(f"Failed to delete {len(errors)} key(s): {keys}{more}")
