"""Path normalization for object store keys.

Object stores have no directories, only flat keys. This module maps
user-supplied, filesystem-looking paths onto store keys and decides whether
a path refers to a "directory" (a key prefix ending in a slash).

Rules, applied in order by :func:`normalize_path`:
    1. Collapse every run of forward or backward slashes into one ``/``
    2. Record directory intent (forced, or the path ends with a separator)
    3. Canonicalize ``.`` and ``..`` segments with POSIX semantics
    4. Strip one leading slash (store keys never begin with ``/``)
    5. Give directory keys exactly one trailing slash

The empty key is the bucket root and is always a directory.
"""

import posixpath
import re
from dataclasses import dataclass

HIDDEN_PREFIX = "_."

_SEPARATORS = re.compile(r"[\\/]+")


@dataclass(frozen=True)
class NormalizedPath:
    """A canonical store key and whether it names a directory.

    Attributes:
        key: Store-relative key, no leading slash; directory keys are empty
            (the bucket root) or end with exactly one slash
        is_directory: True when the key is a directory prefix
    """

    key: str
    is_directory: bool

    @property
    def is_root(self) -> bool:
        return self.key == ""


def _collapse_separators(path: str) -> str:
    return _SEPARATORS.sub("/", path)


def _canonicalize(path: str) -> str:
    """Resolve ``.``/``..`` segments while keeping any trailing separator."""
    if not path:
        return ""

    trailing = path.endswith("/")
    result = _collapse_separators(posixpath.normpath(path))

    if result == ".":
        return ""
    if trailing and not result.endswith("/"):
        result += "/"
    return result


def normalize_path(raw_path: str, directory: bool = False) -> NormalizedPath:
    """Canonicalize a user-supplied path into a store key.

    Args:
        raw_path: Path as given by the caller, with either separator style
        directory: Force directory semantics even without a trailing slash

    Returns:
        NormalizedPath for the path

    Example:
        >>> normalize_path("a//b\\\\c")
        NormalizedPath(key='a/b/c', is_directory=False)
        >>> normalize_path("a/b", directory=True)
        NormalizedPath(key='a/b/', is_directory=True)
    """
    stripped = raw_path.strip()
    working = _collapse_separators(stripped)

    is_directory = directory or stripped.endswith("/") or working.endswith("/")

    key = _canonicalize(working)
    if key.startswith("/"):
        key = key[1:]

    if is_directory and key and not key.endswith("/"):
        key = _canonicalize(key + "/")

    # The bucket root can only be a directory
    if not key:
        is_directory = True

    return NormalizedPath(key=key, is_directory=is_directory)


def relative_key(key: str, prefix: str) -> str:
    """Return the part of ``key`` below ``prefix``.

    Raises:
        ValueError: If ``key`` does not live under ``prefix``
    """
    if not key.startswith(prefix):
        raise ValueError(f"Key '{key}' is not under prefix '{prefix}'")
    return key[len(prefix):]


def get_object_name(object_path: str) -> str:
    """Return the final segment of a path.

    Directory-shaped paths return their last non-empty segment with a
    trailing slash, e.g. ``a/b/`` gives ``b/``.
    """
    parts = _canonicalize(_collapse_separators(object_path.strip())).split("/")
    name = parts[-1]
    if not name and len(parts) > 1:
        name = parts[-2] + "/"
    return name


def trim_object_path(object_path: str) -> str:
    """Canonicalize a path and strip one leading and one trailing slash.

    The bare root ``/`` is returned unchanged.
    """
    object_path = _canonicalize(_collapse_separators(object_path.strip()))

    if object_path == "/":
        return object_path
    if object_path.startswith("/"):
        object_path = object_path[1:]
    if object_path.endswith("/"):
        object_path = object_path[:-1]
    return object_path


def get_trimmed_object_name(object_path: str) -> str:
    return trim_object_path(get_object_name(object_path))


def is_hidden(object_path: str) -> bool:
    """Check whether the final path segment carries the hidden prefix."""
    return get_trimmed_object_name(object_path).startswith(HIDDEN_PREFIX)


def generate_hidden_name(object_name: str) -> str:
    """Return ``object_name`` marked as hidden.

    Names that already carry the hidden prefix are returned unchanged.
    """
    if object_name.startswith(HIDDEN_PREFIX):
        return object_name
    return HIDDEN_PREFIX + object_name
