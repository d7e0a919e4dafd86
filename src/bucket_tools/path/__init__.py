from .normalization import (
    HIDDEN_PREFIX,
    NormalizedPath,
    generate_hidden_name,
    get_object_name,
    get_trimmed_object_name,
    is_hidden,
    normalize_path,
    relative_key,
    trim_object_path,
)

__all__ = [
    "HIDDEN_PREFIX",
    "NormalizedPath",
    "generate_hidden_name",
    "get_object_name",
    "get_trimmed_object_name",
    "is_hidden",
    "normalize_path",
    "relative_key",
    "trim_object_path",
]
