"""General path utilities used internally."""
import os
from pathlib import Path
from typing import Union

from .exceptions import InvalidStoreFormat, PathEncodingError


def canonicalize_path(path: Union[str, Path]) -> Path:
    """Expand a leading ``~`` and return the absolute, canonical path."""
    return Path(path).expanduser().resolve()


def abspath2relpath(root: Path, path: Union[str, Path]) -> Path:
    """Make an absolute path relative to the store root.

    Raises:
        InvalidStoreFormat: If *path* is not located below *root*.
    """
    path = Path(path)
    try:
        return path.relative_to(root)
    except ValueError:
        raise InvalidStoreFormat(
            path, f"Path is not located inside the store at {root}"
        ) from None


def path2str(path: Union[str, Path]) -> str:
    """Return *path* as slash-separated text.

    Undecodable filenames reach Python as surrogate escapes; those cannot
    be encoded back to UTF-8 and are rejected.

    Raises:
        PathEncodingError: If the path is not representable as text.
    """
    text = Path(path).as_posix()
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        raise PathEncodingError(path) from None
    return text


def is_within(root: Path, path: Union[str, Path]) -> bool:
    """Check that *path*, once normalized, does not escape *root*."""
    normalized = Path(os.path.normpath(path))
    return normalized == root or root in normalized.parents
