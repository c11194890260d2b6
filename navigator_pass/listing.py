"""Directory Lister — Recursively map a store directory to entries."""
import os
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .conf import IGNORED_NAMES, SECRET_SUFFIX
from .entry import StoreDirectory, StoreEntry, StoreFile
from .exceptions import InvalidStoreFormat

if TYPE_CHECKING:
    from .store import PasswordStore

logger = logging.getLogger("navigator.pass")


def list_and_map_folder(
    store: "PasswordStore", path: Union[str, Path]
) -> frozenset[StoreEntry]:
    """Inspect the folder at *path* and recursively map its content to entries.

    Regular files without the secret suffix are skipped, and so are reserved
    names such as ``.git``. The first malformed child aborts the whole
    listing; partial results are never returned.

    Raises:
        InvalidStoreFormat: If a child is neither a regular file nor a
            directory (a dangling symlink, a FIFO, a device...).
        OSError: If a directory cannot be read.
    """
    logger.debug("Listing files in %s", path)
    entries = []
    with os.scandir(path) as it:
        for child in it:
            if child.name in IGNORED_NAMES:
                continue
            if child.is_file():
                if os.path.splitext(child.name)[1] != SECRET_SUFFIX:
                    continue
                entries.append(StoreFile(store, child.path))
            elif child.is_dir():
                entries.append(
                    StoreDirectory(
                        store,
                        child.path,
                        list_and_map_folder(store, child.path),
                    )
                )
            else:
                raise InvalidStoreFormat(
                    child.path,
                    "File is neither a regular file nor a directory but pass "
                    "stores can only contain those types of files",
                )
    return frozenset(entries)
