"""Navigator Pass — Typed access to pass-compatible password stores.

Entries are listed and retrieved through a :class:`PasswordStore`; the
package-level :func:`list_entries` and :func:`retrieve` use a default store
configured from ``PASSWORD_STORE_DIR`` (``~/.password-store`` if unset),
just like pass itself::

    entry = navigator_pass.retrieve("folder/subsecret-a")
    with entry.plain_io_rw() as secret:
        secret.buffer += b"appended line\\n"

Security Note (Threat Model):
    Decrypted secrets are held in process memory while a plaintext handle
    is alive. Handles do not lock files: concurrent read-write handles on
    the same secret race and the last synchronize wins.
"""
from typing import Optional

from .version import __version__
from .config import StoreConfig
from .engine import CryptoEngine, GnuPGEngine
from .entry import StoreEntry, StoreDirectory, StoreFile
from .exceptions import (
    PassError,
    StoreNotFound,
    InvalidStoreFormat,
    EntryNotFound,
    AmbiguousPassName,
    PathEncodingError,
    EngineError,
)
from .file_io import CipherFile, PlainFile, PlainFileRW
from .store import PasswordStore

_default_store: Optional[PasswordStore] = None


def default_store() -> PasswordStore:
    """Return the store configured from the environment, opening it once."""
    global _default_store
    if _default_store is None:
        _default_store = PasswordStore()
    return _default_store


def list_entries() -> frozenset[StoreEntry]:
    """List all entries in the default password store."""
    return default_store().list()


def retrieve(pass_name: str) -> StoreEntry:
    """Retrieve the entry identified by *pass_name* from the default store."""
    return default_store().retrieve(pass_name)


__all__ = [
    "__version__",
    "PasswordStore",
    "StoreConfig",
    "CryptoEngine",
    "GnuPGEngine",
    "StoreEntry",
    "StoreDirectory",
    "StoreFile",
    "CipherFile",
    "PlainFile",
    "PlainFileRW",
    "PassError",
    "StoreNotFound",
    "InvalidStoreFormat",
    "EntryNotFound",
    "AmbiguousPassName",
    "PathEncodingError",
    "EngineError",
    "default_store",
    "list_entries",
    "retrieve",
]
