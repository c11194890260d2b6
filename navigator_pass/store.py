"""
PasswordStore — The context every listing, retrieval and key lookup runs in.

A store binds together a canonical root directory, the crypto engine and a
per-session cache of resolved ``.gpg-id`` manifests. Several stores can
coexist in one process; nothing here reads global state once the store is
constructed.
"""
import os
import logging
from pathlib import Path
from typing import Optional

from .conf import SECRET_SUFFIX
from .config import StoreConfig
from .engine import CryptoEngine, GnuPGEngine, KeyHandle
from .entry import StoreDirectory, StoreEntry, StoreFile
from .exceptions import (
    AmbiguousPassName,
    EntryNotFound,
    InvalidStoreFormat,
    StoreNotFound,
)
from .listing import list_and_map_folder
from .utils import is_within

logger = logging.getLogger("navigator.pass")


class PasswordStore:
    """A pass-compatible password store rooted at ``config.store_dir``.

    Args:
        config: Store configuration; loaded from the environment if omitted.
        engine: Crypto engine; a :class:`GnuPGEngine` built from *config*
            if omitted.

    Raises:
        StoreNotFound: If the store root is not an existing directory.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        engine: Optional[CryptoEngine] = None,
    ):
        self._config = config or StoreConfig.from_env()
        self._engine = engine or GnuPGEngine.from_config(self._config)
        self._root = self._config.store_dir
        self._key_cache: Optional[dict[Path, tuple[KeyHandle, ...]]] = (
            {} if self._config.cache_keys else None
        )
        if not self._root.is_dir():
            raise StoreNotFound(self._root)
        logger.debug("Opened password store at %s", self._root)

    @classmethod
    def open(cls, store_dir, engine: Optional[CryptoEngine] = None) -> "PasswordStore":
        """Shortcut for a store at *store_dir* with default settings."""
        return cls(StoreConfig(store_dir=store_dir), engine=engine)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def engine(self) -> CryptoEngine:
        return self._engine

    @property
    def key_cache(self) -> Optional[dict[Path, tuple[KeyHandle, ...]]]:
        return self._key_cache

    def clear_key_cache(self) -> None:
        """Forget every resolved ``.gpg-id`` manifest."""
        if self._key_cache is not None:
            self._key_cache.clear()

    def __repr__(self) -> str:
        return f"<PasswordStore {self._root}>"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list(self) -> frozenset[StoreEntry]:
        """List all entries in the password store.

        Raises:
            InvalidStoreFormat: If anything in the store is malformed.
        """
        return list_and_map_folder(self, self._root)

    def retrieve(self, pass_name: str) -> StoreEntry:
        """Retrieve the stored entry identified by *pass_name*.

        Args:
            pass_name: Path to a secret or a directory relative to the store
                root, without the secret suffix.

        Raises:
            AmbiguousPassName: If both a secret and a directory match.
            EntryNotFound: If nothing matches.
            InvalidStoreFormat: If the name points outside the store or the
                match is malformed.
        """
        dir_path = self._root / pass_name
        file_path = self._root / (pass_name + SECRET_SUFFIX)
        for candidate in (dir_path, file_path):
            if not is_within(self._root, candidate):
                raise InvalidStoreFormat(
                    candidate, "Path is not located inside the store"
                )
        dir_path = Path(os.path.normpath(dir_path))
        file_path = Path(os.path.normpath(file_path))

        dir_exists, file_exists = dir_path.exists(), file_path.exists()
        if dir_exists and file_exists:
            raise AmbiguousPassName(pass_name)
        if not dir_exists and not file_exists:
            raise EntryNotFound(pass_name)
        if dir_exists:
            StoreDirectory(self, dir_path).verify()
            entry: StoreEntry = StoreDirectory(
                self, dir_path, list_and_map_folder(self, dir_path),
            )
        else:
            entry = StoreFile(self, file_path)

        entry.verify()
        logger.debug("Retrieved %r for %s", entry, pass_name)
        return entry
