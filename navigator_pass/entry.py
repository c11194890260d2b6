"""
Store Entries — Type definitions and interaction logic for entries in a password store.

An entry is either a :class:`StoreDirectory` or a :class:`StoreFile`. Both
are immutable snapshots of what was on disk when they were built; call
:meth:`StoreEntry.verify` again before trusting one that has been kept
around.

Identity is path-based: two directories with the same path are the same
entry, whatever content snapshot each one carries.
"""
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .conf import SECRET_SUFFIX
from .engine import KeyHandle
from .exceptions import InvalidStoreFormat
from .file_io import CipherFile, PlainFile, PlainFileRW
from .keys import resolve_encryption_keys
from .utils import abspath2relpath, path2str

if TYPE_CHECKING:
    from .store import PasswordStore


class StoreEntry(ABC):
    """An entry in the password store."""

    def __init__(self, store: "PasswordStore", path: Union[str, Path]):
        self._store = store
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Absolute path of the referenced file or directory."""
        return self._path

    @property
    def store(self) -> "PasswordStore":
        return self._store

    @property
    def is_dir(self) -> bool:
        return False

    @property
    def is_file(self) -> bool:
        return False

    @property
    def _identity(self) -> tuple[str, Path]:
        return (type(self).__name__, self._path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoreEntry):
            return NotImplemented
        return self._identity == other._identity

    def __hash__(self) -> int:
        return hash(self._identity)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._path}>"

    def _relative_name(self) -> str:
        relative = path2str(abspath2relpath(self._store.root, self._path))
        return "" if relative == "." else relative

    def name(self) -> str:
        """Retrieve the name of the store entry.

        The name is the path relative to the store root and can be handed to
        :meth:`PasswordStore.retrieve` to get this entry back.

        Raises:
            InvalidStoreFormat: If the entry is not located inside the store.
            PathEncodingError: If the name cannot be represented as text.
        """
        return self._relative_name()

    @abstractmethod
    def verify(self) -> None:
        """Verify that this entry matches what is present on the filesystem.

        Raises:
            InvalidStoreFormat: If it does not.
        """


class StoreDirectory(StoreEntry):
    """A reference to a directory which contains other entries."""

    def __init__(
        self,
        store: "PasswordStore",
        path: Union[str, Path],
        content: Iterable[StoreEntry] = (),
    ):
        super().__init__(store, path)
        self._content = frozenset(content)

    @property
    def content(self) -> frozenset[StoreEntry]:
        """Entries directly contained in this directory (snapshot)."""
        return self._content

    @property
    def is_dir(self) -> bool:
        return True

    def walk(self) -> Iterator[StoreEntry]:
        """Yield every entry below this directory, depth first."""
        for entry in self._content:
            yield entry
            if isinstance(entry, StoreDirectory):
                yield from entry.walk()

    def files(self) -> Iterator["StoreFile"]:
        """Yield every secret file below this directory."""
        for entry in self.walk():
            if isinstance(entry, StoreFile):
                yield entry

    def verify(self) -> None:
        if not self._path.is_dir():
            raise InvalidStoreFormat(
                self._path, "Path either does not exist or is not a directory"
            )


class StoreFile(StoreEntry):
    """A reference to a file that holds the actual content of a secret."""

    @property
    def is_file(self) -> bool:
        return True

    def name(self) -> str:
        relative = self._relative_name()
        if not relative.endswith(SECRET_SUFFIX):
            raise InvalidStoreFormat(
                self._path, f"File does not end with {SECRET_SUFFIX} extension"
            )
        return relative[:-len(SECRET_SUFFIX)]

    def verify(self) -> None:
        if not (self._path.is_file() and self._path.suffix == SECRET_SUFFIX):
            raise InvalidStoreFormat(
                self._path,
                "Path either does not exist, is not a regular file or does "
                f"not have a {SECRET_SUFFIX} extension",
            )

    def encryption_keys(self) -> tuple[KeyHandle, ...]:
        """Resolve the keys this secret is (re-)encrypted for.

        Raises:
            InvalidStoreFormat: If no usable ``.gpg-id`` manifest is found.
            EngineError: If a key identifier cannot be resolved.
        """
        return resolve_encryption_keys(
            self._path, self._store.engine, self._store.key_cache,
        )

    def cipher_io(self) -> CipherFile:
        """Get an IO handle to the encrypted content of this file."""
        return CipherFile(self._path)

    def plain_io(self) -> PlainFile:
        """Get a read-only handle to the decrypted content of this file."""
        return PlainFile(self._path, self._store.engine)

    def plain_io_rw(self) -> PlainFileRW:
        """Get a read-write handle to the decrypted content of this file.

        Changes to the handle's buffer are encrypted for
        :meth:`encryption_keys` and written back by
        :meth:`PlainFileRW.synchronize`, or on a best-effort basis when the
        handle is closed.
        """
        return PlainFileRW(self._path, self._store.engine, self.encryption_keys())
