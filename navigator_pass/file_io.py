"""
File Handles — Different handles for working with secret files.

Three capability levels over the same file:

- :class:`CipherFile`: the raw encrypted file, opened for read and write.
- :class:`PlainFile`: decrypted content, read-only.
- :class:`PlainFileRW`: decrypted content, writable, re-encrypted on
  :meth:`PlainFileRW.synchronize` and on a best-effort basis when closed.

No locking is done: two read-write handles on the same file race and the
last synchronize wins.

Security Note:
    Decrypted content lives in process memory for the lifetime of a handle.
    Never log plaintext or ciphertext values, only paths.
"""
import os
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO, Union

from .engine import CryptoEngine, KeyHandle

logger = logging.getLogger("navigator.pass")


def _open_existing(path: Union[str, Path]) -> BinaryIO:
    """Open *path* for reading and writing without creating it."""
    return open(path, "r+b")


class CipherFile:
    """A file handle that operates on encrypted content.

    The handle does not implement much logic; use :attr:`file` for positioned
    reads, writes and seeks on the ciphertext::

        with entry.cipher_io() as cipher:
            ciphertext = cipher.file.read()
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._file = _open_existing(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def file(self) -> BinaryIO:
        return self._file

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "CipherFile":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<CipherFile {self._path}>"


class PlainFile:
    """A read-only handle on the decrypted content of a secret.

    The ciphertext is read and decrypted once, when the handle is created;
    the file is not kept open afterwards.
    """

    def __init__(self, path: Union[str, Path], engine: CryptoEngine):
        self._path = Path(path)
        with open(self._path, "rb") as fp:
            ciphertext = fp.read()
        self._buffer = engine.decrypt(ciphertext)
        logger.debug("Decrypted %s (read-only)", self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def buffer(self) -> bytes:
        return self._buffer

    def __bytes__(self) -> bytes:
        return self._buffer

    def __repr__(self) -> str:
        return f"<PlainFile {self._path}>"


class PlainFileRW:
    """A read-write handle on the decrypted content of a secret.

    State machine::

        clean --(mutate buffer)--> dirty --(synchronize)--> clean

    On :meth:`close` (and therefore when leaving a ``with`` block) a
    non-forced :meth:`synchronize` is attempted once. Errors at that point
    are logged, not raised; call :meth:`synchronize` yourself before closing
    when you need to see them.

    Args:
        path: Secret file to open; it must already exist.
        engine: Engine used to decrypt now and encrypt on synchronize.
        recipients: Keys the content is re-encrypted for.
    """

    def __init__(
        self,
        path: Union[str, Path],
        engine: CryptoEngine,
        recipients: Sequence[KeyHandle],
    ):
        self._closed = True
        self._path = Path(path)
        self._engine = engine
        self._recipients = tuple(recipients)
        self._file = _open_existing(self._path)
        try:
            plaintext = engine.decrypt(self._file.read())
        except BaseException:
            self._file.close()
            raise
        self._buffer = bytearray(plaintext)
        self._last_synced = bytes(plaintext)
        self._closed = False
        logger.debug("Decrypted %s (read-write)", self._path)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def recipients(self) -> tuple[KeyHandle, ...]:
        return self._recipients

    @property
    def buffer(self) -> bytearray:
        """The current plaintext; mutate it in place or assign a new value."""
        return self._buffer

    @buffer.setter
    def buffer(self, value: Union[bytes, bytearray]) -> None:
        self._buffer = bytearray(value)

    @property
    def last_synced(self) -> bytes:
        """Plaintext as of the last successful write-back."""
        return self._last_synced

    @property
    def dirty(self) -> bool:
        return self._buffer != self._last_synced

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed handle for {self._path}")

    # ------------------------------------------------------------------
    # Write-back
    # ------------------------------------------------------------------

    def synchronize(self, force: bool = False) -> None:
        """Encrypt the buffer and store it in the file.

        Without *force* nothing is encrypted or written while the buffer
        equals :attr:`last_synced`. The file is flushed to stable storage
        in every case.

        Raises:
            EngineError: If encryption fails.
            OSError: If writing or flushing the file fails.
            ValueError: If the handle is closed.
        """
        self._check_open()
        if force or self.dirty:
            plaintext = bytes(self._buffer)
            ciphertext = self._engine.encrypt(self._recipients, plaintext)
            self._file.truncate(len(ciphertext))
            self._file.seek(0)
            self._file.write(ciphertext)
            self._last_synced = plaintext
            logger.debug("Stored re-encrypted content in %s", self._path)
        else:
            logger.debug("No changes to store in %s", self._path)
        self._file.flush()
        os.fsync(self._file.fileno())

    def close(self) -> None:
        """Synchronize on a best-effort basis and release the file."""
        if self._closed:
            return
        try:
            self.synchronize()
        except Exception as err:
            logger.error(
                "Could not store encrypted content of %s while closing: %s",
                self._path, err,
            )
        finally:
            self._closed = True
            self._file.close()

    def __enter__(self) -> "PlainFileRW":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("dirty" if self.dirty else "clean")
        return f"<PlainFileRW {self._path} [{state}]>"
