"""
Crypto Engine — The OpenPGP collaborator used to resolve keys, encrypt and decrypt.

The store only talks to the engine through :class:`CryptoEngine`; the
default implementation, :class:`GnuPGEngine`, drives the ``gpg`` binary
through python-gnupg.

Key handles are opaque to the rest of the library. For GnuPG they are
key fingerprints.

Security Note:
    Never log plaintext or ciphertext values. Only log key identifiers
    and fingerprints.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional, Union

import gnupg

from .exceptions import EngineError

logger = logging.getLogger("navigator.pass")

KeyHandle = Any

# Same flags pass hands to gpg when encrypting a secret.
_ENCRYPT_ARGS = ["--compress-algo=none", "--no-encrypt-to"]


class CryptoEngine(ABC):
    """Interface of the OpenPGP engine consumed by the store."""

    @abstractmethod
    def decrypt(self, ciphertext: bytes) -> bytes:
        """Decrypt *ciphertext* with whatever secret key is available.

        Raises:
            EngineError: If decryption fails.
        """

    @abstractmethod
    def encrypt(self, recipients: Sequence[KeyHandle], plaintext: bytes) -> bytes:
        """Encrypt *plaintext* so that every recipient can decrypt it.

        Raises:
            EngineError: If encryption fails.
        """

    @abstractmethod
    def resolve_key(self, identifier: str) -> KeyHandle:
        """Resolve a key identifier (as found in ``.gpg-id``) to a key handle.

        Raises:
            EngineError: If no key matches *identifier*.
        """


class GnuPGEngine(CryptoEngine):
    """CryptoEngine backed by the local GnuPG installation.

    The underlying ``gnupg.GPG`` instance is created on first use, so a
    store can be listed without a working ``gpg`` binary.
    """

    def __init__(
        self,
        gpg_binary: str = "gpg",
        gnupg_home: Optional[Union[str, Path]] = None,
        always_trust: bool = False,
        gpg: Optional[gnupg.GPG] = None,
    ):
        self._gpg_binary = gpg_binary
        self._gnupg_home = str(gnupg_home) if gnupg_home is not None else None
        self._always_trust = always_trust
        self._gpg = gpg

    @classmethod
    def from_config(cls, config: Any) -> "GnuPGEngine":
        """Create a GnuPGEngine from a :class:`~navigator_pass.config.StoreConfig`."""
        return cls(gpg_binary=config.gpg_binary, gnupg_home=config.gnupg_home)

    @property
    def gpg(self) -> gnupg.GPG:
        if self._gpg is None:
            try:
                self._gpg = gnupg.GPG(
                    gpgbinary=self._gpg_binary, gnupghome=self._gnupg_home,
                )
            except (OSError, ValueError) as err:
                raise EngineError(
                    f"Unable to start GnuPG ({self._gpg_binary}): {err}"
                ) from err
        return self._gpg

    def decrypt(self, ciphertext: bytes) -> bytes:
        result = self.gpg.decrypt(ciphertext)
        if not result.ok:
            raise EngineError(f"Decryption failed: {result.status}")
        return result.data

    def encrypt(self, recipients: Sequence[KeyHandle], plaintext: bytes) -> bytes:
        if not recipients:
            raise EngineError("Encryption requires at least one recipient")
        result = self.gpg.encrypt(
            plaintext,
            list(recipients),
            armor=False,
            always_trust=self._always_trust,
            extra_args=_ENCRYPT_ARGS,
        )
        if not result.ok:
            raise EngineError(f"Encryption failed: {result.status}")
        return result.data

    def resolve_key(self, identifier: str) -> KeyHandle:
        keys = self.gpg.list_keys(keys=identifier)
        if not keys:
            raise EngineError(f"No public key found for identifier {identifier!r}")
        fingerprint = keys[0]["fingerprint"]
        logger.debug("Resolved key %s to %s", identifier, fingerprint)
        return fingerprint
