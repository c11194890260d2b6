"""
Shared fixtures: an on-disk store under ``tmp_path`` and an AES-GCM engine.

The engine stands in for GnuPG. Each key identifier maps to a random
32-byte key; ciphertext is ``<recipient>\\n<nonce 12B><payload+tag>``, so
every encryption of the same plaintext yields different bytes.
"""
import os

import pytest
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from navigator_pass import PasswordStore, StoreConfig
from navigator_pass.engine import CryptoEngine
from navigator_pass.exceptions import EngineError

NONCE_SIZE = 12
PLAINTEXT = b"foobar123\n"


class AESGCMEngine(CryptoEngine):
    """Test engine keeping one AES key per identifier."""

    def __init__(self, identifiers=("test-key",)):
        self.keyring = {ident: AESGCM.generate_key(bit_length=256) for ident in identifiers}
        self.encrypt_calls = 0
        self.decrypt_calls = 0
        self.resolve_calls = 0
        self.fail_encrypt = False

    def resolve_key(self, identifier):
        self.resolve_calls += 1
        if identifier not in self.keyring:
            raise EngineError(f"No public key found for identifier {identifier!r}")
        return f"FPR-{identifier}"

    def encrypt(self, recipients, plaintext):
        self.encrypt_calls += 1
        if self.fail_encrypt:
            raise EngineError("Encryption failed: simulated")
        if not recipients:
            raise EngineError("Encryption requires at least one recipient")
        handle = recipients[0]
        key = self.keyring[handle.removeprefix("FPR-")]
        nonce = os.urandom(NONCE_SIZE)
        return handle.encode("utf-8") + b"\n" + nonce + AESGCM(key).encrypt(nonce, plaintext, None)

    def decrypt(self, ciphertext):
        self.decrypt_calls += 1
        handle, sep, blob = ciphertext.partition(b"\n")
        identifier = handle.decode("utf-8", "replace").removeprefix("FPR-")
        if not sep or identifier not in self.keyring:
            raise EngineError("Decryption failed: no secret key")
        try:
            return AESGCM(self.keyring[identifier]).decrypt(
                blob[:NONCE_SIZE], blob[NONCE_SIZE:], None,
            )
        except InvalidTag as err:
            raise EngineError("Decryption failed: bad data") from err


@pytest.fixture
def plaintext():
    """Content of every secret in the reference store."""
    return PLAINTEXT


@pytest.fixture
def engine():
    """A fresh test engine knowing ``test-key`` and ``other-key``."""
    return AESGCMEngine(identifiers=("test-key", "other-key"))


@pytest.fixture
def store_dir(tmp_path, engine):
    """Build the reference store layout::

        .gpg-id                       test-key
        .git/HEAD                     (ignored)
        README.md                     (not a secret)
        secret-a.gpg
        secret-b.gpg
        folder/subsecret-a.gpg
        folder/subsecret-b.gpg
        folder/subfolder/generated-a.gpg
        folder/subfolder/generated-b.gpg
        folder2/.gpg-id               other-key
        folder2/subsecret-a.gpg
    """
    root = tmp_path / "password-store"
    secrets = {
        "secret-a.gpg": "test-key",
        "secret-b.gpg": "test-key",
        "folder/subsecret-a.gpg": "test-key",
        "folder/subsecret-b.gpg": "test-key",
        "folder/subfolder/generated-a.gpg": "test-key",
        "folder/subfolder/generated-b.gpg": "test-key",
        "folder2/subsecret-a.gpg": "other-key",
    }
    for name, identifier in secrets.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(engine.encrypt([f"FPR-{identifier}"], PLAINTEXT))
    (root / ".gpg-id").write_text("test-key\n")
    (root / "folder2" / ".gpg-id").write_text("# folder2 recipients\nother-key\n")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "README.md").write_text("not a secret\n")
    engine.encrypt_calls = 0
    return root


@pytest.fixture
def store(store_dir, engine):
    """A PasswordStore over the reference layout."""
    return PasswordStore(StoreConfig(store_dir=store_dir), engine=engine)
