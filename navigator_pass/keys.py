"""
Key Resolver — Nearest-ancestor lookup of the ``.gpg-id`` key manifest.

Starting at the directory that contains a secret, the resolver walks upward
until it finds a ``.gpg-id`` file. That manifest wins in full: manifests of
further ancestors are never merged in.

Manifest format (as pass writes it)::

    # comments are ignored
    alice@example.com
    0xDEADBEEFCAFEBABE   # trailing comments too
"""
import logging
from pathlib import Path
from typing import Optional

from .conf import KEY_MANIFEST
from .engine import CryptoEngine, KeyHandle
from .exceptions import InvalidStoreFormat

logger = logging.getLogger("navigator.pass")


def find_key_manifest(file_path: Path) -> Path:
    """Return the nearest ``.gpg-id`` above *file_path*.

    Raises:
        InvalidStoreFormat: If the manifest is a directory, or no ancestor
            holds one.
    """
    directory = Path(file_path).parent
    while True:
        manifest = directory / KEY_MANIFEST
        if manifest.is_dir():
            raise InvalidStoreFormat(manifest, "expected file, found directory")
        if manifest.exists():
            return manifest
        if directory.parent == directory:
            break
        directory = directory.parent
    raise InvalidStoreFormat(
        file_path, f"no ancestor {KEY_MANIFEST} key manifest found"
    )


def read_key_identifiers(manifest: Path) -> list[str]:
    """Read the key identifiers of a manifest, one per non-empty line.

    Raises:
        InvalidStoreFormat: If the manifest is not valid UTF-8.
    """
    identifiers = []
    with manifest.open("r", encoding="utf-8") as fp:
        try:
            for line in fp:
                identifier = line.split("#", 1)[0].strip()
                if identifier:
                    identifiers.append(identifier)
        except UnicodeDecodeError as err:
            raise InvalidStoreFormat(
                manifest, "key manifest is not valid UTF-8"
            ) from err
    return identifiers


def resolve_encryption_keys(
    file_path: Path,
    engine: CryptoEngine,
    cache: Optional[dict[Path, tuple[KeyHandle, ...]]] = None,
) -> tuple[KeyHandle, ...]:
    """Resolve the recipients a secret file must be encrypted for.

    Args:
        file_path: Path of the secret file.
        engine: Engine used to resolve each identifier to a key handle.
        cache: Optional mapping of manifest path to resolved keys; filled on
            a miss and never invalidated here.

    Returns:
        Ordered tuple of key handles, one per manifest identifier.

    Raises:
        InvalidStoreFormat: If no usable manifest is found.
        EngineError: If an identifier cannot be resolved.
    """
    manifest = find_key_manifest(file_path)
    if cache is not None and manifest in cache:
        return cache[manifest]
    keys = tuple(
        engine.resolve_key(identifier)
        for identifier in read_key_identifiers(manifest)
    )
    logger.debug("Resolved %d key(s) from %s", len(keys), manifest)
    if cache is not None:
        cache[manifest] = keys
    return keys
