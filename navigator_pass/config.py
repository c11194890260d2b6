"""
Store Configuration — Validated settings for a password store session.

Reads the store location from environment variables the way pass does:
    PASSWORD_STORE_DIR = <path to the store root>  (default ~/.password-store)
    GNUPGHOME = <path to the GnuPG home directory>  (optional)

The store root is expanded and canonicalized exactly once, when the
configuration is validated; changing it afterwards is not supported.
"""
import os
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .conf import PASSWORD_STORE_DIR_ENV, GNUPGHOME_ENV, DEFAULT_STORE_DIR
from .utils import canonicalize_path

logger = logging.getLogger("navigator.pass")


class StoreConfig(BaseModel):
    """Validated password store configuration."""

    store_dir: Path
    gnupg_home: Optional[Path] = None
    gpg_binary: str = Field(default="gpg", min_length=1)
    cache_keys: bool = Field(default=True)

    @field_validator("store_dir")
    @classmethod
    def validate_store_dir(cls, v: Path) -> Path:
        """Expand ``~`` and canonicalize the store root."""
        return canonicalize_path(v)

    @field_validator("gnupg_home")
    @classmethod
    def validate_gnupg_home(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand ``~`` in the GnuPG home directory, if one is given."""
        if v is None:
            return v
        return canonicalize_path(v)

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Create StoreConfig by loading values from environment.

        Returns:
            Populated StoreConfig instance.
        """
        store_dir = os.environ.get(PASSWORD_STORE_DIR_ENV) or DEFAULT_STORE_DIR
        gnupg_home = os.environ.get(GNUPGHOME_ENV) or None
        config = cls(store_dir=store_dir, gnupg_home=gnupg_home)
        logger.debug("Loaded store configuration: root=%s", config.store_dir)
        return config
