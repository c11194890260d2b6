"""
Navigator Pass Exceptions.

Every failure raised by the library derives from :class:`PassError`,
except filesystem failures, which propagate as the built-in ``OSError``
family untouched.
"""
from pathlib import Path
from typing import Union


class PassError(Exception):
    """Base class for all password store errors."""


class StoreNotFound(PassError):
    """No password store exists at the configured root."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"No password store was found at {self.path}")


class InvalidStoreFormat(PassError):
    """Something on disk does not have the shape a pass store requires."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"The pass store at {self.path} is incorrectly formatted: {reason}"
        )


class EntryNotFound(PassError):
    """Neither a secret nor a directory exists under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"The requested entry ({name}) could not be found")


class AmbiguousPassName(PassError):
    """A secret and a directory share the same logical name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"The name {name} is ambiguous: it resolves to both a "
            "secret file and a directory"
        )


class PathEncodingError(PassError):
    """A path cannot be represented as UTF-8 text."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"The path {self.path!r} could not be represented as text"
        )


class EngineError(PassError):
    """The OpenPGP engine failed to resolve a key, encrypt or decrypt."""
