"""Store-format constants shared by every component."""

# Environment
PASSWORD_STORE_DIR_ENV = "PASSWORD_STORE_DIR"
GNUPGHOME_ENV = "GNUPGHOME"
DEFAULT_STORE_DIR = "~/.password-store"

# On-disk layout
SECRET_SUFFIX = ".gpg"
KEY_MANIFEST = ".gpg-id"
IGNORED_NAMES = frozenset({".git"})
