"""
Tests for the entry model.

Tests cover:
- Path-based identity, equality and hashing
- Logical name derivation and its failure modes
- verify() against the live filesystem
"""
import pytest

from navigator_pass import StoreDirectory, StoreEntry, StoreFile
from navigator_pass.exceptions import InvalidStoreFormat, PathEncodingError


class TestIdentity:
    """Tests for entry equality and hashing."""

    def test_directories_equal_by_path(self, store):
        """Test directories with the same path are equal whatever their content."""
        full = StoreDirectory(store, store.root / "folder", store.retrieve("folder").content)
        empty = StoreDirectory(store, store.root / "folder")
        assert full == empty
        assert hash(full) == hash(empty)
        assert len({full, empty}) == 1

    def test_files_equal_by_path(self, store):
        """Test files with the same path are equal."""
        a = StoreFile(store, store.root / "secret-a.gpg")
        b = StoreFile(store, str(store.root / "secret-a.gpg"))
        assert a == b
        assert hash(a) == hash(b)

    def test_different_paths_differ(self, store):
        """Test entries with different paths are different."""
        assert StoreFile(store, store.root / "secret-a.gpg") != StoreFile(
            store, store.root / "secret-b.gpg"
        )

    def test_variants_never_equal(self, store):
        """Test a file and a directory never compare equal."""
        path = store.root / "secret-a.gpg"
        assert StoreFile(store, path) != StoreDirectory(store, path)

    def test_not_equal_to_other_types(self, store):
        """Test comparing with unrelated objects."""
        assert StoreFile(store, store.root / "secret-a.gpg") != "secret-a"

    def test_base_entry_is_abstract(self, store):
        """Test only the file and directory variants can be built."""
        with pytest.raises(TypeError):
            StoreEntry(store, store.root / "secret-a.gpg")

    def test_repr(self, store):
        """Test the repr names variant and path."""
        entry = StoreFile(store, store.root / "secret-a.gpg")
        assert repr(entry) == f"<StoreFile {store.root / 'secret-a.gpg'}>"


class TestName:
    """Tests for StoreEntry.name()."""

    def test_simple_file(self, store):
        assert StoreFile(store, store.root / "secret-a.gpg").name() == "secret-a"

    def test_simple_directory(self, store):
        assert StoreDirectory(store, store.root / "folder").name() == "folder"

    def test_file_in_subdirectory(self, store):
        entry = StoreFile(store, store.root / "folder/subsecret-a.gpg")
        assert entry.name() == "folder/subsecret-a"

    def test_directory_in_subdirectory(self, store):
        entry = StoreDirectory(store, store.root / "folder/subfolder")
        assert entry.name() == "folder/subfolder"

    def test_store_root(self, store):
        """Test the store root itself has an empty name."""
        assert StoreDirectory(store, store.root).name() == ""

    def test_name_does_not_need_existing_path(self, store):
        """Test names are derived without touching the filesystem."""
        entry = StoreFile(store, store.root / "ghost.gpg")
        assert entry.name() == "ghost"

    def test_file_outside_store(self, store, tmp_path):
        """Test entries outside the store root have no name."""
        with pytest.raises(InvalidStoreFormat):
            StoreFile(store, tmp_path / "elsewhere.gpg").name()

    def test_directory_outside_store(self, store, tmp_path):
        with pytest.raises(InvalidStoreFormat):
            StoreDirectory(store, tmp_path).name()

    def test_file_without_suffix(self, store):
        """Test an unverified file without suffix is rejected by name()."""
        with pytest.raises(InvalidStoreFormat):
            StoreFile(store, store.root / "README.md").name()

    def test_undecodable_name(self, store):
        """Test names that cannot be encoded as text are rejected."""
        entry = StoreFile(store, store.root / "bad-\udcff.gpg")
        with pytest.raises(PathEncodingError):
            entry.name()


class TestVerify:
    """Tests for StoreEntry.verify()."""

    def test_existing_file(self, store):
        StoreFile(store, store.root / "secret-a.gpg").verify()

    def test_existing_directory(self, store):
        StoreDirectory(store, store.root / "folder").verify()

    def test_missing_file(self, store):
        with pytest.raises(InvalidStoreFormat):
            StoreFile(store, store.root / "ghost.gpg").verify()

    def test_file_is_directory(self, store):
        with pytest.raises(InvalidStoreFormat):
            StoreFile(store, store.root / "folder").verify()

    def test_file_without_suffix(self, store):
        with pytest.raises(InvalidStoreFormat):
            StoreFile(store, store.root / "README.md").verify()

    def test_directory_is_file(self, store):
        with pytest.raises(InvalidStoreFormat):
            StoreDirectory(store, store.root / "secret-a.gpg").verify()

    def test_snapshot_goes_stale(self, store):
        """Test verify() notices changes made after retrieval."""
        entry = store.retrieve("secret-b")
        entry.path.unlink()
        with pytest.raises(InvalidStoreFormat) as exc:
            entry.verify()
        assert exc.value.path == entry.path
