from pathlib import Path

from studyassist.storage.exceptions import InvalidStorageKeyError


def upload_key(user_id: str, stored_name: str) -> str:
    """Build the storage key of an upload: ``{user_id}/{stored_name}``."""
    return f"{user_id}/{stored_name}"


class FileStore:
    """Object store for raw upload bytes, backed by a local directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def write(self, key: str, data: bytes) -> None:
        path = self._resolve_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def read(self, key: str) -> bytes:
        """Read object bytes.

        Raises:
            FileNotFoundError: if no object is stored under *key*.
            InvalidStorageKeyError: if *key* escapes the storage root.
        """
        path = self._resolve_path(key)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {key}")
        return path.read_bytes()

    def remove(self, key: str) -> None:
        """Delete an object; missing objects are ignored."""
        self._resolve_path(key).unlink(missing_ok=True)

    def _resolve_path(self, key: str) -> Path:
        root = self._files_root.resolve()
        path = (root / key).resolve()
        if not key or not path.is_relative_to(root) or path == root:
            raise InvalidStorageKeyError(f"Storage key '{key}' is not allowed")
        return path
