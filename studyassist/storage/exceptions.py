class StorageError(Exception):
    """Base exception for object storage failures."""


class InvalidStorageKeyError(StorageError):
    """Raised when a storage key resolves outside the storage root."""
