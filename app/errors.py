class StorageError(Exception):
    """Raised inside the storage layer when the local database is unusable."""
