# docsign_core/storage/provider.py
from typing import List
from docsign_core.storage.models import KeyRecord


class StorageProvider:
    """
    Persistence interface for the key metadata collection.

    The whole list is the unit of persistence: callers read every record,
    modify the list and write it back. Providers do no locking of their own;
    KeyStore serializes writers.
    """
    name: str = "base"

    def load_records(self) -> List[KeyRecord]: ...
    def save_records(self, records: List[KeyRecord]) -> None: ...
