from typing import List
from docsign_core.storage.models import KeyRecord
from docsign_core.storage.provider import StorageProvider


class InMemoryStorage(StorageProvider):
    name = "memory"

    def __init__(self):
        self.records: List[KeyRecord] = []

    def load_records(self) -> List[KeyRecord]:
        # copies, so callers mutating a loaded list never touch stored state
        return [KeyRecord(**vars(rec)) for rec in self.records]

    def save_records(self, records: List[KeyRecord]) -> None:
        self.records = [KeyRecord(**vars(rec)) for rec in records]
