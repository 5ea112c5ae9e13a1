from __future__ import annotations
from pathlib import Path
from typing import List
import json

from docsign_core.errors import StorageIOError
from docsign_core.logger import get_logger
from docsign_core.storage.models import KeyRecord
from docsign_core.storage.provider import StorageProvider
from docsign_core.utils import atomic_write_text, ensure_dir, read_text

log = get_logger("DocSign.Storage")


class JsonFileStorage(StorageProvider):
    """Key metadata kept as one pretty-printed JSON array (key_metadata.json)."""
    name = "json"

    def __init__(self, path):
        self.path = Path(path)
        ensure_dir(self.path.parent)

    def load_records(self) -> List[KeyRecord]:
        if not self.path.exists():
            return []
        content = read_text(self.path, "metadata file")
        try:
            raw = json.loads(content)
            if not isinstance(raw, list):
                raise ValueError("top-level value is not an array")
            return [KeyRecord.from_dict(item) for item in raw]
        except (ValueError, KeyError, TypeError) as e:
            log.error(f"[STORE] corrupt metadata file {self.path}: {e}")
            raise StorageIOError(self.path, f"Failed to parse metadata JSON ({e})") from e

    def save_records(self, records: List[KeyRecord]) -> None:
        content = json.dumps([rec.to_dict() for rec in records], indent=2)
        atomic_write_text(self.path, content, "metadata file")
        log.debug(f"[STORE] wrote {len(records)} record(s) to {self.path}")
