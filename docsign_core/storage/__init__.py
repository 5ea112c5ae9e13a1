# docsign_core/storage/__init__.py

from .models import KeyRecord, KeyInfo, KeyDetails, VerificationResult
from .provider import StorageProvider
from .providers.memory_provider import InMemoryStorage
from .providers.json_provider import JsonFileStorage
from docsign_core.constants import KEY_METADATA_FILENAME
from pathlib import Path
import os


def load_storage_provider(base_dir, config: dict | None = None) -> StorageProvider:
    """
    Factory resolver for selecting the metadata backend.

    For now:
        - json (default) -> <base_dir>/key_metadata.json
        - memory
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("DOCSIGN_STORAGE_PROVIDER", "json")

    if provider == "memory":
        return InMemoryStorage()

    if provider == "json":
        return JsonFileStorage(Path(base_dir) / KEY_METADATA_FILENAME)

    raise ValueError(f"Unknown storage provider: {provider}")


__all__ = [
    "KeyRecord",
    "KeyInfo",
    "KeyDetails",
    "VerificationResult",
    "StorageProvider",
    "InMemoryStorage",
    "JsonFileStorage",
    "load_storage_provider",
]
