# docsign_core/config.py

"""
docsign_core.config
-------------------
Runtime settings resolved from the environment.

    DOCSIGN_HOME               base directory (metadata + keys/)
    DOCSIGN_LOG_LEVEL          logging level, default INFO
    DOCSIGN_LOG_FILE           optional extra log file
    DOCSIGN_STORAGE_PROVIDER   json (default) | memory

The PBKDF2 iteration count is deliberately absent: it is fixed in
docsign_core.constants.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os
import sys

from .constants import APP_NAME


def default_base_dir() -> Path:
    """Per-platform application data directory."""
    if sys.platform.startswith("win"):
        root = os.getenv("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(root) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    root = os.getenv("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(root) / APP_NAME


@dataclass
class Settings:
    base_dir: Path = field(default_factory=default_base_dir)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    storage_provider: str = "json"

    @classmethod
    def from_env(cls) -> "Settings":
        home = os.getenv("DOCSIGN_HOME")
        return cls(
            base_dir=Path(home).expanduser() if home else default_base_dir(),
            log_level=os.getenv("DOCSIGN_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("DOCSIGN_LOG_FILE") or None,
            storage_provider=os.getenv("DOCSIGN_STORAGE_PROVIDER", "json").lower(),
        )


def build_service(settings: Optional[Settings] = None):
    """Wire storage -> KeyStore -> SigningService for a host application."""
    from .keystore import KeyStore
    from .logger import configure_logging, get_logger
    from .service import SigningService
    from .storage import load_storage_provider

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, settings.log_file)
    log = get_logger("DocSign.Config")
    storage = load_storage_provider(settings.base_dir, {"provider": settings.storage_provider})
    log.info(f"[CONFIG] base_dir={settings.base_dir} storage={storage.name}")
    return SigningService(KeyStore(settings.base_dir, storage=storage))
