"""
docsign_core.utils
------------------
Small helpers for key ids, timestamps, hex encoding and durable file writes.
"""

from __future__ import annotations
import binascii, os, tempfile, time, uuid
from pathlib import Path
from typing import Union

from .errors import StorageIOError

PathLike = Union[str, os.PathLike]


def now_ts() -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_id(key_id) -> str:
    """Canonical lowercase hyphenated form of a UUID key id; raises ValueError if it is not one."""
    return str(uuid.UUID(str(key_id)))


def hex_encode(b: bytes) -> str:
    return binascii.hexlify(b).decode("ascii")


def hex_decode(s: str) -> bytes:
    return binascii.unhexlify(s.encode("ascii"))


def wipe(buf: bytearray) -> None:
    """Overwrite a mutable buffer holding secret material."""
    for i in range(len(buf)):
        buf[i] = 0


# --------- file I/O with path context ----------
def read_bytes(path: PathLike, what: str = "file") -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise StorageIOError(path, f"Failed to read {what} ({e.strerror or e})") from e


def read_text(path: PathLike, what: str = "file") -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageIOError(path, f"Failed to read {what} ({getattr(e, 'strerror', None) or e})") from e


def write_bytes(path: PathLike, data: bytes, what: str = "file") -> None:
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise StorageIOError(path, f"Failed to write {what} ({e.strerror or e})") from e


def atomic_write_text(path: PathLike, text: str, what: str = "file") -> None:
    """Write via a sibling temp file + os.replace so readers never see a partial file."""
    path = Path(path)
    try:
        fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
    except OSError as e:
        raise StorageIOError(path, f"Failed to write {what} ({e.strerror or e})") from e


def ensure_dir(path: PathLike) -> Path:
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageIOError(path, f"Failed to create directory ({e.strerror or e})") from e
    return path


def remove_file(path: PathLike) -> bool:
    """Remove a file; a file that is already gone is not an error."""
    try:
        os.unlink(path)
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise StorageIOError(path, f"Failed to remove file ({e.strerror or e})") from e
