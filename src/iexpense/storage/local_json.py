"""Local JSON file key-value storage with file locking and atomic replace."""

import fcntl
import json
import logging
import os
import tempfile
from pathlib import Path

from iexpense.config import STORE_PATH
from iexpense.storage.adapter import KeyValueStorage, StorageError

log = logging.getLogger(__name__)


def _read_json_locked(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            try:
                data = json.load(f)
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)
    except (ValueError, RecursionError) as exc:
        # Bad JSON, bad UTF-8 or nesting too deep to decode
        raise StorageError(f"Corrupt store file {path}: {exc}") from exc
    except OSError as exc:
        raise StorageError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StorageError(f"Corrupt store file {path}: expected an object")
    return data


def _write_json_locked(path: Path, records: dict[str, str]) -> None:
    """Write to a temp file, fsync, then rename over the target."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        lock_path = path.with_name(path.name + ".lock")
        with open(lock_path, "w") as lock:
            fcntl.flock(lock, fcntl.LOCK_EX)
            try:
                fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as f:
                        json.dump(records, f, indent=2, sort_keys=True)
                        f.flush()
                        os.fsync(f.fileno())
                    os.replace(tmp_name, path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            finally:
                fcntl.flock(lock, fcntl.LOCK_UN)
    except OSError as exc:
        raise StorageError(f"Cannot write {path}: {exc}") from exc


class LocalJsonStorage(KeyValueStorage):
    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else STORE_PATH

    def get(self, key: str) -> bytes | None:
        value = _read_json_locked(self.path).get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self.path} is not a string")
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise StorageError(f"Value for {key!r} in {self.path} is not valid text") from exc

    def set(self, key: str, blob: bytes) -> None:
        try:
            records = _read_json_locked(self.path)
        except StorageError as exc:
            # Unreadable file gets replaced by the fresh write
            log.warning("Overwriting unreadable store: %s", exc)
            records = {}
        try:
            records[key] = blob.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"Blob for {key!r} is not UTF-8 text") from exc
        _write_json_locked(self.path, records)
        log.debug("Wrote %d bytes under %r to %s", len(blob), key, self.path)

    def delete(self, key: str) -> bool:
        records = _read_json_locked(self.path)
        if key not in records:
            return False
        del records[key]
        _write_json_locked(self.path, records)
        return True

    def keys(self) -> list[str]:
        return sorted(_read_json_locked(self.path))
