"""Configuration: paths, storage key, defaults."""

import os
from pathlib import Path

# Base directory for data storage
DATA_DIR = Path(os.environ.get("IEXPENSE_DATA_DIR", Path.cwd() / "data"))
STORE_PATH = DATA_DIR / "store.json"

# Key the expense list is saved under
STORAGE_KEY = "Items"

DEFAULT_CURRENCY = os.environ.get("IEXPENSE_CURRENCY", "USD")

LOG_LEVEL = os.environ.get("IEXPENSE_LOG_LEVEL", "WARNING")


def store_path(data_dir: str | Path | None = None) -> Path:
    """Path of the key-value store file inside a data directory."""
    if data_dir is None:
        return STORE_PATH
    return Path(data_dir) / "store.json"
