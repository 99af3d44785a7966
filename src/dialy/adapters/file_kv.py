"""File-based key-value storage adapter."""

import logging
import os
import tempfile
from pathlib import Path

from dialy.errors import LoadFailedError

logger = logging.getLogger(__name__)


class FileKeyValueStore:
    """
    File-based key-value storage.

    Implements KeyValueStore protocol. Each key gets a JSON file in the
    data directory; writes replace the whole file atomically.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Read the value stored under key. Returns None if not set."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise LoadFailedError(f"Failed to read {path}", cause=e)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning(f"{path} is not valid UTF-8; undecodable bytes replaced")
            return raw.decode("utf-8", errors="replace")

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key in one step."""
        path = self._path_for_key(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(value)} characters to {path}")

    def remove(self, key: str) -> None:
        """Delete the value stored under key, if any."""
        self._path_for_key(key).unlink(missing_ok=True)
