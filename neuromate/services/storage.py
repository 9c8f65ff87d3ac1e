# local key-value storage - one json document per key on local disk
# synchronous get/set/remove, the server-side stand-in for browser localStorage

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from neuromate.config import settings
from neuromate.errors import PersistenceFailure

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """string values stored under fixed keys in a single directory"""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or settings.STORAGE_DIR)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """return the stored string, or None when the key was never written"""
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceFailure(key, "read", e) from e

    def set_item(self, key: str, value: str) -> None:
        """write the value atomically (temp file + replace)"""
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceFailure(key, "write", e) from e
        logger.debug(f"Stored {len(value)} chars under {key}")

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceFailure(key, "remove", e) from e
