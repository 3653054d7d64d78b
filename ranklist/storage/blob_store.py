"""
Key/value blob stores for ranklist.

A blob store keeps opaque strings under string keys. The file-backed store
writes each key to its own JSON file and replaces it atomically, so a
reader never sees a partially written blob.
"""

import os
import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Opaque string storage keyed by name."""

    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a blob under key, replacing any previous value."""
        ...


class InMemoryBlobStore:
    """Dict-backed blob store, used for tests and ephemeral sessions."""

    def __init__(self, initial: Dict[str, str] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value


class JsonFileBlobStore:
    """
    Blob store writing one `<key>.json` file per key.

    Writes go to a temporary file in the same directory which is then
    moved over the target with os.replace().
    """

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize the store.

        Args:
            directory: Folder holding the blob files (created on first write)
        """
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """File path backing a key."""
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        """
        Read a blob.

        Raises:
            OSError: If the file exists but cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        """
        Write a blob atomically.

        Raises:
            OSError: If the directory or file cannot be written
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.path_for(key)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{key}.", suffix=".tmp", dir=str(self.directory)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.debug(f"Wrote {len(value)} bytes to {target}")
