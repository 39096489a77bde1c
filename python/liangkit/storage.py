"""File-system access used by the compiler.

All profile, rule and cache I/O goes through a Storage object so that the
compiler can be pointed at something other than the local disk, such as a
read-only bundle.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class Storage(ABC):
    """Base class for storage backends.

    Subclasses must implement:
        - stat(path) -> modification time or None when absent
        - read(path) -> bytes
        - write(path, data), creating parent directories
        - mkdir(path)
        - normalize_path(path) -> Path
    """

    @abstractmethod
    def stat(self, path: Path | str) -> Optional[float]:
        """Return the modification time of path, or None if it does not exist."""

    @abstractmethod
    def read(self, path: Path | str) -> bytes:
        """Return the raw content of path.

        Raises:
            OSError: If the file is missing or unreadable.
        """

    @abstractmethod
    def write(self, path: Path | str, data: bytes) -> None:
        """Write data to path, creating parent directories as needed."""

    @abstractmethod
    def mkdir(self, path: Path | str) -> None:
        """Create directory path and its parents."""

    @abstractmethod
    def normalize_path(self, path: Path | str) -> Path:
        """Return a canonical form of path."""


class LocalStorage(Storage):
    """Storage backed by the local file system."""

    def stat(self, path: Path | str) -> Optional[float]:
        try:
            return Path(path).stat().st_mtime
        except OSError:
            return None

    def read(self, path: Path | str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write(self, path: Path | str, data: bytes) -> None:
        """Write data atomically.

        The content goes to a temporary file in the target directory and is
        moved into place with os.replace, so concurrent readers see either
        the old or the new artifact.
        """
        path = Path(path)
        self.mkdir(path.parent)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def mkdir(self, path: Path | str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def normalize_path(self, path: Path | str) -> Path:
        return Path(os.path.normpath(os.path.abspath(path)))
