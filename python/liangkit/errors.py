"""Exceptions raised by liangkit."""

from pathlib import Path
from typing import Optional


class HyphenationError(Exception):
    """Base class for all liangkit errors."""


class ConfigError(HyphenationError):
    """A profile or rule file is missing, unreadable or invalid."""

    def __init__(self, message: str, path: Optional[Path | str] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message}: {self.path}"
        super().__init__(message)


class CacheError(HyphenationError):
    """The compiled artifact could not be loaded and recompiling is disabled."""

    def __init__(self, message: str, path: Optional[Path | str] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message}: {self.path}"
        super().__init__(message)
