"""Base ingestor interface for rule files.

All ingestors inherit from RuleIngestor and implement parse().
This provides a consistent API for loading patterns from any source format.
"""

import codecs
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..config import clean_config
from ..errors import ConfigError
from ..storage import LocalStorage, Storage


@dataclass
class IngestResult:
    """Result of ingesting one rule file."""

    entries: list[tuple[str, str]]      # (key, mask) in file order
    source_path: str
    encoding: str                       # encoding declared by the file
    total_raw: int = 0                  # tokens read
    total_patterns: int = 0             # literal Liang patterns
    total_words: int = 0                # dictionary words
    total_skipped: int = 0              # malformed tokens
    errors: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"IngestResult({Path(self.source_path).name}: "
            f"{self.total_patterns} patterns, {self.total_words} words, "
            f"{self.total_skipped} skipped)"
        )


class RuleIngestor(ABC):
    """Base class for rule file ingestors.

    Subclasses must implement:
        - parse(lines) -> Iterator of (token, line_number) tuples
        - convert(token) -> (key, mask, is_word) or None if malformed

    The ingest() method handles reading, decoding and bookkeeping.
    """

    def __init__(self, internal_encoding: str = "utf-8", storage: Optional[Storage] = None):
        """Initialize ingestor.

        Args:
            internal_encoding: Encoding of the language profile.
            storage: Storage backend, local disk by default.
        """
        self.internal_encoding = internal_encoding
        self.storage = storage or LocalStorage()

    @abstractmethod
    def parse(self, lines: list[str]) -> Iterator[tuple[str, Optional[int]]]:
        """Yield (token, line_number) tuples from cleaned rule lines."""
        pass

    @abstractmethod
    def convert(self, token: str) -> Optional[tuple[str, str, bool]]:
        """Turn a token into (key, mask, is_dictionary_word)."""
        pass

    def read_lines(self, filepath: Path | str) -> tuple[str, list[str]]:
        """Read a rule file and decode it with its declared encoding.

        The first non-comment line names the encoding of the rest of the
        file.

        Returns:
            Tuple of (declared encoding, cleaned lines after the tag).

        Raises:
            ConfigError: If the file is missing, unreadable, has no encoding
                line or cannot be decoded.
        """
        filepath = Path(filepath)
        try:
            raw = self.storage.read(filepath)
        except OSError as e:
            raise ConfigError(f"Cannot read rule file ({e.strerror or e})", filepath) from e
        if raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8):]

        # The tag itself is ASCII, so a byte-transparent decode finds it.
        head = clean_config(raw.decode("latin-1")).split("\n", 1)[0]
        if not head:
            raise ConfigError("Rule file has no encoding line", filepath)
        try:
            encoding = codecs.lookup(head).name
        except LookupError:
            raise ConfigError(f"Unknown rule file encoding {head!r}", filepath) from None

        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise ConfigError(f"Rule file is not valid {encoding} ({e.reason})", filepath) from e

        lines = clean_config(text).split("\n")
        return encoding, lines[1:]

    def ingest(self, filepath: Path | str) -> IngestResult:
        """Ingest patterns from a rule file.

        Args:
            filepath: Path to rule file.

        Returns:
            IngestResult with (key, mask) entries and statistics.
        """
        filepath = Path(filepath)
        encoding, lines = self.read_lines(filepath)

        result = IngestResult(
            entries=[],
            source_path=str(filepath),
            encoding=encoding,
        )
        for token, line_num in self.parse(lines):
            result.total_raw += 1
            try:
                token.encode(self.internal_encoding)
            except UnicodeEncodeError:
                result.total_skipped += 1
                result.errors.append(f"line {line_num}: {token!r} not representable in {self.internal_encoding}")
                continue

            converted = self.convert(token)
            if converted is None:
                result.total_skipped += 1
                result.errors.append(f"line {line_num}: cannot parse {token!r}")
                continue

            key, mask, is_word = converted
            if is_word:
                result.total_words += 1
            else:
                result.total_patterns += 1
            result.entries.append((key, mask))

        return result
