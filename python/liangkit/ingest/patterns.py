"""Liang pattern ingestor.

Parses rule files in the classic TeX pattern notation.

Format:
    utf-8               # First line: encoding of the rest of the file
    // comment
    .ach4 .ad4der       # Literal patterns, several per line allowed
    hy3ph
    ta-ble              # Dictionary word with explicit break points
    present             # Dictionary word that must never be broken

A token with neither a digit nor a dot is a dictionary word: its hyphens
become 9 (forced break) and every other letter gap becomes 8 (forbidden
break), so a dictionary word overrides all ordinary patterns.
"""

import re
from pathlib import Path
from typing import Iterator, Optional

from ..storage import Storage
from .base import IngestResult, RuleIngestor

_PATTERN_MARK = re.compile(r"[0-9.]")
_LETTER_GAP = re.compile(r"(?<=[^0-9])(?=[^0-9])")
_DIGITS = re.compile(r"[0-9]")
_NON_DIGITS = re.compile(r"[^0-9]")

WORD_BREAK = "9"
WORD_NO_BREAK = "8"


def expand_token(token: str) -> tuple[str, bool]:
    """Rewrite a token so every letter gap carries exactly one digit.

    Args:
        token: Pattern such as ``"hy3ph"`` or dictionary word ``"ta-ble"``.

    Returns:
        Tuple of (expanded token, token was a dictionary word), e.g.
        ``("0h0y3p0h0", False)`` or ``("0.0t8a9b8l8e0.0", True)``.
    """
    is_word = not _PATTERN_MARK.search(token)
    if is_word:
        token = token.replace("-", WORD_BREAK)
        token = _LETTER_GAP.sub(WORD_NO_BREAK, token)
        token = "." + token + "."

    token = _LETTER_GAP.sub("0", token)
    if _NON_DIGITS.match(token):
        token = "0" + token
    if _NON_DIGITS.match(token[-1:]):
        token += "0"
    return token, is_word


class LiangPatternIngestor(RuleIngestor):
    """Ingestor for Liang pattern / dictionary word files."""

    def parse(self, lines: list[str]) -> Iterator[tuple[str, Optional[int]]]:
        """Split cleaned lines into whitespace-separated tokens.

        Args:
            lines: Rule lines after the encoding tag.

        Yields:
            Tuples of (token, line_number).
        """
        for line_num, line in enumerate(lines, start=2):
            for token in line.split():
                yield token, line_num

    def convert(self, token: str) -> Optional[tuple[str, str, bool]]:
        """Split a token into letters-only key and digits-only mask.

        Returns:
            Tuple of (key, mask, is_dictionary_word), or None when the token
            has no letters or its mask does not cover every gap.
        """
        expanded, is_word = expand_token(token)
        key = _DIGITS.sub("", expanded)
        mask = _NON_DIGITS.sub("", expanded)
        if not key or len(mask) != len(key) + 1:
            return None
        return key, mask, is_word


def ingest(
    filepath: Path | str,
    internal_encoding: str = "utf-8",
    storage: Optional[Storage] = None,
) -> IngestResult:
    """Convenience function to ingest a Liang rule file.

    Args:
        filepath: Path to rule file.
        internal_encoding: Encoding of the language profile.
        storage: Storage backend.

    Returns:
        IngestResult with (key, mask) entries.
    """
    ingestor = LiangPatternIngestor(internal_encoding=internal_encoding, storage=storage)
    return ingestor.ingest(filepath)
