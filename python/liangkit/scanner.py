"""Finding and hyphenating words in running text.

A word is a maximal run of alphabet letters at least ``length`` long that
is not preceded by the escape character. With preserve_markup, runs that
sit inside an HTML/XML tag (a ``>`` follows before any ``<``) are skipped.

A word followed by a non-letter run that ends in a line break closes a
paragraph and uses the right_last margin; so does the last word of the
text.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .hyphenator import SOFT_HYPHEN, WordHyphenator
from .schema import ESCAPE_CHAR


@dataclass
class WordMatch:
    """A hyphenatable word located in a text."""

    start: int
    end: int
    word: str
    last_word: bool = False


def _char_class(letters: str) -> str:
    return "".join(re.escape(c) for c in letters)


@lru_cache(maxsize=64)
def word_pattern(letters: str, min_length: int, preserve_markup: bool) -> re.Pattern:
    """Compile the word-finding regex for an alphabet and length floor."""
    cls = _char_class(letters)
    pattern = rf"(?<![{cls}{re.escape(ESCAPE_CHAR)}])[{cls}]{{{max(min_length, 1)},}}"
    if preserve_markup:
        pattern += r"(?![^<]*>)"
    return re.compile(pattern)


@lru_cache(maxsize=64)
def paragraph_end_pattern(letters: str) -> re.Pattern:
    """Compile the regex matching a non-letter run ending in a line break."""
    return re.compile(rf"[^{_char_class(letters)}\w]*[\r\n]")


class TextScanner:
    """Dispatches the words of a text to a WordHyphenator."""

    def __init__(self, hyphenator: WordHyphenator):
        self.hyphenator = hyphenator

    def find_words(self, text: str, preserve_markup: bool = True) -> list[WordMatch]:
        """Locate hyphenatable words in document order.

        Args:
            text: Text to scan.
            preserve_markup: Skip words inside tags.

        Returns:
            WordMatch list; the last entry is always marked last_word.
        """
        letters = self.hyphenator.profile.letters
        if not letters:
            return []
        words_re = word_pattern(letters, self.hyphenator.limits.length, preserve_markup)
        paragraph_re = paragraph_end_pattern(letters)

        matches = [
            WordMatch(
                start=m.start(),
                end=m.end(),
                word=m.group(),
                last_word=paragraph_re.match(text, m.end()) is not None,
            )
            for m in words_re.finditer(text)
        ]
        if matches:
            matches[-1].last_word = True
        return matches

    def hyphenate_text(
        self,
        text: str,
        hyphen: str = SOFT_HYPHEN,
        preserve_markup: bool = True,
        encoding: Optional[str] = None,
    ) -> str:
        """Hyphenate every word of a text.

        Args:
            text: Text to process.
            hyphen: Marker to insert.
            preserve_markup: Leave words inside tags alone.
            encoding: Output encoding each hyphenated word must fit.

        Returns:
            Text with markers inserted; removing every marker gives back
            the input.
        """
        self.hyphenator.configure()
        matches = self.find_words(text, preserve_markup)
        if not matches:
            return text

        # Splice replacements in document order, tracking how far the
        # output has drifted from the input positions.
        result = text
        offset = 0
        for match in matches:
            replacement = self.hyphenator.hyphenate_word(
                match.word, match.last_word, hyphen, encoding
            )
            if replacement == match.word:
                continue
            start = match.start + offset
            result = result[:start] + replacement + result[match.end + offset:]
            offset += len(replacement) - len(match.word)
        return result
