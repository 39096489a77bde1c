"""Single-word hyphenation.

Scores every letter gap of a word with the compiled Liang patterns and
inserts the hyphen marker at each odd-scored gap that respects the
current margins.

Example (en_US, left=2, right=3):
    pattern hy3ph scores the y|p gap 3 (odd, break)
    "hyphenation" → "hy-phen-ation"
"""

import logging
from typing import Optional

from .normalizer import fold_first_letter, fold_interior
from .schema import (
    BOUNDARY,
    ESCAPE_CHAR,
    CompiledDictionary,
    HyphenationLimits,
    LanguageProfile,
)

logger = logging.getLogger(__name__)

SOFT_HYPHEN = "\u00ad"


class WordHyphenator:
    """Applies a compiled dictionary to one word at a time."""

    def __init__(
        self,
        profile: LanguageProfile,
        dictionary: CompiledDictionary,
        limits: Optional[HyphenationLimits] = None,
        proceed_uppercase: bool = False,
    ):
        """Initialize hyphenator.

        Args:
            profile: Language profile.
            dictionary: Compiled pattern dictionary.
            limits: Initial margins, clamped to the profile minimums.
            proceed_uppercase: Fold interior capitals instead of leaving
                such words untouched.
        """
        self.profile = profile
        self.dictionary = dictionary
        self.limits = limits or HyphenationLimits()
        self.proceed_uppercase = proceed_uppercase
        self.configure()

    def configure(self) -> HyphenationLimits:
        """Re-clamp the limits against the profile minimums."""
        return self.limits.clamp(self.profile)

    def set_limits(
        self,
        left: int = 0,
        right: int = 0,
        length: int = 0,
        right_last: int = 0,
        left_uc: int = 0,
    ) -> HyphenationLimits:
        """Replace all limits; zero means "use the floor"."""
        self.limits = HyphenationLimits(left, right, length, right_last, left_uc)
        return self.configure()

    def score(self, lookup: str) -> list[int]:
        """Score the gaps of a bracketed lookup word.

        Args:
            lookup: Folded, translated word with boundary dots.

        Returns:
            One score per gap, ``len(lookup) + 1`` entries; index p is the
            gap before character p.
        """
        length = len(lookup)
        scores = [0] * (length + 1)
        for i in range(length - 1):
            # a lone leading dot never starts a pattern
            for k in range(2 if i == 0 else 1, length - i + 1):
                entry = self.dictionary.lookup(lookup[i:i + k])
                if entry.is_absent:
                    break
                if entry.has_mask:
                    for j, digit in enumerate(entry.digits):
                        if digit > scores[i + j]:
                            scores[i + j] = digit
        return scores

    def break_points(self, word: str, last_word: bool = False) -> Optional[list[int]]:
        """Find the legal break positions of a word.

        Args:
            word: Word in original case, letters only.
            last_word: Word ends a paragraph (uses right_last).

        Returns:
            Letter counts after which a marker goes, or None when the word
            must be left alone (escaped, too short, interior capitals).
        """
        if ESCAPE_CHAR in word or len(word) < self.limits.length:
            return None

        folded, capitalized = fold_first_letter(word, self.profile)
        folded = fold_interior(folded, self.profile, self.proceed_uppercase)
        if folded is None:
            return None

        left = self.limits.left_uc if capitalized else self.limits.left
        right = self.limits.right_last if last_word else self.limits.right

        bracketed_length = len(word) + 2
        scores = self.score(self.profile.lookup_form(BOUNDARY + folded + BOUNDARY))

        points = []
        syllable = False
        for key in range(1, len(word) + 1):
            if (
                syllable
                and key > left - 1
                and key < bracketed_length - right - 1
                and scores[key + 1] % 2
            ):
                points.append(key)
                syllable = False
            else:
                syllable = True
        return points

    def hyphenate_word(
        self,
        word: str,
        last_word: bool = False,
        hyphen: str = SOFT_HYPHEN,
        encoding: Optional[str] = None,
    ) -> str:
        """Insert hyphen markers into a word.

        Args:
            word: Word in original case.
            last_word: Word ends a paragraph.
            hyphen: Marker to insert.
            encoding: Output encoding the result must be representable in.

        Returns:
            Hyphenated word, or the word unchanged if it cannot be processed
            or the result does not fit the output encoding.
        """
        points = self.break_points(word, last_word)
        if not points:
            return word

        pieces = []
        start = 0
        for point in points:
            pieces.append(word[start:point])
            start = point
        pieces.append(word[start:])
        result = hyphen.join(pieces)

        if encoding is not None:
            try:
                result.encode(encoding)
            except UnicodeError:
                logger.debug("Cannot encode %r as %s, leaving it unchanged", result, encoding)
                return word
        return result
