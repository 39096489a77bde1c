"""Letter normalization for pattern lookups.

Handles the two per-language mappings a profile defines:
    - Case pairs: alphabetUC[i] folds to alphabet[i]
    - Translation table: "(é>e)" tokens in the alphabet definition map a
      letter to the form used in the pattern dictionary

Both only shape the lookup key. Output always keeps the original letters.
"""

import re
from typing import Optional

from .schema import LanguageProfile

# "(X>y)" pairs inside an alphabet definition
TRANSLATION_PAIR = re.compile(r"\((.+?)>(.+?)\)")


def parse_alphabet(definition: str) -> tuple[str, dict[str, str]]:
    """Split an alphabet definition into letters and translation table.

    Args:
        definition: Profile alphabet line, e.g. ``"abc(é>e)d"``.

    Returns:
        Tuple of (alphabet, translation), e.g. ``("abcéd", {"é": "e"})``.
    """
    alphabet = TRANSLATION_PAIR.sub(r"\1", definition)
    translation = {source: target for source, target in TRANSLATION_PAIR.findall(definition)}
    return alphabet, translation


def fold_first_letter(word: str, profile: LanguageProfile) -> tuple[str, bool]:
    """Lowercase the first letter of a word.

    Args:
        word: Word in original case.
        profile: Language profile with case pairs.

    Returns:
        Tuple of (word with lowercase first letter, first letter was uppercase).
    """
    if not word:
        return word, False
    lower = profile.to_lower(word[0])
    if lower is None:
        return word, False
    return lower + word[1:], True


def fold_interior(word: str, profile: LanguageProfile, proceed_uppercase: bool) -> Optional[str]:
    """Lowercase every letter after the first.

    Args:
        word: Word whose first letter is already folded.
        profile: Language profile with case pairs.
        proceed_uppercase: Fold interior capitals instead of rejecting them.

    Returns:
        Folded word, or None when an interior capital is found and
        proceed_uppercase is off (acronyms, CamelCase names).
    """
    chars = list(word)
    for i in range(1, len(chars)):
        lower = profile.to_lower(chars[i])
        if lower is None:
            continue
        if not proceed_uppercase:
            return None
        chars[i] = lower
    return "".join(chars)
