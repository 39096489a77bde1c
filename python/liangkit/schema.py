"""Data structures for liangkit.

Core concept:
    - A LanguageProfile describes the alphabet and minimum margins
    - A CompiledDictionary maps pattern keys to digit masks
    - Both are stored together in a versioned CacheRecord

Example:
    pattern "hy3ph" → key "hyph", mask "00300"
    closure entries "hyp", "hy", "h" → NO_BREAK_INFO
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional
import json

from . import __version__

CACHE_VERSION = __version__

# Reserved character: a word containing it is never hyphenated.
ESCAPE_CHAR = "\\"

# Word boundary sentinel used by Liang patterns.
BOUNDARY = "."


class RecompileMode(Enum):
    """When to rebuild the compiled dictionary."""

    AUTO = "auto"
    NEVER = "never"
    ALWAYS = "always"

    @classmethod
    def from_value(cls, value: "RecompileMode | str") -> "RecompileMode":
        """Accept an enum member or its string name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unknown recompile mode: {value!r}. "
                f"Available: {[m.value for m in cls]}"
            ) from None


class EntryKind(Enum):
    """Kind of a dictionary lookup result."""

    ABSENT = "absent"
    NO_BREAK_INFO = "no_break_info"
    MASK = "mask"


@dataclass(frozen=True)
class PatternEntry:
    """Result of looking up a letter sequence in the dictionary."""

    kind: EntryKind
    digits: tuple[int, ...] = ()

    @classmethod
    def mask(cls, digits: str) -> "PatternEntry":
        return cls(EntryKind.MASK, tuple(int(d) for d in digits))

    @property
    def is_absent(self) -> bool:
        return self.kind is EntryKind.ABSENT

    @property
    def has_mask(self) -> bool:
        return self.kind is EntryKind.MASK


ABSENT = PatternEntry(EntryKind.ABSENT)
NO_BREAK_INFO = PatternEntry(EntryKind.NO_BREAK_INFO)


@dataclass(frozen=True)
class LanguageProfile:
    """Immutable language settings loaded from a profile or cache."""

    alphabet: str                       # lowercase letters
    alphabet_uc: str                    # uppercase letters, same order
    translation: dict[str, str] = field(default_factory=dict)
    min_left_limit: int = 1
    min_right_limit: int = 1
    internal_encoding: str = "utf-8"

    @property
    def letters(self) -> str:
        """Every character that may appear in a hyphenatable word."""
        return self.alphabet + self.alphabet_uc

    def to_lower(self, char: str) -> Optional[str]:
        """Return the lowercase partner of an uppercase letter, else None."""
        pos = self.alphabet_uc.find(char)
        if pos < 0 or pos >= len(self.alphabet):
            return None
        return self.alphabet[pos]

    def lookup_form(self, word: str) -> str:
        """Apply the translation table to a (lowercase) word."""
        if not self.translation:
            return word
        return "".join(self.translation.get(c, c) for c in word)


class CompiledDictionary:
    """Pattern dictionary with the prefix-closure property.

    Every proper non-empty prefix of a stored key is itself stored, either
    with a mask or as NO_BREAK_INFO, so a scan may stop at the first
    absent prefix.
    """

    def __init__(self, masks: Optional[dict[str, Optional[str]]] = None):
        # key -> digit string, or None for a closure-only entry
        self._masks: dict[str, Optional[str]] = {}
        self._entries: dict[str, PatternEntry] = {}
        for key, mask in (masks or {}).items():
            self._set(key, mask)

    def _set(self, key: str, mask: Optional[str]) -> None:
        self._masks[key] = mask
        self._entries[key] = NO_BREAK_INFO if mask is None else PatternEntry.mask(mask)

    def insert(self, key: str, mask: str) -> int:
        """Store a pattern and close its prefixes.

        Args:
            key: Letters of the pattern.
            mask: Digit string, one longer than key.

        Returns:
            Number of closure entries added.
        """
        self._set(key, mask)
        added = 0
        prefix = key[:-1]
        while prefix and prefix not in self._masks:
            self._set(prefix, None)
            added += 1
            prefix = prefix[:-1]
        return added

    def lookup(self, key: str) -> PatternEntry:
        return self._entries.get(key, ABSENT)

    def __contains__(self, key: str) -> bool:
        return key in self._masks

    def __len__(self) -> int:
        return len(self._masks)

    def __iter__(self) -> Iterator[str]:
        return iter(self._masks)

    def mask_count(self) -> int:
        """Number of keys that carry a real mask."""
        return sum(1 for m in self._masks.values() if m is not None)

    def is_closed(self) -> bool:
        """Check the prefix-closure invariant."""
        return all(
            key[:i] in self._masks
            for key in self._masks
            for i in range(1, len(key))
        )

    def to_dict(self) -> dict[str, Optional[str]]:
        """Sorted key -> mask mapping (None for closure entries)."""
        return {key: self._masks[key] for key in sorted(self._masks)}

    @classmethod
    def from_dict(cls, data: dict[str, Optional[str]]) -> "CompiledDictionary":
        return cls(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledDictionary):
            return NotImplemented
        return self._masks == other._masks


@dataclass
class HyphenationLimits:
    """Current margins; re-clamped against the profile after every change."""

    left: int = 0                   # letters kept before the first break
    right: int = 0                  # letters kept after the last break
    length: int = 0                 # shortest word that may be hyphenated
    right_last: int = 0             # right margin for a paragraph's last word
    left_uc: int = 0                # left margin for capitalized words

    def clamp(self, profile: LanguageProfile) -> "HyphenationLimits":
        """Raise every limit to its floor, in dependency order."""
        self.left = max(self.left, profile.min_left_limit)
        self.right = max(self.right, profile.min_right_limit)
        self.length = max(self.length, self.left + self.right)
        self.right_last = max(self.right_last, self.right)
        self.left_uc = max(self.left_uc, self.left)
        return self


@dataclass
class CacheRecord:
    """On-disk snapshot of a compiled language.

    Serialized as JSON with a fixed field order:
        format_version, alphabet, alphabet_uc, translation,
        min_left_limit, min_right_limit, internal_encoding, dictionary
    Closure-only dictionary entries are written as null.
    """

    profile: LanguageProfile
    dictionary: CompiledDictionary
    version: str = CACHE_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "format_version": self.version,
            "alphabet": self.profile.alphabet,
            "alphabet_uc": self.profile.alphabet_uc,
            "translation": dict(sorted(self.profile.translation.items())),
            "min_left_limit": self.profile.min_left_limit,
            "min_right_limit": self.profile.min_right_limit,
            "internal_encoding": self.profile.internal_encoding,
            "dictionary": self.dictionary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheRecord":
        """Create from dictionary."""
        profile = LanguageProfile(
            alphabet=data["alphabet"],
            alphabet_uc=data["alphabet_uc"],
            translation=dict(data.get("translation", {})),
            min_left_limit=int(data["min_left_limit"]),
            min_right_limit=int(data["min_right_limit"]),
            internal_encoding=data["internal_encoding"],
        )
        return cls(
            profile=profile,
            dictionary=CompiledDictionary.from_dict(data.get("dictionary", {})),
            version=data.get("format_version", ""),
        )

    def to_bytes(self) -> bytes:
        """Serialize deterministically: same record, same bytes."""
        return json.dumps(
            self.to_dict(), ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "CacheRecord":
        """Parse a serialized record.

        Raises:
            ValueError: If the bytes are not a well-formed record.
        """
        try:
            obj = json.loads(data.decode("utf-8"))
            return cls.from_dict(obj)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed cache record: {e}") from e
