"""Hyphenation engine: one compiled language, ready to process text."""

import codecs
import logging
from pathlib import Path
from typing import Optional

from .builder import RuleCompiler
from .config import default_hyphen, default_recompile, profile_path
from .hyphenator import WordHyphenator
from .scanner import TextScanner
from .schema import CompiledDictionary, HyphenationLimits, LanguageProfile, RecompileMode
from .storage import Storage

logger = logging.getLogger(__name__)


class Hyphenation:
    """Hyphenates text in one language.

    The profile and compiled dictionary are loaded once, at construction,
    and never change afterwards. Limits and the hyphen marker may be
    changed between calls.
    """

    def __init__(
        self,
        language: str,
        recompile: RecompileMode | str | None = None,
        conf_dir: Optional[Path | str] = None,
        storage: Optional[Storage] = None,
    ):
        """Load or compile a language.

        Args:
            language: Profile name, e.g. ``"en_US"`` for ``conf/en_US.conf``.
            recompile: Cache policy; defaults to LIANGKIT_RECOMPILE or AUTO.
            conf_dir: Directory holding the profiles; defaults to
                LIANGKIT_CONF_DIR or the bundled profiles.
            storage: Storage backend, local disk by default.

        Raises:
            ConfigError: If the profile or a needed rule file is missing or
                invalid.
            CacheError: In NEVER mode without a readable compiled artifact.
        """
        mode = RecompileMode.from_value(recompile if recompile is not None else default_recompile())
        compiler = RuleCompiler(profile_path(language, conf_dir), storage)
        record = compiler.load(mode)

        self.language = language
        self.profile: LanguageProfile = record.profile
        self.dictionary: CompiledDictionary = record.dictionary
        self.hyphen = default_hyphen()
        self._word = WordHyphenator(
            self.profile,
            self.dictionary,
            proceed_uppercase=compiler.proceed_uppercase,
        )
        self._scanner = TextScanner(self._word)
        logger.debug("Loaded %s with %d dictionary keys", language, len(self.dictionary))

    @property
    def limits(self) -> HyphenationLimits:
        return self._word.limits

    @property
    def proceed_uppercase(self) -> bool:
        return self._word.proceed_uppercase

    @proceed_uppercase.setter
    def proceed_uppercase(self, value: bool) -> None:
        self._word.proceed_uppercase = bool(value)

    def set_limits(
        self,
        left: int = 0,
        right: int = 0,
        length: int = 0,
        right_last: int = 0,
        left_uc: int = 0,
    ) -> HyphenationLimits:
        """Set the margins.

        Args:
            left: Minimum letters before the first break.
            right: Minimum letters after the last break.
            length: Shortest word that may be hyphenated.
            right_last: Right margin for the last word of a paragraph.
            left_uc: Left margin for words starting with a capital.

        Returns:
            The effective limits after clamping to the profile minimums.
        """
        return self._word.set_limits(left, right, length, right_last, left_uc)

    def hyphenate_word(self, word: str, last_word: bool = False, hyphen: Optional[str] = None) -> str:
        """Hyphenate a single word."""
        self._word.configure()
        return self._word.hyphenate_word(word, last_word, hyphen if hyphen is not None else self.hyphen)

    def hyphenate(
        self,
        text: str | bytes,
        encoding: Optional[str] = None,
        hyphen: Optional[str] = None,
        preserve_markup: bool = True,
    ) -> str | bytes:
        """Insert hyphen markers into text.

        Args:
            text: Text as str, or bytes in ``encoding``.
            encoding: Input/output encoding. Bytes default to the profile's
                internal encoding; for str it only restricts which
                hyphenated words are accepted.
            hyphen: Marker, e.g. ``"&shy;"``; defaults to self.hyphen.
            preserve_markup: Leave words inside tags alone.

        Returns:
            Same type as text, markers inserted.
        """
        hyphen = hyphen if hyphen is not None else self.hyphen
        if encoding is not None:
            encoding = codecs.lookup(encoding).name

        if isinstance(text, bytes):
            io_encoding = encoding or self.profile.internal_encoding
            # surrogateescape keeps undecodable bytes intact and non-letter
            decoded = text.decode(io_encoding, "surrogateescape")
            result = self._scanner.hyphenate_text(decoded, hyphen, preserve_markup, io_encoding)
            return result.encode(io_encoding, "surrogateescape")

        return self._scanner.hyphenate_text(text, hyphen, preserve_markup, encoding)
