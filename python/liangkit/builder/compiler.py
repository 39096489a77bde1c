"""Rule compiler with an on-disk cache.

Compiles a language profile and its rule files into a CacheRecord and
persists it at the profile's ``compiled`` path.

Cache policy:
    AUTO    rebuild when the artifact is missing, older than the profile or
            any rule file, unreadable, or written by another version
    NEVER   load the artifact; fail if it is absent or unreadable
    ALWAYS  rebuild unconditionally

Output structure:
    conf/
    ├── en_US.conf
    └── compiled/
        └── en_US.json      # path given by the profile's compiled= key
"""

import codecs
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import ConfigMapping, get_bool, parse_config, validate_profile
from ..errors import CacheError, ConfigError
from ..ingest.patterns import LiangPatternIngestor
from ..normalizer import parse_alphabet
from ..schema import (
    CACHE_VERSION,
    CacheRecord,
    CompiledDictionary,
    LanguageProfile,
    RecompileMode,
)
from ..storage import LocalStorage, Storage

logger = logging.getLogger(__name__)


@dataclass
class CompileStats:
    """Statistics from a compile operation."""

    total_patterns: int = 0
    total_words: int = 0
    total_skipped: int = 0
    closure_entries: int = 0
    dictionary_size: int = 0
    files_read: list[str] = field(default_factory=list)


class RuleCompiler:
    """Builds and caches the compiled dictionary of one language."""

    def __init__(self, profile_path: Path | str, storage: Optional[Storage] = None):
        """Load and validate the profile.

        Args:
            profile_path: Language profile (``<lang>.conf``).
            storage: Storage backend, local disk by default.

        Raises:
            ConfigError: If the profile is missing, unreadable or invalid.
        """
        self.storage = storage or LocalStorage()
        self.profile_path = self.storage.normalize_path(profile_path)
        self.conf: ConfigMapping = parse_config(self.profile_path, self.storage)

        for key in validate_profile(self.conf, self.profile_path):
            logger.warning("Ignoring unknown profile key %r in %s", key, self.profile_path)

        base = self.profile_path.parent
        self.compiled_path = self.storage.normalize_path(base / self.conf["compiled"][0])
        self.rule_paths = [
            self.storage.normalize_path(base / rule) for rule in self.conf["rules"]
        ]

    @property
    def proceed_uppercase(self) -> bool:
        return get_bool(self.conf, "proceed_uppercase")

    def build_profile(self) -> LanguageProfile:
        """Create the LanguageProfile described by the profile file."""
        alphabet, translation = parse_alphabet(self.conf["alphabet"][0])
        alphabet_uc = self.conf["alphabetUC"][0]
        if len(alphabet) != len(alphabet_uc):
            raise ConfigError(
                f"alphabet has {len(alphabet)} letters but alphabetUC has {len(alphabet_uc)}",
                self.profile_path,
            )
        for source, target in translation.items():
            if len(source) != 1 or len(target) != 1:
                raise ConfigError(
                    f"Translation ({source}>{target}) must map one letter to one letter",
                    self.profile_path,
                )

        return LanguageProfile(
            alphabet=alphabet,
            alphabet_uc=alphabet_uc,
            translation=translation,
            min_left_limit=int(self.conf["left_limit"][0]),
            min_right_limit=int(self.conf["right_limit"][0]),
            internal_encoding=codecs.lookup(self.conf["internal_encoding"][0]).name,
        )

    def compile(self) -> tuple[CacheRecord, CompileStats]:
        """Compile every rule file into a fresh record.

        Returns:
            Tuple of (CacheRecord, CompileStats).

        Raises:
            ConfigError: If a rule file is missing, unreadable or undecodable.
        """
        profile = self.build_profile()
        dictionary = CompiledDictionary()
        stats = CompileStats()
        ingestor = LiangPatternIngestor(
            internal_encoding=profile.internal_encoding, storage=self.storage
        )

        for rule_path in self.rule_paths:
            result = ingestor.ingest(rule_path)
            for key, mask in result.entries:
                stats.closure_entries += dictionary.insert(key, mask)
            for error in result.errors:
                logger.debug("%s: %s", rule_path.name, error)

            stats.total_patterns += result.total_patterns
            stats.total_words += result.total_words
            stats.total_skipped += result.total_skipped
            stats.files_read.append(str(rule_path))

        stats.dictionary_size = len(dictionary)
        logger.info(
            "Compiled %s: %d patterns, %d words, %d skipped, %d keys",
            self.profile_path.stem,
            stats.total_patterns,
            stats.total_words,
            stats.total_skipped,
            stats.dictionary_size,
        )
        return CacheRecord(profile=profile, dictionary=dictionary), stats

    def save(self, record: CacheRecord) -> bool:
        """Persist a record at the compiled path.

        Returns:
            True if written. A failed write is logged and only loses the
            cache; the record stays usable.
        """
        try:
            self.storage.mkdir(self.compiled_path.parent)
            self.storage.write(self.compiled_path, record.to_bytes())
        except OSError as e:
            logger.warning("Cannot write compiled dictionary %s: %s", self.compiled_path, e)
            return False
        return True

    def stale_reason(self) -> Optional[str]:
        """Return why the compiled artifact is out of date, or None."""
        compiled_mtime = self.storage.stat(self.compiled_path)
        if compiled_mtime is None:
            return "missing"

        for source in [self.profile_path, *self.rule_paths]:
            source_mtime = self.storage.stat(source)
            if source_mtime is None:
                return f"source {source.name} missing"
            if source_mtime > compiled_mtime:
                return f"{source.name} is newer"
        return None

    def load_cached(self) -> bytes:
        """Read the raw compiled artifact.

        Raises:
            CacheError: If the artifact is absent or unreadable.
        """
        try:
            return self.storage.read(self.compiled_path)
        except OSError as e:
            raise CacheError(f"Cannot read compiled dictionary ({e.strerror or e})", self.compiled_path) from e

    def load(self, mode: RecompileMode | str = RecompileMode.AUTO) -> CacheRecord:
        """Return the language's record, rebuilding it when needed.

        Args:
            mode: Recompile policy.

        Returns:
            Loaded or freshly compiled CacheRecord.

        Raises:
            ConfigError: If compiling is needed and the sources are bad.
            CacheError: In NEVER mode when the artifact is absent or unreadable.
        """
        mode = RecompileMode.from_value(mode)
        reason: Optional[str] = None

        if mode is RecompileMode.ALWAYS:
            reason = "forced"
        elif mode is RecompileMode.AUTO:
            reason = self.stale_reason()
        elif self.storage.stat(self.compiled_path) is None:
            raise CacheError("Compiled dictionary not found", self.compiled_path)

        if reason is None:
            try:
                raw = self.load_cached()
            except CacheError:
                if mode is RecompileMode.NEVER:
                    raise
                reason = "unreadable"
            else:
                try:
                    record = CacheRecord.from_bytes(raw)
                except ValueError as e:
                    reason = f"corrupt ({e})"
                else:
                    if record.version == CACHE_VERSION:
                        logger.debug("Loaded compiled dictionary %s", self.compiled_path)
                        return record
                    reason = f"version {record.version!r} != {CACHE_VERSION!r}"

        logger.info("Recompiling %s: %s", self.profile_path.stem, reason)
        record, _ = self.compile()
        self.save(record)
        return record
