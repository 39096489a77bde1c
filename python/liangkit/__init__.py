"""liangkit - Pattern-based word hyphenation toolkit.

Compiles human-authored Liang pattern files into a lookup dictionary and
uses it to insert break markers into running text.

Core concepts:
    - A language profile (``conf/<lang>.conf``) names the alphabet, the
      minimum margins and one or more rule files
    - Rule files hold Liang patterns and hyphenated dictionary words
    - The compiled dictionary is cached on disk and rebuilt when stale

Example:
    "hyphenation" (en_US, left=2, right=3) → "hy-phen-ation"

Usage:
    from liangkit import Hyphenation, RecompileMode

    engine = Hyphenation("en_US", recompile=RecompileMode.AUTO)
    engine.set_limits(left=2, right=3, length=6)

    html = engine.hyphenate("<p>Hyphenation of running text</p>", hyphen="&shy;")
    raw = engine.hyphenate(b"cp1251 bytes ...", encoding="cp1251")
"""

__version__ = "1.0.3"

from .errors import CacheError, ConfigError, HyphenationError
from .schema import (
    CompiledDictionary,
    HyphenationLimits,
    LanguageProfile,
    RecompileMode,
)
from .engine import Hyphenation
from .log import configure_logging

__all__ = [
    "CacheError",
    "CompiledDictionary",
    "ConfigError",
    "Hyphenation",
    "HyphenationError",
    "HyphenationLimits",
    "LanguageProfile",
    "RecompileMode",
    "configure_logging",
]
