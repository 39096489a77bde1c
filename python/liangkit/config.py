"""Configuration for liangkit.

Two layers:
    - Process defaults (profile directory, hyphen marker, recompile mode),
      hardcoded with environment overrides.
    - Language profiles: ``key=value`` files parsed into a multi-valued
      mapping and checked against PROFILE_SCHEMA.

Profile syntax:
    // comment
    alphabet=abc(é>e)d          # plain value
    alphabetUC='ABC ÉD'         # quoted literal, may hold spaces, // and =
    rules=hyph_a.pat            # repeated keys accumulate
    rules=hyph_b.pat
    proceed_uppercase           # bare key -> True

Whole-line comments are removed before quoted literals are read, so an
apostrophe in them is harmless. A trailing comment is only stripped after
the literals, so it must not contain a single quote.
"""

import codecs
import os
import re
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError
from .storage import LocalStorage, Storage

BUNDLED_CONF_DIR = Path(__file__).parent / "conf"

# Hardcoded fallback defaults
FALLBACK_DEFAULTS: dict[str, Any] = {
    "conf_dir": str(BUNDLED_CONF_DIR),
    "hyphen": "\u00ad",
    "recompile": "auto",
    "log_level": "INFO",
}

ENV_OVERRIDES = {
    "conf_dir": "LIANGKIT_CONF_DIR",
    "hyphen": "LIANGKIT_HYPHEN",
    "recompile": "LIANGKIT_RECOMPILE",
    "log_level": "LIANGKIT_LOG_LEVEL",
}

# key -> (required, type); every value is still stored as a list
PROFILE_SCHEMA: dict[str, tuple[bool, type]] = {
    "alphabet": (True, str),
    "alphabetUC": (True, str),
    "left_limit": (True, int),
    "right_limit": (True, int),
    "internal_encoding": (True, str),
    "compiled": (True, str),
    "rules": (True, str),
    "proceed_uppercase": (False, bool),
}

ConfigMapping = dict[str, list[str | bool]]

# Placeholders protecting quoted literals while comments and whitespace
# are stripped.
_SCREENED = {
    "\n": "\x00LFEED\x00",
    " ": "\x00SPACE\x00",
    "'": "\x00SNQUOTE\x00",
    '"': "\x00DBQUOTE\x00",
    "//": "\x00DBSLASH\x00",
    "=": "\x00EQUAL\x00",
}
_SCREEN_PATTERN = re.compile(r"\n|\s|'|\\?\"|//|=")
_EMPTY_LITERAL = re.compile(r"(?<==)\s*''")
_QUOTED_LITERAL = re.compile(r"(?<!\\)'(.*?[^\\])'", re.DOTALL)
_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_COMMENT_LINE = re.compile(r"^[ \t]*//.*$", re.MULTILINE)
_ENCODING_LINE = re.compile(r"^\s*internal_encoding\s*=\s*'?([\w.:-]+)", re.MULTILINE)


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a process default, honouring its environment override."""
    env_name = ENV_OVERRIDES.get(key)
    if env_name and os.environ.get(env_name):
        return os.environ[env_name]
    return FALLBACK_DEFAULTS.get(key, fallback)


def default_conf_dir() -> Path:
    return Path(get_default("conf_dir"))


def default_hyphen() -> str:
    return get_default("hyphen")


def default_recompile() -> str:
    return get_default("recompile")


def profile_path(language: str, conf_dir: Optional[Path | str] = None) -> Path:
    """Return the profile file for a language id such as ``en_US``."""
    base = Path(conf_dir) if conf_dir is not None else default_conf_dir()
    return base / f"{language}.conf"


def unix_line_feeds(text: str) -> str:
    """Convert dos (\\r\\n) and mac (\\r) line feeds to \\n."""
    return re.sub(r"\r\n?", "\n", text)


def clean_config(text: str) -> str:
    """Remove // comments, surrounding whitespace and blank lines.

    Args:
        text: Raw file content.

    Returns:
        Non-empty trimmed lines joined by \\n.
    """
    text = _COMMENT.sub("", unix_line_feeds(text))
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def _screen_token(match: re.Match) -> str:
    token = match.group()
    if token == "\n":
        return _SCREENED["\n"]
    if token.isspace():
        return _SCREENED[" "]
    if token.endswith('"'):
        return _SCREENED['"']
    return _SCREENED[token]


def _screen(match: re.Match) -> str:
    literal = match.group(1).replace("\\'", "'")
    return _SCREEN_PATTERN.sub(_screen_token, literal)


def _unscreen(value: str) -> str:
    for literal, token in _SCREENED.items():
        value = value.replace(token, literal)
    return value


def parse_config_str(text: str) -> ConfigMapping:
    """Parse profile text into a multi-valued mapping.

    Args:
        text: Profile content.

    Returns:
        Mapping of key -> ordered list of values. A bare key without ``=``
        yields True.
    """
    text = _COMMENT_LINE.sub("", unix_line_feeds(text))
    text = _EMPTY_LITERAL.sub("", text)
    text = _QUOTED_LITERAL.sub(_screen, text)

    result: ConfigMapping = {}
    for line in clean_config(text).split("\n"):
        key, sep, value = line.partition("=")
        key = key.strip()
        if not key:
            continue
        result.setdefault(key, []).append(_unscreen(value.strip()) if sep else True)
    return result


def _decode_profile(raw: bytes, path: Path) -> str:
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8):]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass
    # Legacy profiles are written in their own internal encoding.
    sniffed = _ENCODING_LINE.search(raw.decode("latin-1"))
    if sniffed:
        try:
            return raw.decode(sniffed.group(1))
        except (LookupError, UnicodeDecodeError):
            pass
    raise ConfigError("Cannot decode profile", path)


def parse_config(path: Path | str, storage: Optional[Storage] = None) -> ConfigMapping:
    """Read and parse a profile file.

    Args:
        path: Profile file.
        storage: Storage backend, local disk by default.

    Returns:
        Multi-valued mapping, see parse_config_str.

    Raises:
        ConfigError: If the file is missing, unreadable or empty.
    """
    storage = storage or LocalStorage()
    path = Path(path)
    try:
        raw = storage.read(path)
    except OSError as e:
        raise ConfigError(f"Cannot read profile ({e.strerror or e})", path) from e

    text = _decode_profile(raw, path)
    if not text.strip():
        raise ConfigError("Empty profile", path)
    return parse_config_str(text)


def validate_profile(conf: ConfigMapping, path: Optional[Path | str] = None) -> list[str]:
    """Check a parsed profile against PROFILE_SCHEMA.

    Args:
        conf: Parsed profile.
        path: Profile file, used in error messages.

    Returns:
        Unknown keys found in the profile (ignored by the compiler).

    Raises:
        ConfigError: On a missing required key or a badly typed value.
    """
    for key, (required, kind) in PROFILE_SCHEMA.items():
        values = conf.get(key)
        if not values:
            if required:
                raise ConfigError(f"Missing required key '{key}'", path)
            continue
        for value in values:
            if kind is bool:
                if value is not True and str(value).lower() not in ("1", "0", "true", "false", "yes", "no"):
                    raise ConfigError(f"Key '{key}' expects a boolean, got {value!r}", path)
            elif value is True:
                raise ConfigError(f"Key '{key}' needs a value", path)
            elif kind is int:
                try:
                    int(value)
                except ValueError:
                    raise ConfigError(f"Key '{key}' expects an integer, got {value!r}", path) from None

    encoding = conf["internal_encoding"][0]
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ConfigError(f"Unknown internal_encoding {encoding!r}", path) from None

    return [key for key in conf if key not in PROFILE_SCHEMA]


def get_bool(conf: ConfigMapping, key: str, fallback: bool = False) -> bool:
    """Read the first value of a boolean profile key."""
    values = conf.get(key)
    if not values:
        return fallback
    value = values[0]
    if value is True:
        return True
    return str(value).lower() in ("1", "true", "yes")
