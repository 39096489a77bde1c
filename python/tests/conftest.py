"""Pytest configuration and fixtures."""

import pytest
import shutil
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

PACKAGE_DIR = Path(__file__).parent.parent / "liangkit"


def write_language(
    base: Path,
    name: str,
    profile: str,
    rules: dict[str, str],
    encoding: str = "utf-8",
) -> Path:
    """Write a profile and its rule files under base.

    Args:
        base: Directory to hold the profile.
        name: Language id; the profile is written to ``<name>.conf``.
        profile: Profile text.
        rules: Rule file name -> content (first line names its encoding).
        encoding: Encoding of the profile file itself.

    Returns:
        The conf directory (base).
    """
    base.mkdir(parents=True, exist_ok=True)
    (base / f"{name}.conf").write_bytes(profile.encode(encoding))
    for filename, content in rules.items():
        rule_encoding = content.split("\n", 1)[0].strip()
        (base / filename).write_bytes(content.encode(rule_encoding))
    return base


@pytest.fixture
def en_conf_dir(tmp_path):
    """Copy of the bundled en_US profile with a private cache location."""
    conf_dir = tmp_path / "conf"
    rules_dir = tmp_path / "rules"
    conf_dir.mkdir()
    rules_dir.mkdir()
    shutil.copy(PACKAGE_DIR / "conf" / "en_US.conf", conf_dir / "en_US.conf")
    shutil.copy(PACKAGE_DIR / "rules" / "hyph_en_US.pat", rules_dir / "hyph_en_US.pat")
    return conf_dir


@pytest.fixture
def sample_profile():
    """Small profile with a translation pair."""
    return """// Test language
alphabet=abcde(é>e)
alphabetUC=ABCDEÉ
left_limit=1
right_limit=2
internal_encoding=utf-8
compiled=cache/xx.json
rules=xx.pat
"""


@pytest.fixture
def sample_rules():
    """Rule file for sample_profile."""
    return """utf-8
// patterns
a1b c1d
e1e

// dictionary words
ab-cdab
abcdabcd
"""


@pytest.fixture
def xx_conf_dir(tmp_path, sample_profile, sample_rules):
    """Conf directory holding the sample language ``xx``."""
    return write_language(tmp_path / "conf", "xx", sample_profile, {"xx.pat": sample_rules})


@pytest.fixture
def cyrillic_conf_dir(tmp_path):
    """Conf directory holding a cp1251 language ``ru_XX``."""
    profile = """// Cyrillic test language, stored in cp1251
alphabet=абвгде(ё>е)
alphabetUC=АБВГДЕЁ
left_limit=1
right_limit=2
internal_encoding=cp1251
compiled=compiled/ru_XX.json
rules=hyph_ru_XX.pat
"""
    rules = """cp1251
а1б
в1г
е1е
"""
    return write_language(
        tmp_path / "conf", "ru_XX", profile, {"hyph_ru_XX.pat": rules}, encoding="cp1251"
    )
