"""Tests for the hyphenator module."""

import pytest

from liangkit.builder import RuleCompiler
from liangkit.hyphenator import SOFT_HYPHEN, WordHyphenator
from liangkit.schema import HyphenationLimits


@pytest.fixture
def english(en_conf_dir):
    """WordHyphenator over the bundled English patterns."""
    record, _ = RuleCompiler(en_conf_dir / "en_US.conf").compile()
    return WordHyphenator(record.profile, record.dictionary)


@pytest.fixture
def sample(xx_conf_dir):
    """WordHyphenator over the sample language."""
    record, _ = RuleCompiler(xx_conf_dir / "xx.conf").compile()
    return WordHyphenator(record.profile, record.dictionary)


class TestEnglish:
    """Pinned results for the Knuth/Liang English patterns."""

    @pytest.mark.parametrize("word, expected", [
        ("hyphenation", "hy-phen-ation"),
        ("supercalifragilisticexpialidocious", "su-per-cal-ifrag-ilis-tic-ex-pi-ali-do-cious"),
        ("project", "project"),
        ("table", "ta-ble"),
        ("associate", "as-so-ciate"),
    ])
    def test_words(self, english, word, expected):
        """Test reference hyphenations at left=2, right=3."""
        assert english.limits.left == 2
        assert english.limits.right == 3
        assert english.hyphenate_word(word, hyphen="-") == expected

    def test_default_marker(self, english):
        """Test the soft hyphen is the default marker."""
        assert english.hyphenate_word("hyphenation") == f"hy{SOFT_HYPHEN}phen{SOFT_HYPHEN}ation"

    def test_capitalized(self, english):
        """Test a leading capital is kept in the output."""
        assert english.hyphenate_word("Hyphenation", hyphen="-") == "Hy-phen-ation"

    def test_capitalized_left_limit(self, english):
        """Test left_uc applies to capitalized words only."""
        english.set_limits(left_uc=3)
        assert english.hyphenate_word("Hyphenation", hyphen="-") == "Hyphen-ation"
        assert english.hyphenate_word("hyphenation", hyphen="-") == "hy-phen-ation"

    def test_last_word_margin(self, english):
        """Test right_last applies to the last word of a paragraph."""
        english.set_limits(right_last=6)
        assert english.hyphenate_word("hyphenation", last_word=True, hyphen="-") == "hy-phenation"
        assert english.hyphenate_word("hyphenation", last_word=False, hyphen="-") == "hy-phen-ation"

    def test_interior_capitals(self, english):
        """Test acronym-like words are left alone unless enabled."""
        assert english.hyphenate_word("HyPhenation", hyphen="-") == "HyPhenation"
        english.proceed_uppercase = True
        assert english.hyphenate_word("HyPhenation", hyphen="-") == "Hy-Phen-ation"

    def test_escape_character(self, english):
        """Test words holding the escape character are returned as is."""
        assert english.hyphenate_word("hyphen\\ation", hyphen="-") == "hyphen\\ation"

    def test_length_limit(self, english):
        """Test words shorter than the length limit are untouched."""
        english.set_limits(length=12)
        assert english.hyphenate_word("hyphenation", hyphen="-") == "hyphenation"
        english.set_limits(length=11)
        assert english.hyphenate_word("hyphenation", hyphen="-") == "hy-phen-ation"

    def test_unencodable_result(self, english):
        """Test a result that does not fit the encoding degrades to the word."""
        assert english.hyphenate_word("hyphenation", encoding="ascii") == "hyphenation"
        assert english.hyphenate_word("hyphenation", hyphen="-", encoding="ascii") == "hy-phen-ation"


class TestMargins:
    """Margin properties over many words."""

    WORDS = [
        "hyphenation", "supercalifragilisticexpialidocious", "concatenation",
        "representation", "international", "responsibilities", "characteristically",
        "dictionary", "algorithm", "compilation", "typography", "Encyclopedia",
    ]

    @pytest.mark.parametrize("left, right", [(2, 3), (3, 3), (4, 5), (2, 6)])
    def test_no_break_inside_margins(self, english, left, right):
        """Test no marker falls within the left or right margin."""
        english.set_limits(left=left, right=right, left_uc=left)
        for word in self.WORDS:
            pieces = english.hyphenate_word(word, hyphen="|").split("|")
            assert "".join(pieces) == word
            assert len(pieces[0]) >= left
            assert len(pieces[-1]) >= right

    def test_break_points_match_output(self, english):
        """Test break_points lists the letter counts before each marker."""
        assert english.break_points("hyphenation") == [2, 6]
        assert english.break_points("HYPHENATION") is None

    def test_no_single_letter_syllables(self, english):
        """Test two markers are never adjacent to one letter."""
        for word in self.WORDS:
            pieces = english.hyphenate_word(word, hyphen="|").split("|")
            assert all(len(piece) >= 2 for piece in pieces)


class TestSampleLanguage:
    """Tests over the sample language fixture."""

    def test_patterns(self, sample):
        """Test plain pattern scoring."""
        assert sample.hyphenate_word("abcdabc", hyphen="-") == "abc-da-bc"

    def test_dictionary_word_overrides(self, sample):
        """Test dictionary words replace pattern breaks."""
        assert sample.hyphenate_word("abcdab", hyphen="-") == "ab-cdab"
        assert sample.hyphenate_word("abcdabcd", hyphen="-") == "abcdabcd"

    def test_translation_table(self, sample):
        """Test translated letters match patterns but are emitted unchanged."""
        assert sample.hyphenate_word("abeéc", hyphen="-") == "abe-éc"

    def test_capital_with_translation(self, sample):
        """Test a folded capital still goes through the translation table."""
        sample.proceed_uppercase = True
        assert sample.hyphenate_word("AbeÉc", hyphen="-") == "Abe-Éc"

    def test_never_after_first_letter(self, sample):
        """Test the first letter is never split off."""
        assert sample.break_points("abab") == []


class TestLimits:
    """Tests for limit handling."""

    def test_set_limits_clamps(self, english):
        """Test limits below the profile floors are raised."""
        limits = english.set_limits(left=1, right=1, length=1)
        assert limits == HyphenationLimits(left=2, right=3, length=5, right_last=3, left_uc=2)

    def test_configure_after_mutation(self, english):
        """Test direct mutation is re-clamped by configure."""
        english.limits.left = 0
        english.limits.right_last = 0
        english.configure()
        assert english.limits.left == 2
        assert english.limits.right_last == 3
