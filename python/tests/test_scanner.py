"""Tests for the scanner module."""

import pytest

from liangkit.builder import RuleCompiler
from liangkit.hyphenator import WordHyphenator
from liangkit.scanner import TextScanner


@pytest.fixture
def scanner(en_conf_dir):
    """TextScanner over the bundled English patterns."""
    record, _ = RuleCompiler(en_conf_dir / "en_US.conf").compile()
    return TextScanner(WordHyphenator(record.profile, record.dictionary))


class TestFindWords:
    """Tests for TextScanner.find_words."""

    def test_runs_and_length(self, scanner):
        """Test maximal letter runs at or above the length limit."""
        matches = scanner.find_words("a tiny hyphenation, table!")
        assert [m.word for m in matches] == ["hyphenation", "table"]
        assert matches[0].start == 7
        assert matches[0].end == 18

    def test_escaped_run_skipped(self, scanner):
        """Test a run preceded by the escape character is not a word."""
        matches = scanner.find_words("\\hyphenation hyphenation")
        assert [m.start for m in matches] == [13]

    def test_digits_split_runs(self, scanner):
        """Test non-letters end a run."""
        matches = scanner.find_words("abc123hyphenation")
        assert [m.word for m in matches] == ["hyphenation"]

    def test_markup_skipped(self, scanner):
        """Test words inside tags are skipped with preserve_markup."""
        text = '<section title="hyphenation">typography</section>'
        assert [m.word for m in scanner.find_words(text, preserve_markup=True)] == ["typography"]
        assert [m.word for m in scanner.find_words(text, preserve_markup=False)] == [
            "section", "title", "hyphenation", "typography", "section"
        ]

    def test_paragraph_ends(self, scanner):
        """Test words before a line break close a paragraph."""
        matches = scanner.find_words("first paragraph.\nsecond paragraph continues")
        assert [(m.word, m.last_word) for m in matches] == [
            ("first", False),
            ("paragraph", True),
            ("second", False),
            ("paragraph", False),
            ("continues", True),
        ]

    def test_last_match_forced(self, scanner):
        """Test the last word of the text always closes a paragraph."""
        matches = scanner.find_words("hyphenation hyphenation")
        assert [m.last_word for m in matches] == [False, True]

    def test_no_words(self, scanner):
        """Test text without long runs."""
        assert scanner.find_words("a b c 1234") == []


class TestHyphenateText:
    """Tests for TextScanner.hyphenate_text."""

    def test_sentence(self, scanner):
        """Test every word is hyphenated in place."""
        text = "Hyphenation of a table, hyphenation!"
        assert scanner.hyphenate_text(text, hyphen="-") == "Hy-phen-ation of a ta-ble, hy-phen-ation!"

    def test_paragraph_margin(self, scanner):
        """Test right_last applies before line breaks and at the end."""
        scanner.hyphenator.set_limits(right_last=6)
        text = "hyphenation\nhyphenation hyphenation"
        assert scanner.hyphenate_text(text, hyphen="-") == "hy-phenation\nhy-phen-ation hy-phenation"

    def test_markup_preserved(self, scanner):
        """Test tag content is untouched while text content is hyphenated."""
        text = '<b id="hyphenation">hyphenation</b>'
        assert scanner.hyphenate_text(text, hyphen="-") == '<b id="hyphenation">hy-phen-ation</b>'

    def test_markup_not_preserved(self, scanner):
        """Test tags are processed like text when preserve_markup is off."""
        text = '<b id="hyphenation">hyphenation</b>'
        assert scanner.hyphenate_text(text, hyphen="-", preserve_markup=False) == (
            '<b id="hy-phen-ation">hy-phen-ation</b>'
        )

    def test_text_between_tags(self, scanner):
        """Test element content is hyphenated, only tag interiors are protected."""
        assert scanner.hyphenate_text("<b>averylongword</b>", hyphen="-") == "<b>av-ery-long-word</b>"

    def test_word_inside_tag(self, scanner):
        """Test a long word inside a tag is left unmodified."""
        text = "<averylongword>"
        assert scanner.hyphenate_text(text, hyphen="-") == text

    def test_multichar_marker(self, scanner):
        """Test offsets stay right when the marker is longer than a letter."""
        text = "hyphenation table hyphenation"
        assert scanner.hyphenate_text(text, hyphen="&shy;") == (
            "hy&shy;phen&shy;ation ta&shy;ble hy&shy;phen&shy;ation"
        )

    @pytest.mark.parametrize("text", [
        "Hyphenation is the process of dividing words at line ends.\n"
        "Typography relies on it; so does <em>justification</em>.",
        "supercalifragilisticexpialidocious\r\n\r\nrepresentation, characteristically",
        "<p class=\"international\">Responsibilities \\hyphenation</p>",
    ])
    def test_round_trip(self, scanner, text):
        """Test removing the markers restores the input."""
        result = scanner.hyphenate_text(text, hyphen="\u00ad")
        assert result != text
        assert result.replace("\u00ad", "") == text

    def test_deterministic(self, scanner):
        """Test the same input gives the same output."""
        text = "Hyphenation of international typography"
        assert scanner.hyphenate_text(text) == scanner.hyphenate_text(text)

    def test_encoding_failure_keeps_words(self, scanner):
        """Test words that cannot be encoded are kept as they are."""
        text = "hyphenation table"
        assert scanner.hyphenate_text(text, encoding="ascii") == text
