"""Unit tests for text normalization and string similarity helpers."""

import re

import pytest

from atscore.utils.text_processing import (
    calculate_similarity,
    is_bullet,
    levenshtein_distance,
    normalize_keyword,
    normalize_text,
    round_half_up,
    strip_bullet,
    whole_word,
    word_count,
)


class TestNormalizeText:
    """Test the extraction form of normalization."""

    @pytest.mark.unit
    def test_lowercases_and_collapses_whitespace(self):
        assert normalize_text("  Senior   PYTHON\tEngineer \n") == "senior python engineer"

    @pytest.mark.unit
    def test_keeps_tech_punctuation(self):
        """'.', '+', '#', '/', '-' survive so node.js, c++ and ci/cd stay intact."""
        assert normalize_text("Node.js, C++ & C# (CI/CD) full-stack!") == "node.js c++ c# ci/cd full-stack"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        ["Hello, World!", "  a  b  ", "Node.js / React (v18)", "", "•  Led   teams — 40%"],
    )
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once


class TestNormalizeKeyword:
    """Test the comparison form of normalization."""

    @pytest.mark.unit
    def test_punctuation_becomes_space(self):
        assert normalize_keyword("Node.js") == "node js"
        assert normalize_keyword("CI/CD") == "ci cd"

    @pytest.mark.unit
    def test_trims_and_collapses(self):
        assert normalize_keyword("  REST   API ") == "rest api"


class TestWholeWord:
    """Test the lookaround wrapper used by the pattern tables."""

    @pytest.mark.unit
    def test_matches_symbol_terminated_terms(self):
        pattern = re.compile(whole_word(r"c\+\+"))
        assert pattern.search("c++ and rust")
        assert pattern.search("rust, c++")

    @pytest.mark.unit
    def test_rejects_partial_words(self):
        pattern = re.compile(whole_word("java"))
        assert pattern.search("java developer")
        assert not pattern.search("javascript developer")


class TestBullets:
    """Test bullet marker detection and removal."""

    @pytest.mark.unit
    @pytest.mark.parametrize("line", ["• Built APIs", "- Built APIs", "* Built APIs", "1. Built APIs", "a) Built APIs"])
    def test_detects_markers(self, line):
        assert is_bullet(line)
        assert strip_bullet(line) == "Built APIs"

    @pytest.mark.unit
    def test_plain_line_is_not_bullet(self):
        assert not is_bullet("Built APIs")
        assert strip_bullet("  Built APIs  ") == "Built APIs"


class TestSimilarity:
    """Test Levenshtein distance and normalized similarity."""

    @pytest.mark.unit
    def test_distance_basics(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("same", "same") == 0

    @pytest.mark.unit
    def test_identical_strings(self):
        assert calculate_similarity("kubernetes", "kubernetes") == 1.0

    @pytest.mark.unit
    def test_empty_strings(self):
        assert calculate_similarity("", "") == 1.0
        assert calculate_similarity("", "react") == 0.0

    @pytest.mark.unit
    @pytest.mark.parametrize("a,b", [("react", "reactjs"), ("postgres", "postgresql"), ("go", "golang")])
    def test_symmetric(self, a, b):
        assert calculate_similarity(a, b) == calculate_similarity(b, a)

    @pytest.mark.unit
    def test_value(self):
        assert calculate_similarity("react", "reactjs") == pytest.approx(5 / 7)


class TestCounting:
    """Test word counting and rounding."""

    @pytest.mark.unit
    def test_word_count(self):
        assert word_count("Built the storefront  using React.") == 5
        assert word_count("   ") == 0

    @pytest.mark.unit
    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2
        assert round_half_up(53.85) == 54
