"""Unit tests for job posting text cleanup."""

import pytest

from atscore.contexts.intake.normalizer import (
    flatten_subsection_headers,
    normalize_unicode,
    preprocess_job_text,
)


@pytest.mark.unit
class TestNormalizeUnicode:
    def test_smart_punctuation(self):
        assert normalize_unicode("\u201cWe\u2019re hiring\u201d \u2013 now\u2026") == "\"We're hiring\" - now..."

    def test_invisible_characters(self):
        assert normalize_unicode("Py\u200bthon developer\ufeff") == "Python developer"

    def test_bullets(self):
        assert normalize_unicode("\u2022 Go") == "* Go"


@pytest.mark.unit
class TestPreprocess:
    def test_subsection_headers_flattened(self):
        assert flatten_subsection_headers("**- Required Skills:**") == "**Required Skills:**"
        assert flatten_subsection_headers("**• Nice to have:**") == "**Nice to have:**"

    def test_line_endings(self):
        assert preprocess_job_text("a\r\nb\rc") == "a\nb\nc"
