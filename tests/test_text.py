"""Tests for name normalization and Arabic transliteration."""

import re

import pytest

from guestfinder.text import contains_arabic, normalize, transliterate

SAMPLES = [
    "Ahmed",
    "  José   María ",
    "O'Brien-Smith",
    "Anne & Bob!",
    "ﬁona",
    "أحمد",
    "Zoë\tÅsa\n",
    "Table #12",
    "",
]


class TestNormalization:
    def test_lowercase(self):
        assert normalize("AHMED") == "ahmed"

    def test_diacritics_removed(self):
        assert normalize("José María") == "jose maria"
        assert normalize("Zoë") == "zoe"
        assert normalize("Åsa") == "asa"

    def test_keeps_apostrophe_and_hyphen(self):
        assert normalize("O'Brien-Smith") == "o'brien-smith"

    def test_punctuation_becomes_space(self):
        assert normalize("Anne & Bob!") == "anne bob"

    def test_spaces_collapsed(self):
        assert normalize("  Mary \t  Jane\n") == "mary jane"

    def test_compatibility_forms_decomposed(self):
        assert normalize("ﬁona") == "fiona"

    def test_digits_kept(self):
        assert normalize("Table #12") == "table 12"

    def test_arabic_removed(self):
        assert normalize("أحمد") == ""

    def test_empty(self):
        assert normalize("") == ""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_output_alphabet(self, text):
        assert re.fullmatch(r"[a-z0-9 '-]*", normalize(text))

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestTransliteration:
    def test_simple_name(self):
        assert transliterate("أحمد") == "ahmd"

    def test_digraphs(self):
        assert transliterate("ثامر خالد") == "thamr khald"
        assert transliterate("شريف") == "shryf"

    def test_diacritics(self):
        # mu-ha-m-ma-d with damma, fatha, shadda, fatha
        assert transliterate("مُحَمَّد") == "muhamad"

    def test_tanween(self):
        assert transliterate("اً") == "aan"

    def test_hamza_deleted(self):
        assert transliterate("ء") == ""

    def test_lam_alef_ligature(self):
        assert transliterate("ﻻ") == "la"

    def test_non_arabic_unchanged(self):
        text = "Hello, World 123! é"
        assert transliterate(text) == text

    def test_mixed_script(self):
        assert transliterate("Ali علي") == "Ali aly"

    def test_empty(self):
        assert transliterate("") == ""


class TestContainsArabic:
    def test_arabic(self):
        assert contains_arabic("Guest أحمد")

    def test_latin(self):
        assert not contains_arabic("Ahmed")

    def test_presentation_form_outside_block(self):
        assert not contains_arabic("ﻻ")
