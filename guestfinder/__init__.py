"""Fuzzy guest-name to table lookup with Arabic transliteration."""
