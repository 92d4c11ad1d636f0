"""Two-tier guest name matching: loose for short queries, strict for longer ones."""

from guestfinder.fuzzy import LOOSE, STRICT, FuzzyIndex, Hit
from guestfinder.records import GuestRecord
from guestfinder.text import contains_arabic, normalize, transliterate

# Normalized queries at least this long go to the strict index
STRICT_QUERY_LENGTH = 4


def prepare_query(query: str) -> str:
    """Transliterate (if Arabic) and normalize a raw query."""
    if contains_arabic(query):
        query = transliterate(query)
    return normalize(query)


class Matcher:
    """Loose and strict fuzzy indexes over the same records."""

    def __init__(self, records: list[GuestRecord]):
        self.loose = FuzzyIndex(records, LOOSE)
        self.strict = FuzzyIndex(records, STRICT)

    def select_index(self, normalized_query: str) -> FuzzyIndex:
        if len(normalized_query) >= STRICT_QUERY_LENGTH:
            return self.strict
        return self.loose

    def search(self, query: str) -> list[Hit]:
        """Ranked hits for a raw query; empty if it normalizes to nothing."""
        normalized = prepare_query(query)
        if not normalized:
            return []
        return self.select_index(normalized).search(normalized)
