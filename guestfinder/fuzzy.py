"""Weighted multi-field fuzzy index over guest records."""

import math
import re
from dataclasses import dataclass, field
from typing import Any

from guestfinder.bitap import EPSILON, BitapSearcher

_TOKEN_RE = re.compile(r"[^ ]+")


@dataclass(frozen=True)
class IndexConfig:
    """Strictness parameters for one FuzzyIndex.

    threshold: highest score still counted as a match (lower = stricter).
    distance: how far from `location` a match may sit; unused when
        ignore_location is set.
    min_match_char_length: shortest run of matched characters accepted.
    weights: record attribute name → relative weight.
    """

    threshold: float
    distance: int
    min_match_char_length: int
    weights: dict[str, float] = field(default_factory=dict)
    ignore_location: bool = True
    location: int = 0


LOOSE = IndexConfig(
    threshold=0.4,
    distance=200,
    min_match_char_length=2,
    weights={"name": 0.6, "normalized_name": 0.25, "transliterated_name": 0.15},
)

STRICT = IndexConfig(
    threshold=0.22,
    distance=100,
    min_match_char_length=3,
    weights={"name": 0.7, "normalized_name": 0.2, "transliterated_name": 0.1},
)


@dataclass(frozen=True)
class Hit:
    record: Any
    score: float
    index: int


def field_norm(value: str, mantissa: int = 3) -> float:
    """Length norm 1/sqrt(tokens), rounded half-up to `mantissa` places."""
    tokens = len(_TOKEN_RE.findall(value))
    m = 10 ** mantissa
    return math.floor(m / math.sqrt(tokens) + 0.5) / m


class FuzzyIndex:
    """Fuzzy search across several string attributes of each record.

    Blank attribute values are not indexed. A record's score is the
    product over its matching fields of score ** (weight * norm).
    """

    def __init__(self, records, config: IndexConfig):
        self.config = config
        total = sum(config.weights.values())
        self.keys = [(name, weight / total) for name, weight in config.weights.items()]
        self.records = list(records)
        self._entries = [self._index_record(r) for r in self.records]

    def _index_record(self, record) -> list[tuple[str, float] | None]:
        entry = []
        for name, _ in self.keys:
            value = getattr(record, name, None)
            if isinstance(value, str) and value.strip():
                entry.append((value, field_norm(value)))
            else:
                entry.append(None)
        return entry

    def search(self, pattern: str) -> list[Hit]:
        """Return matching records, best (lowest score) first."""
        cfg = self.config
        searcher = BitapSearcher(
            pattern,
            threshold=cfg.threshold,
            distance=cfg.distance,
            location=cfg.location,
            min_match_char_length=cfg.min_match_char_length,
            ignore_location=cfg.ignore_location,
        )

        hits = []
        for idx, (record, entry) in enumerate(zip(self.records, self._entries)):
            total_score = 1.0
            matched = False
            for (_, weight), value in zip(self.keys, entry):
                if value is None:
                    continue
                text, norm = value
                is_match, score = searcher.search_in(text)
                if not is_match:
                    continue
                matched = True
                if score == 0 and weight:
                    score = EPSILON
                total_score *= score ** ((weight or 1) * norm)
            if matched:
                hits.append(Hit(record=record, score=total_score, index=idx))

        hits.sort(key=lambda h: (h.score, h.index))
        return hits
