"""SearchService: owns the guest records and both fuzzy indexes."""

import logging
import unicodedata
from dataclasses import dataclass, field

from guestfinder.loader import load_rows
from guestfinder.matcher import Matcher, prepare_query
from guestfinder.records import DataLoadError, GuestRecord, build_records

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Outcome of one search.

    `cleared` means the query normalized to nothing; callers should clear
    their display. Otherwise an empty `hits` list means no close matches.
    """

    cleared: bool = False
    hits: list[dict] = field(default_factory=list)

    @property
    def no_matches(self) -> bool:
        return not self.cleared and not self.hits


def _collation_key(name: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    # lowercase before uppercase on ties, as in ICU root collation
    return base.casefold(), name.swapcase()


class SearchService:
    """Guest lookup for one session.

    The guest list is loaded at most once. Until a load succeeds every
    search returns no hits; a failed load is final.
    """

    def __init__(self):
        self.records: list[GuestRecord] = []
        self._matcher: Matcher | None = None
        self._attempted = False
        self.failed = False

    @property
    def loaded(self) -> bool:
        return self._matcher is not None

    async def load(self, source: str) -> None:
        """Fetch, parse and index the guest list.

        Raises DataLoadError once on failure; the service then stays empty.
        """
        self._claim()
        try:
            rows = await load_rows(source)
            self._bootstrap(rows)
        except DataLoadError as e:
            self.failed = True
            logger.error("Failed to load guest list from %s: %s", source, e)
            raise

    def bootstrap(self, rows) -> None:
        """Build records and both indexes from already-parsed rows.

        Shares the single-shot rule with load().
        """
        self._claim()
        try:
            self._bootstrap(rows)
        except DataLoadError:
            self.failed = True
            raise

    def _claim(self) -> None:
        if self._attempted:
            raise RuntimeError("Guest list already loaded for this session")
        self._attempted = True

    def _bootstrap(self, rows) -> None:
        records = build_records(rows)
        self.records = records
        self._matcher = Matcher(records)
        logger.info("Indexed %d guest(s)", len(records))

    def search(self, query: str) -> SearchResult:
        """Look up guests by name. Never raises."""
        if not prepare_query(query):
            return SearchResult(cleared=True)
        if self._matcher is None:
            return SearchResult()

        hits = self._matcher.search(query)
        return SearchResult(hits=[
            {"name": h.record.name, "table": h.record.table, "score": h.score}
            for h in hits
        ])

    def list_all(self) -> list[dict]:
        """All guests sorted by name."""
        ordered = sorted(self.records, key=lambda r: _collation_key(r.name))
        return [{"name": r.name, "table": r.table} for r in ordered]
