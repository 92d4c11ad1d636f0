"""Guest list loading: local CSV files or CSV over HTTP."""

import csv
import io
import logging
import os
from pathlib import Path

import httpx

from guestfinder.records import DataLoadError

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "guests.csv"
_BOM = "\ufeff"


def resolve_source() -> str:
    return os.environ.get("GUESTFINDER_CSV", DEFAULT_SOURCE)


def _source_version() -> str | None:
    return os.environ.get("GUESTFINDER_CSV_VERSION") or None


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def fetch_csv_text(source: str, transport: httpx.AsyncBaseTransport | None = None) -> str:
    """Read the raw CSV text from a URL or a local path."""
    if not is_url(source):
        return Path(source).read_text(encoding="utf-8-sig")

    # Cache-busting version, e.g. guests.csv?v=3
    version = _source_version()
    params = {"v": version} if version else None
    async with httpx.AsyncClient(timeout=30, follow_redirects=True, transport=transport) as client:
        resp = await client.get(source, params=params)
        resp.raise_for_status()
        return resp.text


def parse_csv(text: str) -> list[dict]:
    """Parse CSV text with a header row into a list of dicts.

    Blank lines are skipped. Rows with the wrong number of fields are kept
    but logged.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip(_BOM)))
    rows = []
    for row in reader:
        if None in row:
            logger.warning("CSV line %d has too many fields", reader.line_num)
        elif None in row.values():
            logger.warning("CSV line %d has too few fields", reader.line_num)
        rows.append(row)
    return rows


async def load_rows(source: str, transport: httpx.AsyncBaseTransport | None = None) -> list[dict]:
    """Fetch and parse the guest list.

    Raises DataLoadError on any fetch/parse failure or when no rows are found.
    """
    try:
        text = await fetch_csv_text(source, transport=transport)
        rows = parse_csv(text)
    except (httpx.HTTPError, OSError, UnicodeDecodeError, csv.Error) as e:
        raise DataLoadError(f"Failed to load {source}: {e}") from e

    if not rows:
        raise DataLoadError(f"CSV empty: {source}")
    return rows
