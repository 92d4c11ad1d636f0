"""Guest records built from raw CSV rows."""

from dataclasses import dataclass, field

from guestfinder.text import normalize, transliterate

NAME_FIELDS = ("name", "Name")
TABLE_FIELDS = ("table", "Table", "table_number")


class DataLoadError(Exception):
    """The guest list could not be loaded, or held no usable rows."""


@dataclass(frozen=True)
class GuestRecord:
    """One guest. Search keys are derived from `name` on construction."""

    name: str
    table: str = ""
    normalized_name: str = field(init=False)
    transliterated_name: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "normalized_name", normalize(self.name))
        object.__setattr__(self, "transliterated_name", normalize(transliterate(self.name)))


def _first_value(row: dict, keys: tuple[str, ...]) -> str:
    for key in keys:
        value = row.get(key)
        if value:
            return str(value).strip()
    return ""


def build_records(rows) -> list[GuestRecord]:
    """Convert raw rows into GuestRecords, dropping rows without a name.

    Raises DataLoadError if nothing usable remains.
    """
    if not rows:
        raise DataLoadError("Guest list is empty")

    records = []
    for row in rows:
        if not row:
            continue
        name = _first_value(row, NAME_FIELDS)
        if not name:
            continue
        records.append(GuestRecord(name=name, table=_first_value(row, TABLE_FIELDS)))

    if not records:
        raise DataLoadError(
            f"No rows with a name column ({' / '.join(NAME_FIELDS)}) in {len(rows)} row(s)"
        )
    return records
