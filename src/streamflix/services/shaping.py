"""Pure filters and sorts over fetched catalog records.

Nothing here is cached or touches the network. Filters keep input order;
sorts return a new list and leave the input untouched.
"""

from __future__ import annotations

from typing import Any, Iterable

from streamflix.shared.constants import DisplayDefaults

from .formatting import parse_date

Record = dict[str, Any]


def _record_date(record: Record) -> str:
    return record.get("release_date") or record.get("first_air_date") or ""


def filter_by_genre(records: Iterable[Record], genre_id: int) -> list[Record]:
    return [r for r in records if genre_id in (r.get("genre_ids") or ())]


def filter_by_rating(
    records: Iterable[Record],
    min_rating: float = DisplayDefaults.MIN_RATING,
) -> list[Record]:
    """Keep records whose ``vote_average`` is at least ``min_rating``."""
    return [r for r in records if (r.get("vote_average") or 0) >= min_rating]


def filter_by_year(records: Iterable[Record], year: int | str) -> list[Record]:
    """Keep records released (or first aired) in ``year``.

    Years are compared as text, so a non-numeric ``year`` matches nothing.
    """
    target = str(year).strip()
    kept = []
    for record in records:
        parsed = parse_date(_record_date(record))
        if parsed is not None and str(parsed.year) == target:
            kept.append(record)
    return kept


def sort_by_popularity(records: Iterable[Record], ascending: bool = False) -> list[Record]:
    return sorted(records, key=lambda r: r.get("popularity") or 0, reverse=not ascending)


def sort_by_rating(records: Iterable[Record], ascending: bool = False) -> list[Record]:
    return sorted(records, key=lambda r: r.get("vote_average") or 0, reverse=not ascending)


def sort_by_date(records: Iterable[Record], ascending: bool = False) -> list[Record]:
    """Most recent first by default; undated records sort as 1970-01-01."""
    epoch = parse_date(DisplayDefaults.EPOCH_DATE)

    def key(record: Record):
        return parse_date(_record_date(record)) or epoch

    return sorted(records, key=key, reverse=not ascending)


__all__ = [
    "filter_by_genre",
    "filter_by_rating",
    "filter_by_year",
    "sort_by_date",
    "sort_by_popularity",
    "sort_by_rating",
]
