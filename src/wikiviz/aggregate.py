"""
Aggregations behind the dashboard views.

Operates on normalized records (see :mod:`wikiviz.normalize`) and produces
the series the charts are drawn from:

* gender representation counts and percentages per decade
* discovery field categories, time/field filtering and a decade histogram
"""

from __future__ import annotations

import json
import math
from typing import Any, Iterable

import pandas as pd

Record = dict[str, Any]

ALL = "all"
OTHER = "other"

# Wikidata ids of the fields of study shown on the discovery map
FIELD_CATEGORIES: dict[str, str] = {
    "Q413": "physics",
    "Q2329": "chemistry",
    "Q420": "biology",
    "Q11190": "medicine",
    "Q21198": "computer science",
}

TIMELINE_START = 1800
TIMELINE_END = 2023


def _is_all(field: str | None) -> bool:
    return field is None or field == ALL


def frame_to_records(df: pd.DataFrame) -> list[Record]:
    """Convert a DataFrame to JSON-ready records (numpy scalars become Python)."""
    return json.loads(df.to_json(orient="records"))


def unique_values(records: Iterable[Record], key: str) -> list[Any]:
    """Distinct values of *key* in first-seen order, skipping missing ones."""
    seen: dict[Any, None] = {}
    for record in records:
        value = record.get(key)
        if value is not None:
            seen.setdefault(value, None)
    return list(seen)


# ── Gender representation ─────────────────────────────────────────


def gender_by_decade(records: Iterable[Record], field: str | None = None) -> pd.DataFrame:
    """
    Count people per decade and gender, with each gender's share.

    Counts for the same decade and gender are summed across fields, so
    ``field=None`` (or ``"all"``) combines every field.

    Args:
        records: Normalized rows of the gender representation query
        field: ``fieldLabel`` to keep, or None/"all" for every field

    Returns:
        DataFrame sorted by decade with a ``decade`` column,
        ``<gender>_count`` columns, ``total`` and ``<gender>_percentage``
        columns (0-100). Empty input gives an empty frame.
    """
    empty = pd.DataFrame(columns=["decade", "total"])
    df = pd.DataFrame.from_records(list(records))
    if df.empty or not {"decade", "genderLabel", "count"}.issubset(df.columns):
        return empty

    if not _is_all(field):
        if "fieldLabel" not in df.columns:
            return empty
        df = df[df["fieldLabel"] == field]

    df = df.assign(
        decade=pd.to_numeric(df["decade"], errors="coerce"),
        count=pd.to_numeric(df["count"], errors="coerce").fillna(0),
    ).dropna(subset=["decade", "genderLabel"])
    if df.empty:
        return empty

    counts = df.pivot_table(
        index="decade",
        columns="genderLabel",
        values="count",
        aggfunc="sum",
        fill_value=0,
    ).astype(int)
    labels = [str(label) for label in counts.columns]
    counts.columns = [f"{label}_count" for label in labels]

    total = counts.sum(axis=1)
    result = counts.copy()
    result["total"] = total
    for label in labels:
        share = counts[f"{label}_count"] / total.where(total > 0)
        result[f"{label}_percentage"] = (share * 100).fillna(0.0)

    result.index = result.index.astype(int)
    return result.sort_index().reset_index()


# ── Scientific discoveries ────────────────────────────────────────


def field_category(field_uri: str | None) -> str:
    """Map a field entity URI to its display category."""
    if not field_uri:
        return OTHER
    field_id = str(field_uri).rstrip("/").split("/")[-1]
    return FIELD_CATEGORIES.get(field_id, OTHER)


def categorize_fields(records: Iterable[Record]) -> list[Record]:
    """Copy *records*, adding a ``fieldCategory`` to each."""
    return [
        {**record, "fieldCategory": field_category(record.get("field"))}
        for record in records
    ]


def with_location(records: Iterable[Record]) -> list[Record]:
    """Keep records that have both a latitude and a longitude."""
    return [r for r in records if r.get("lat") and r.get("lon")]


def _matches_field(record: Record, field: str | None) -> bool:
    return _is_all(field) or record.get("fieldCategory") == field


def filter_discoveries(
    records: Iterable[Record],
    start: int = TIMELINE_START,
    end: int = TIMELINE_END,
    field: str | None = None,
) -> list[Record]:
    """Discoveries with ``start <= year <= end`` in the given field category."""
    return [
        r for r in records
        if r.get("year") is not None
        and start <= r["year"] <= end
        and _matches_field(r, field)
    ]


def decade_of(year: float) -> int:
    return int(math.floor(year / 10) * 10)


def decade_histogram(records: Iterable[Record], field: str | None = None) -> list[Record]:
    """
    Bucket discoveries by decade.

    Returns:
        ``{"decade", "count", "discoveries"}`` dicts sorted by decade
    """
    buckets: dict[int, Record] = {}
    for record in records:
        if record.get("year") is None or not _matches_field(record, field):
            continue
        decade = decade_of(record["year"])
        bucket = buckets.setdefault(decade, {"decade": decade, "count": 0, "discoveries": []})
        bucket["count"] += 1
        bucket["discoveries"].append(record)
    return [buckets[d] for d in sorted(buckets)]


def discoveries_in_decade(
    records: Iterable[Record],
    decade: int,
    field: str | None = None,
    limit: int | None = 10,
) -> list[Record]:
    """Discoveries from one decade, at most *limit* of them."""
    matches = [
        r for r in records
        if r.get("year") is not None
        and decade_of(r["year"]) == decade
        and _matches_field(r, field)
    ]
    return matches if limit is None else matches[:limit]
