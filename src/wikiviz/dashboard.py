"""Data for the dashboard views, pure-library module (no Flask dependency).

Each function runs the view's fixed query through a :class:`QueryCache`,
normalizes the bindings and aggregates them into a pydantic response.
Both the JSON API and the CLI build on these.
"""

from __future__ import annotations

import logging

from wikiviz import aggregate
from wikiviz.cache import DEFAULT_TTL_MINUTES, QueryCache
from wikiviz.exceptions import NoLocatedDiscoveries
from wikiviz.models import DecadeCount, DiscoveriesResponse, GenderResponse
from wikiviz.normalize import normalize
from wikiviz.queries import GENDER_REPRESENTATION_QUERY, SCIENTIFIC_DISCOVERIES_QUERY

logger = logging.getLogger(__name__)

MODES = ("percentage", "count")


def gender_representation(
    cache: QueryCache,
    field: str | None = None,
    mode: str = "percentage",
    ttl_minutes: float = DEFAULT_TTL_MINUTES,
) -> GenderResponse:
    """Gender counts or shares per decade for one field or all of them.

    ``mode="percentage"`` keeps the ``*_percentage`` columns,
    ``mode="count"`` the ``*_count`` columns; ``decade`` and ``total`` are
    always present.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")

    records = normalize(cache.get_or_fetch(GENDER_REPRESENTATION_QUERY, ttl_minutes))
    df = aggregate.gender_by_decade(records, field)
    columns = ["decade", "total"] + [c for c in df.columns if c.endswith(f"_{mode}")]

    return GenderResponse(
        field=field or aggregate.ALL,
        mode=mode,
        fields=[str(f) for f in aggregate.unique_values(records, "fieldLabel")],
        rows=aggregate.frame_to_records(df[columns]),
    )


def scientific_discoveries(
    cache: QueryCache,
    start: int = aggregate.TIMELINE_START,
    end: int = aggregate.TIMELINE_END,
    field: str | None = None,
    ttl_minutes: float = DEFAULT_TTL_MINUTES,
    decade: int | None = None,
) -> DiscoveriesResponse:
    """Located discoveries in ``[start, end]`` plus the decade timeline.

    The timeline covers every year for the selected field, like the
    histogram under the map; the time range only narrows the points.
    When *decade* is given, up to ten discoveries of the selected field
    from that decade are listed under ``highlighted``, regardless of the
    time range.

    Raises:
        NoLocatedDiscoveries: If no result has coordinates
    """
    records = normalize(cache.get_or_fetch(SCIENTIFIC_DISCOVERIES_QUERY, ttl_minutes))
    located = aggregate.with_location(records)
    if not located:
        raise NoLocatedDiscoveries()
    logger.debug(f"{len(located)}/{len(records)} discoveries have coordinates")

    located = aggregate.categorize_fields(located)
    categories = [
        c for c in aggregate.unique_values(located, "fieldCategory") if c != aggregate.OTHER
    ]

    return DiscoveriesResponse(
        start=start,
        end=end,
        field=field or aggregate.ALL,
        fields=categories,
        discoveries=aggregate.filter_discoveries(located, start, end, field),
        timeline=[
            DecadeCount(decade=b["decade"], count=b["count"])
            for b in aggregate.decade_histogram(located, field)
        ],
        decade=decade,
        highlighted=(
            [] if decade is None else aggregate.discoveries_in_decade(located, decade, field)
        ),
    )
