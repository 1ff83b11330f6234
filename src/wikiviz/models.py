"""Pydantic models for query and view responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class QueryResponse(BaseModel):
    """Result of a (possibly cached) SPARQL query."""

    query: str
    row_count: int = Field(..., ge=0, description="Number of result rows")
    records: list[dict[str, Any]] = Field(default_factory=list)
    duration_ms: int = Field(0, ge=0)


class GenderResponse(BaseModel):
    """Series for the gender representation view."""

    field: str
    mode: str
    fields: list[str]
    rows: list[dict[str, Any]]


class DecadeCount(BaseModel):
    """One bar of the discovery timeline."""

    decade: int
    count: int = Field(..., ge=0)


class DiscoveriesResponse(BaseModel):
    """Points and timeline for the scientific discoveries view."""

    start: int
    end: int
    field: str
    fields: list[str]
    discoveries: list[dict[str, Any]]
    timeline: list[DecadeCount]
    decade: int | None = None
    highlighted: list[dict[str, Any]] = Field(default_factory=list)
