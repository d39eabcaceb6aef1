"""Analytics endpoints — dashboard totals, activity series, tag distribution."""

from __future__ import annotations

from fastapi import APIRouter, Request

from devjournal.analytics import (
    DEFAULT_ACTIVITY_DAYS,
    activity_series,
    dashboard_stats,
    journey_input,
    technology_distribution,
)
from web.dependencies import get_storage
from web.schemas import (
    ActivityDataOut,
    DashboardStatsOut,
    JourneyInputOut,
    TechnologyDistributionOut,
)

router = APIRouter(tags=["analytics"])

MAX_ACTIVITY_DAYS = 366


@router.get("/analytics/dashboard", response_model=DashboardStatsOut)
async def get_dashboard_stats(request: Request):
    storage = get_storage(request)
    return dashboard_stats(*storage.records(), now=storage.clock()).to_dict()


@router.get("/analytics/activity", response_model=list[ActivityDataOut])
async def get_activity(request: Request, days: str | None = None):
    """Per-day activity for the last ``days`` days (default 30), oldest first.

    Missing or unparseable values fall back to the default.
    """
    try:
        n = int(days) if days else DEFAULT_ACTIVITY_DAYS
    except ValueError:
        n = DEFAULT_ACTIVITY_DAYS
    if n <= 0:
        n = DEFAULT_ACTIVITY_DAYS
    n = min(n, MAX_ACTIVITY_DAYS)

    storage = get_storage(request)
    series = activity_series(*storage.records(), today=storage.clock().date(), days=n)
    return [d.to_dict() for d in series]


@router.get("/analytics/technologies", response_model=list[TechnologyDistributionOut])
async def get_technologies(request: Request):
    storage = get_storage(request)
    return [t.to_dict() for t in technology_distribution(*storage.records())]


@router.get("/analytics/journey", response_model=JourneyInputOut)
async def get_journey_input(request: Request):
    """Drawing parameters the learning-journey visualization is built from."""
    storage = get_storage(request)
    records = storage.records()
    stats = dashboard_stats(*records, now=storage.clock())
    return journey_input(stats, technology_distribution(*records)).to_dict()
