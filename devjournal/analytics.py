"""Activity Aggregator — summary statistics over the record collections.

All functions are pure: they read the journal, bug and snippet lists they are
given and compute aggregates. ``today``/``now`` are passed in so callers
(and tests) control the calendar.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Iterable

from devjournal.models import (
    ActivityData,
    Bug,
    DashboardStats,
    JournalEntry,
    JourneyInput,
    Snippet,
    TechnologyDistribution,
    WeeklyGrowth,
)

DEFAULT_ACTIVITY_DAYS = 30
TOP_TECHNOLOGIES = 10
JOURNEY_TECHNOLOGIES = 6
WEEK = timedelta(days=7)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

def compute_streak(entries: Iterable[JournalEntry], today: date) -> int:
    """Count consecutive days, walking back from ``today``, with a journal entry.

    A day without entries ends the walk, so no entry today means a streak of 0.
    """
    days = {e.created_at.date() for e in entries}
    streak = 0
    current = today
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


# ---------------------------------------------------------------------------
# Dashboard totals
# ---------------------------------------------------------------------------

def _growth(recent: int, total: int) -> int:
    """Recent items as a percentage of the older ones (older floored at 1)."""
    return _round_half_up(recent / max(total - recent, 1) * 100)


def dashboard_stats(
    journal: list[JournalEntry],
    bugs: list[Bug],
    snippets: list[Snippet],
    now: datetime,
) -> DashboardStats:
    """Totals, streak and week-over-week growth."""
    resolved = [b for b in bugs if b.is_resolved]
    last_week = now - WEEK

    weekly_entries = sum(1 for e in journal if e.created_at > last_week)
    weekly_resolved = sum(
        1 for b in resolved if b.resolved_at is not None and b.resolved_at > last_week
    )

    return DashboardStats(
        total_insights=len(journal),
        bugs_resolved=len(resolved),
        snippets=len(snippets),
        streak=compute_streak(journal, now.date()),
        weekly_growth=WeeklyGrowth(
            insights=_growth(weekly_entries, len(journal)),
            bugs=_growth(weekly_resolved, len(resolved)),
        ),
    )


# ---------------------------------------------------------------------------
# Activity time series
# ---------------------------------------------------------------------------

def _in_day(ts: datetime | None, start: datetime, end: datetime) -> bool:
    return ts is not None and start <= ts < end


def activity_series(
    journal: list[JournalEntry],
    bugs: list[Bug],
    snippets: list[Snippet],
    today: date,
    days: int = DEFAULT_ACTIVITY_DAYS,
) -> list[ActivityData]:
    """One record per calendar day for the ``days`` days ending today, oldest first."""
    series: list[ActivityData] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        start = datetime.combine(day, time.min)
        end = start + timedelta(days=1)
        series.append(ActivityData(
            date=day.isoformat(),
            journal_entries=sum(1 for e in journal if _in_day(e.created_at, start, end)),
            bugs_resolved=sum(1 for b in bugs if _in_day(b.resolved_at, start, end)),
            snippets_added=sum(1 for s in snippets if _in_day(s.created_at, start, end)),
        ))
    return series


# ---------------------------------------------------------------------------
# Tag distribution
# ---------------------------------------------------------------------------

def tag_counts(
    journal: list[JournalEntry],
    bugs: list[Bug],
    snippets: list[Snippet],
) -> dict[str, int]:
    """Tag frequencies in first-seen order: journal, then bugs, then snippets."""
    counts: dict[str, int] = {}
    for record in [*journal, *bugs, *snippets]:
        for tag in record.tags:
            counts[tag] = counts.get(tag, 0) + 1
    return counts


def technology_distribution(
    journal: list[JournalEntry],
    bugs: list[Bug],
    snippets: list[Snippet],
    limit: int = TOP_TECHNOLOGIES,
) -> list[TechnologyDistribution]:
    """Top tags by count with their share of all tag occurrences.

    Ties keep first-seen order (the sort is stable). No tags at all yields [].
    """
    counts = tag_counts(journal, bugs, snippets)
    total = sum(counts.values())
    if total == 0:
        return []

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        TechnologyDistribution(
            name=name,
            count=count,
            percentage=_round_half_up(count / total * 100),
        )
        for name, count in ranked[:limit]
    ]


# ---------------------------------------------------------------------------
# Turtle engine input
# ---------------------------------------------------------------------------

def journey_input(
    stats: DashboardStats,
    distribution: list[TechnologyDistribution],
    limit: int = JOURNEY_TECHNOLOGIES,
) -> JourneyInput:
    """Map dashboard numbers onto the learning-journey drawing parameters."""
    return JourneyInput(
        journal_entries=stats.total_insights,
        bugs_resolved=stats.bugs_resolved,
        snippets_added=stats.snippets,
        technologies=[t.name for t in distribution[:limit]],
    )


# ---------------------------------------------------------------------------
# Human-readable report
# ---------------------------------------------------------------------------

def format_activity_report(
    stats: DashboardStats,
    series: list[ActivityData],
    distribution: list[TechnologyDistribution],
) -> str:
    """Produce a multi-section text report for the CLI."""
    lines = [
        "Activity Report",
        "=" * 40,
        "",
        f"Insights:       {stats.total_insights}",
        f"Bugs resolved:  {stats.bugs_resolved}",
        f"Snippets:       {stats.snippets}",
        f"Streak:         {stats.streak} day(s)",
        f"Weekly growth:  insights {stats.weekly_growth.insights}% / "
        f"bugs {stats.weekly_growth.bugs}%",
        "",
    ]

    if series:
        lines.append(f"Last {len(series)} Days:")
        for day in series:
            lines.append(
                f"  {day.date}: {day.journal_entries} journal, "
                f"{day.bugs_resolved} resolved, {day.snippets_added} snippets"
            )
        lines.append("")

    lines.append("Technologies:")
    if distribution:
        for tech in distribution:
            lines.append(f"  {tech.name}: {tech.count} ({tech.percentage}%)")
    else:
        lines.append("  (none)")
    lines.append("")

    return "\n".join(lines)
