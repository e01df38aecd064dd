"""Agenda views over service orders and reports.

Pure functions: callers load rows with ``app.db.crud`` and pass them in, so
everything here is testable without a database.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from app.models import Report, ServiceOrder, Team

STATUSES = ("Pendente", "Concluído", "Reagendado", "Adesivado", "Cancelado")
OPEN_STATUSES = ("Pendente", "Reagendado", "Adesivado")

MORNING = "Manhã"
AFTERNOON = "Tarde"


# ── Shift windows ────────────────────────────────────────

def shift_for_time(scheduled_time: str, morning_end: str = "12:00") -> str:
    """Classify an HH:MM time into the morning or afternoon shift."""
    return MORNING if scheduled_time < morning_end else AFTERNOON


def in_shift(order: ServiceOrder, shift: str, morning_end: str = "12:00") -> bool:
    if not order.scheduled_time:
        return True
    return shift_for_time(order.scheduled_time, morning_end) == shift


# ── Service order filters ────────────────────────────────

def alert_orders(orders: Iterable[ServiceOrder], on_date: str | None = None) -> list[ServiceOrder]:
    """Pending orders carrying an alert, optionally restricted to one day."""
    return [
        o for o in orders
        if o.alert and o.status == "Pendente"
        and (on_date is None or o.scheduled_date == on_date)
    ]


def reminder_orders(orders: Iterable[ServiceOrder], today: date) -> list[ServiceOrder]:
    """Calendar-created pending orders for tomorrow that still want a reminder."""
    tomorrow = (today + timedelta(days=1)).isoformat()
    return [
        o for o in orders
        if o.scheduled_date == tomorrow
        and o.reminder_enabled is not False
        and o.status == "Pendente"
        and o.created_via_calendar is True
    ]


def suggest_by_code(orders: Iterable[ServiceOrder], query: str, limit: int = 5) -> list[ServiceOrder]:
    """Codes containing the raw query; blanks only count against the 2-character minimum."""
    if len(query.strip()) < 2:
        return []
    query = query.lower()
    return [o for o in orders if query in o.code.lower()][:limit]


# ── Team summaries ───────────────────────────────────────

def status_counts(orders: Iterable[ServiceOrder]) -> dict[str, int]:
    counts = {status: 0 for status in STATUSES}
    for o in orders:
        counts[o.status] = counts.get(o.status, 0) + 1
    return counts


def team_summaries(teams: Iterable[Team], orders: Iterable[ServiceOrder]) -> list[dict]:
    by_team: dict[str, list[ServiceOrder]] = defaultdict(list)
    for o in orders:
        if o.team_id:
            by_team[o.team_id].append(o)

    summaries = []
    for team in teams:
        team_orders = by_team.get(team.id, [])
        counts = status_counts(team_orders)
        summaries.append({
            "team_id": team.id,
            "name": team.name,
            "box_number": team.box_number,
            "is_active": team.is_active,
            "total": len(team_orders),
            "counts": counts,
            "all_completed": bool(team_orders) and not any(counts[s] for s in OPEN_STATUSES),
        })
    return summaries


# ── Calendar ─────────────────────────────────────────────

def month_bounds(month: str) -> tuple[str, str]:
    """'2025-09' -> ('2025-09-01', '2025-09-30')."""
    year, mon = (int(part) for part in month.split("-"))
    first = date(year, mon, 1)
    next_first = date(year + (mon == 12), mon % 12 + 1, 1)
    return first.isoformat(), (next_first - timedelta(days=1)).isoformat()


def group_by_day(orders: Iterable[ServiceOrder]) -> dict[str, list[ServiceOrder]]:
    days: dict[str, list[ServiceOrder]] = defaultdict(list)
    for o in orders:
        if o.scheduled_date:
            days[o.scheduled_date].append(o)
    return dict(days)


# ── Reports ──────────────────────────────────────────────

def split_report_history(reports: Iterable[Report], today: date) -> tuple[list[Report], list[Report]]:
    """Split reports into (past, upcoming), newest first within each group."""
    cutoff = today.isoformat()
    past, upcoming = [], []
    for r in reports:
        (past if r.date < cutoff else upcoming).append(r)

    def newest_first(items: list[Report]) -> list[Report]:
        return sorted(items, key=lambda r: r.created_at, reverse=True)

    return newest_first(past), newest_first(upcoming)


# ── Neighborhood import ──────────────────────────────────

def parse_name_list(raw: str) -> list[str]:
    """Split a comma-separated list, trimming blanks and dropping exact duplicates."""
    names: list[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return names


def partition_new_names(names: list[str], existing: Iterable[str]) -> tuple[list[str], list[str]]:
    """Return (new, skipped); matching against existing is case-insensitive."""
    taken = {n.lower() for n in existing}
    new, skipped = [], []
    for name in names:
        (skipped if name.lower() in taken else new).append(name)
    return new, skipped
