from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from .formatting import status_label
from .models import (
    AssignmentItem,
    CategoryPerformanceRow,
    FollowUpItem,
    Number,
    OverdueItem,
    ScheduleEntry,
    WorkerKpis,
    WorkerViewModel,
)
from .payloads import (
    CategoryPerformance,
    FollowUpLead,
    OverdueFollowUp,
    RecentAssignment,
    UpcomingSchedule,
    WorkerDashboardPayload,
)

NOT_AVAILABLE = "N/A"


def _count(value: Optional[Number]) -> Number:
    return value if value is not None else 0


def profitable_percentage(profitable: Number, nonprofitable: Number) -> float:
    total = profitable + nonprofitable
    if total <= 0:
        return 0.0
    return profitable / total * 100


def _build_category_performance(rows: Sequence[CategoryPerformance]) -> List[CategoryPerformanceRow]:
    result: List[CategoryPerformanceRow] = []
    for row in rows:
        profitable = _count(row.profitable)
        nonprofitable = _count(row.nonprofitable)
        result.append(
            CategoryPerformanceRow(
                category_id=row.category_id,
                name=row.category_name or "",
                total_leads=_count(row.total_leads),
                profitable=profitable,
                non_profitable=nonprofitable,
                profitable_percentage=profitable_percentage(profitable, nonprofitable),
            )
        )
    return result


def _build_today_follow_ups(leads: Sequence[FollowUpLead]) -> List[FollowUpItem]:
    return [
        FollowUpItem(id=lead.id, name=lead.name or "", company=lead.company or NOT_AVAILABLE)
        for lead in leads
    ]


def _build_schedule(schedule: Optional[UpcomingSchedule], today: date) -> List[ScheduleEntry]:
    if schedule is None:
        return []
    entries: List[ScheduleEntry] = []
    if schedule.today:
        entries.append(ScheduleEntry(date=today, events=tuple(schedule.today)))
    if schedule.tomorrow:
        entries.append(ScheduleEntry(date=today + timedelta(days=1), events=tuple(schedule.tomorrow)))
    return entries


def _build_overdue(items: Sequence[OverdueFollowUp]) -> List[OverdueItem]:
    return [
        OverdueItem(
            id=item.id,
            name=item.name or "",
            company=item.position or NOT_AVAILABLE,
            due_date=item.follow_up_dates[0] if item.follow_up_dates else "",
        )
        for item in items
    ]


def _build_assignments(items: Sequence[RecentAssignment]) -> List[AssignmentItem]:
    return [
        AssignmentItem(
            id=item.id,
            name=item.name or "",
            company=item.position or NOT_AVAILABLE,
            assigned_date=item.created_at,
            status=status_label(item.status),
        )
        for item in items
    ]


def derive_worker_view_model(
    raw: WorkerDashboardPayload,
    now: Optional[datetime] = None,
) -> WorkerViewModel:
    """Project a worker payload into the worker dashboard sections; ``now`` anchors today/tomorrow."""
    today = now.date() if now else date.today()
    follow_ups_today = raw.follow_ups_today

    return WorkerViewModel(
        kpis=WorkerKpis(
            total_assigned_leads=_count(raw.total_assigned_leads),
            pending_follow_ups=_count(raw.pending_follow_ups),
            follow_ups_today=_count(follow_ups_today.count if follow_ups_today else None),
            missing_follow_ups=_count(raw.missing_follow_ups),
        ),
        category_performance=tuple(_build_category_performance(raw.performance_by_category or [])),
        today_follow_ups=tuple(_build_today_follow_ups((follow_ups_today.data if follow_ups_today else None) or [])),
        upcoming_schedule=tuple(_build_schedule(raw.upcoming_schedule, today)),
        overdue_follow_ups=tuple(_build_overdue(raw.overdue_follow_ups or [])),
        recent_assignments=tuple(_build_assignments(raw.recent_assignments or [])),
    )
