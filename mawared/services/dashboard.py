"""
Store dashboard aggregation.

Plain functions over rows that were already fetched; nothing here reads
from a database.
"""
import logging
from collections import Counter
from datetime import date
from typing import Iterable, List, Mapping, Optional, Sequence

from mawared.models.leave_request import LeaveStatus
from mawared.schemas.dashboard import AttendanceSummary, StoreSummary

logger = logging.getLogger(__name__)


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def summarize_attendance(records: Sequence, total_employees: int) -> AttendanceSummary:
    """Daily attendance counts. Absent is every active employee without a record."""
    present = len(records)
    on_time = sum(1 for r in records if r.status == "present" and not r.is_late)
    late = sum(1 for r in records if r.is_late)
    absent = max(total_employees - present, 0)
    return AttendanceSummary(
        total_employees=total_employees,
        present=present,
        on_time=on_time,
        late=late,
        absent=absent,
        attendance_rate=_percentage(present, total_employees),
        on_time_percentage=_percentage(on_time, total_employees),
        late_percentage=_percentage(late, total_employees),
        absent_percentage=_percentage(absent, total_employees),
    )


def count_on_leave(requests: Iterable, day: date) -> int:
    return sum(
        1 for r in requests
        if r.status == LeaveStatus.APPROVED and r.start_date <= day <= r.end_date
    )


def count_pending(requests: Iterable) -> int:
    return sum(1 for r in requests if r.status == LeaveStatus.PENDING)


def top_departments(employees: Iterable, limit: int = 3) -> List[str]:
    counts = Counter(e.department for e in employees if e.department)
    return [name for name, _ in counts.most_common(limit)]


def top_employees(records: Iterable, names: Optional[Mapping[str, str]] = None, limit: int = 3) -> List[str]:
    """Employees with the most present days, by name where one is known."""
    names = names or {}
    counts = Counter(r.employee_id for r in records if r.status == "present")
    return [names.get(employee_id) or employee_id for employee_id, _ in counts.most_common(limit)]


def average_check_in(times: Iterable[Optional[str]], default: str = "09:00") -> str:
    minutes = []
    for value in times:
        if not value:
            continue
        try:
            hours, mins = value.split(":")[:2]
            minutes.append(int(hours) * 60 + int(mins))
        except ValueError:
            logger.debug(f"Skipping unparseable check-in time {value!r}")
    if not minutes:
        return default
    avg = sum(minutes) // len(minutes)
    return f"{avg // 60:02d}:{avg % 60:02d}"


def total_hours(records: Iterable) -> float:
    return round(sum(r.hours_worked or 0 for r in records), 2)


def build_store_summary(
    store_id: str,
    day: date,
    employees: Sequence,
    todays_attendance: Sequence,
    monthly_attendance: Sequence,
    leave_requests: Sequence,
) -> StoreSummary:
    return StoreSummary(
        store_id=store_id,
        day=day,
        attendance=summarize_attendance(todays_attendance, len(employees)),
        on_leave_today=count_on_leave(leave_requests, day),
        pending_leave_requests=count_pending(leave_requests),
        total_hours_this_month=total_hours(monthly_attendance),
        average_check_in=average_check_in(r.check_in_time for r in todays_attendance),
        top_departments=top_departments(employees),
        top_employees=top_employees(monthly_attendance, {e.id: e.full_name for e in employees}),
    )
