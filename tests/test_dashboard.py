import pytest
from datetime import date
from types import SimpleNamespace

from mawared.models.attendance import AttendanceRecord
from mawared.models.employee import Employee
from mawared.models.leave_request import LeaveStatus
from mawared.services.dashboard import (
    average_check_in,
    count_on_leave,
    count_pending,
    summarize_attendance,
    top_departments,
    top_employees,
)


def _att(status="present", is_late=False, check_in=None, hours=None, employee_id="emp-1"):
    return SimpleNamespace(
        employee_id=employee_id, status=status, is_late=is_late, check_in_time=check_in, hours_worked=hours
    )


def test_summarize_attendance():
    records = [_att(), _att(), _att(is_late=True)]
    summary = summarize_attendance(records, total_employees=4)
    assert summary.present == 3
    assert summary.on_time == 2
    assert summary.late == 1
    assert summary.absent == 1
    assert summary.attendance_rate == 75.0
    assert summary.on_time_percentage == 50.0
    assert summary.late_percentage == 25.0
    assert summary.absent_percentage == 25.0


def test_summarize_without_employees():
    summary = summarize_attendance([], total_employees=0)
    assert summary.attendance_rate == 0
    assert summary.absent == 0


def test_leave_counts():
    day = date(2024, 6, 12)
    requests = [
        SimpleNamespace(status=LeaveStatus.APPROVED, start_date=date(2024, 6, 10), end_date=date(2024, 6, 12)),
        SimpleNamespace(status="approved", start_date=date(2024, 6, 13), end_date=date(2024, 6, 14)),
        SimpleNamespace(status="pending", start_date=date(2024, 6, 12), end_date=date(2024, 6, 12)),
    ]
    assert count_on_leave(requests, day) == 1
    assert count_pending(requests) == 1


def test_top_departments():
    employees = [SimpleNamespace(department=d) for d in ["Sales", "Sales", "Ops", None, "IT", "Ops", "Sales"]]
    assert top_departments(employees) == ["Sales", "Ops", "IT"]
    assert top_departments(employees, limit=1) == ["Sales"]


def test_average_check_in():
    assert average_check_in(["08:30", "09:00", None, "09:31"]) == "09:00"
    assert average_check_in([]) == "09:00"


def test_average_check_in_skips_malformed_values():
    assert average_check_in(["0830", "09:00", "ab:cd"]) == "09:00"
    assert average_check_in(["late"]) == "09:00"


def test_top_employees():
    records = [
        _att(employee_id="emp-1"), _att(employee_id="emp-2"), _att(employee_id="emp-2"),
        _att(employee_id="emp-3", status="absent"), _att(employee_id="emp-3", status="absent"),
        _att(employee_id="emp-4"),
    ]
    names = {"emp-1": "Sara", "emp-2": "Omar"}
    assert top_employees(records, names, limit=2) == ["Omar", "Sara"]
    assert top_employees(records, names)[2] == "emp-4"


def test_store_summary_endpoint(client, db_session, employee, make_leave):
    day = date(2024, 6, 12)
    other = Employee(store_id="store-1", full_name="Omar", department="Ops")
    db_session.add(other)
    db_session.commit()
    db_session.add_all([
        AttendanceRecord(employee_id=employee.id, store_id="store-1", date=day,
                         status="present", is_late=False, check_in_time="08:50", hours_worked=8),
        AttendanceRecord(employee_id=employee.id, store_id="store-1", date=date(2024, 6, 3),
                         status="present", is_late=False, check_in_time="09:00", hours_worked=7.5),
    ])
    db_session.commit()
    make_leave(other.id, "annual", date(2024, 6, 11), date(2024, 6, 13), status=LeaveStatus.APPROVED.value)
    make_leave(employee.id, "annual", date(2024, 7, 1), date(2024, 7, 2))

    response = client.get("/api/dashboard/stores/store-1", params={"day": "2024-06-12"})
    assert response.status_code == 200
    data = response.json()
    assert data["attendance"]["total_employees"] == 2
    assert data["attendance"]["present"] == 1
    assert data["attendance"]["attendance_rate"] == 50.0
    assert data["on_leave_today"] == 1
    assert data["pending_leave_requests"] == 1
    assert data["total_hours_this_month"] == 15.5
    assert data["average_check_in"] == "08:50"
    assert sorted(data["top_departments"]) == ["Ops", "Sales"]
    assert data["top_employees"] == ["Sara Ali"]
    assert data["attendance"]["absent_percentage"] == 50.0
