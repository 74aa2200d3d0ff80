from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mawared.database import get_db
from mawared.models.attendance import AttendanceRecord
from mawared.models.employee import Employee, EmployeeStatus
from mawared.models.leave_request import LeaveRequest
from mawared.schemas.dashboard import StoreSummary
from mawared.services.dashboard import build_store_summary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stores/{store_id}", response_model=StoreSummary)
def store_summary(store_id: str, day: Optional[date] = None, db: Session = Depends(get_db)):
    day = day or date.today()
    first_of_month = day.replace(day=1)

    employees = db.query(Employee).filter(
        Employee.store_id == store_id,
        Employee.status == EmployeeStatus.ACTIVE.value
    ).all()
    todays_attendance = db.query(AttendanceRecord).filter(
        AttendanceRecord.store_id == store_id,
        AttendanceRecord.date == day
    ).all()
    monthly_attendance = db.query(AttendanceRecord).filter(
        AttendanceRecord.store_id == store_id,
        AttendanceRecord.date >= first_of_month,
        AttendanceRecord.date <= day
    ).all()
    leave_requests = db.query(LeaveRequest).filter(LeaveRequest.store_id == store_id).all()

    return build_store_summary(
        store_id=store_id,
        day=day,
        employees=employees,
        todays_attendance=todays_attendance,
        monthly_attendance=monthly_attendance,
        leave_requests=leave_requests,
    )
