from pydantic import BaseModel
from datetime import date
from typing import List

class AttendanceSummary(BaseModel):
    total_employees: int
    present: int
    on_time: int
    late: int
    absent: int
    attendance_rate: float
    on_time_percentage: float
    late_percentage: float
    absent_percentage: float

class StoreSummary(BaseModel):
    store_id: str
    day: date
    attendance: AttendanceSummary
    on_leave_today: int
    pending_leave_requests: int
    total_hours_this_month: float
    average_check_in: str
    top_departments: List[str]
    top_employees: List[str]
