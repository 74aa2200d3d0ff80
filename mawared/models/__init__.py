# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import employee, attendance, leave_type, leave_balance, leave_request

# Explicit class exports for cleaner imports
from .employee import Employee, EmployeeStatus
from .attendance import AttendanceRecord
from .leave_type import LeaveType
from .leave_balance import LeaveBalance
from .leave_request import LeaveRequest, LeaveStatus

__all__ = [
    "Employee",
    "EmployeeStatus",
    "AttendanceRecord",
    "LeaveType",
    "LeaveBalance",
    "LeaveRequest",
    "LeaveStatus",
]
