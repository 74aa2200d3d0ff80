from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.sql import func
from mawared.database import Base
from mawared.models._ids import new_id
import enum

class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

# Statuses that occupy the calendar for overlap checks
BLOCKING_STATUSES = (LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value)

class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String(36), index=True)
    store_id = Column(String(36), index=True, nullable=True)
    leave_type_id = Column(String(36), index=True)
    start_date = Column(Date)
    end_date = Column(Date)
    days_requested = Column(Integer)
    reason = Column(String)
    status = Column(String, default=LeaveStatus.PENDING.value) # Using String to store enum value for simplicity with SQLite
    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
