from sqlalchemy import Column, String, Date, Float, Boolean
from mawared.database import Base
from mawared.models._ids import new_id

class AttendanceRecord(Base):
    __tablename__ = "attendance"

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String(36), index=True)
    store_id = Column(String(36), index=True)
    date = Column(Date, index=True)
    status = Column(String, default="present") # "present", "absent", "leave"
    is_late = Column(Boolean, default=False)
    check_in_time = Column(String, nullable=True) # "HH:MM" local time
    hours_worked = Column(Float, nullable=True)
