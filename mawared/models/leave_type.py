from sqlalchemy import Column, String, Integer, Boolean
from mawared.database import Base
from mawared.models._ids import new_id

class LeaveType(Base):
    __tablename__ = "leave_types"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, index=True) # e.g. "Annual", "Sick"
    days_per_year = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
