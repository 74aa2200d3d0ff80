from sqlalchemy import Column, Integer, String, Float
from mawared.database import Base
from mawared.models._ids import new_id

class LeaveBalance(Base):
    __tablename__ = "leave_balances"

    id = Column(String(36), primary_key=True, default=new_id)
    employee_id = Column(String(36), index=True)
    leave_type_id = Column(String(36), index=True)
    year = Column(Integer)
    total_days = Column(Float, default=0.0)
    used_days = Column(Float, default=0.0)
    # Recomputed by the backend when a request is approved; read-only here
    remaining_days = Column(Float, default=0.0)
