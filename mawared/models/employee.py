from sqlalchemy import Column, String
from mawared.database import Base
from mawared.models._ids import new_id
import enum

class EmployeeStatus(str, enum.Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"

class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(36), primary_key=True, default=new_id)
    store_id = Column(String(36), index=True)
    employee_number = Column(String, nullable=True)
    full_name = Column(String, nullable=True)
    department = Column(String, nullable=True)
    position = Column(String, nullable=True)
    status = Column(String, default=EmployeeStatus.ACTIVE.value)
