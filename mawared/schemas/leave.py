from pydantic import BaseModel, ConfigDict, Field, ValidationError
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Type, TypeVar

from mawared.core.exceptions import DecodingError
from mawared.models.leave_request import LeaveStatus

# --- Records read from the data store ---

class LeaveRequestRecord(BaseModel):
    id: str
    employee_id: str
    store_id: Optional[str] = None
    leave_type_id: str
    start_date: date
    end_date: date
    days_requested: int
    reason: str
    status: LeaveStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")

class LeaveBalanceRecord(BaseModel):
    id: str
    employee_id: str
    leave_type_id: str
    year: int
    total_days: float
    used_days: float
    remaining_days: float

    model_config = ConfigDict(from_attributes=True, extra="ignore")

class LeaveTypeRecord(BaseModel):
    id: str
    name: str
    days_per_year: int = 0
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, extra="ignore")

RecordT = TypeVar("RecordT", bound=BaseModel)

def decode_record(model: Type[RecordT], row: Any) -> RecordT:
    """
    Validate one store row into a typed record.
    Accepts mappings (REST rows) and ORM objects alike.
    """
    try:
        if isinstance(row, Mapping):
            return model.model_validate(dict(row))
        return model.model_validate(row, from_attributes=True)
    except ValidationError as e:
        errors = [{"loc": [str(part) for part in err["loc"]], "msg": err["msg"]} for err in e.errors()]
        raise DecodingError(model.__name__, errors=errors) from e

def decode_records(model: Type[RecordT], rows: Any) -> List[RecordT]:
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise DecodingError(model.__name__, errors=[{"msg": "expected a list of rows"}])
    return [decode_record(model, row) for row in rows]

# --- Requests coming from callers ---

class LeaveApplication(BaseModel):
    """A leave request as filled in by the employee, before validation."""
    employee_id: str
    leave_type_id: Optional[str] = None
    start_date: date
    end_date: date
    reason: str = ""
    store_id: Optional[str] = None

class WorkingDaysQuery(BaseModel):
    start_date: date
    end_date: date

class WorkingDaysResponse(BaseModel):
    start_date: date
    end_date: date
    working_days: int
    weekend_days: List[str]

class RejectionRequest(BaseModel):
    reviewer_id: str
    reason: str

class ApprovalRequest(BaseModel):
    reviewer_id: str

class GateVerdict(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    code: Optional[str] = None
    requested_days: int = 0
    available_days: float = 0.0
    conflicting_request_ids: List[str] = Field(default_factory=list)

class BalanceCheck(BaseModel):
    is_valid: bool
    available_days: float
    message: Optional[str] = None
