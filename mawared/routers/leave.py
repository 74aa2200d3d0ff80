from fastapi import APIRouter, Depends
from typing import List, Optional

from mawared.schemas.leave import (
    ApprovalRequest,
    GateVerdict,
    LeaveApplication,
    LeaveBalanceRecord,
    LeaveRequestRecord,
    LeaveTypeRecord,
    RejectionRequest,
    WorkingDaysQuery,
    WorkingDaysResponse,
)
from mawared.services.leave_gate import LeaveBalanceGate
from mawared.services.leave_review import approve_request, reject_request
from mawared.services.leave_store import LeaveStore, get_leave_store
from mawared.services.working_days import configured_weekend, count_working_days

router = APIRouter(
    prefix="/leave",
    tags=["leave"]
)


@router.post("/working-days", response_model=WorkingDaysResponse)
def working_days(query: WorkingDaysQuery):
    weekend = configured_weekend()
    return WorkingDaysResponse(
        start_date=query.start_date,
        end_date=query.end_date,
        working_days=count_working_days(query.start_date, query.end_date, weekend),
        weekend_days=[day.name.lower() for day in sorted(weekend)],
    )


@router.post("/eligibility", response_model=GateVerdict)
def check_eligibility(application: LeaveApplication, store: LeaveStore = Depends(get_leave_store)):
    """Dry run of the submission checks; nothing is written."""
    gate = LeaveBalanceGate(store)
    balances = gate.load_balances(application.employee_id, application.start_date.year)
    existing = []
    if application.start_date <= application.end_date:
        existing = store.find_overlapping(application.employee_id, application.start_date, application.end_date)
    return gate.evaluate(application, balances, existing)


@router.post("/requests", response_model=LeaveRequestRecord)
def submit_leave_request(application: LeaveApplication, store: LeaveStore = Depends(get_leave_store)):
    return LeaveBalanceGate(store).submit(application)


@router.get("/requests", response_model=List[LeaveRequestRecord])
def list_leave_requests(
    employee_id: Optional[str] = None,
    status: Optional[str] = None,
    store: LeaveStore = Depends(get_leave_store)
):
    return store.list_requests(employee_id=employee_id, status=status)


@router.get("/balance/{employee_id}", response_model=List[LeaveBalanceRecord])
def get_leave_balance(employee_id: str, year: Optional[int] = None, store: LeaveStore = Depends(get_leave_store)):
    return store.get_balances(employee_id, year)


@router.put("/requests/{request_id}/approve", response_model=LeaveRequestRecord)
def approve(request_id: str, body: ApprovalRequest, store: LeaveStore = Depends(get_leave_store)):
    return approve_request(store, request_id, body.reviewer_id)


@router.put("/requests/{request_id}/reject", response_model=LeaveRequestRecord)
def reject(request_id: str, body: RejectionRequest, store: LeaveStore = Depends(get_leave_store)):
    return reject_request(store, request_id, body.reviewer_id, body.reason)


@router.get("/types", response_model=List[LeaveTypeRecord])
def list_leave_types(include_inactive: bool = False, store: LeaveStore = Depends(get_leave_store)):
    return store.list_leave_types(active_only=not include_inactive)
