"""
Leave Balance Gate

Decides whether a new leave request may be submitted and, when it may,
writes it to the data store as ``pending``.

The decision itself (``evaluate``) is pure. ``submit`` wraps it with the
two data store calls: one read for overlapping requests and one insert.
They are not one transaction, so two concurrent submissions for the same
employee can both pass the overlap check before either insert lands.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from mawared.core.exceptions import (
    InsufficientBalanceError,
    InvalidRangeError,
    LeaveValidationError,
    MissingFieldError,
    OverlappingLeaveError,
    RemoteStoreError,
)
from mawared.models.leave_request import BLOCKING_STATUSES, LeaveStatus
from mawared.schemas.leave import (
    BalanceCheck,
    GateVerdict,
    LeaveApplication,
    LeaveBalanceRecord,
    LeaveRequestRecord,
)
from mawared.services.leave_store import LeaveStore
from mawared.services.working_days import Weekday, count_working_days

logger = logging.getLogger(__name__)


def check_balance(
    leave_type_id: str,
    days_requested: float,
    balances: Iterable[LeaveBalanceRecord],
) -> BalanceCheck:
    balance = next((b for b in balances if b.leave_type_id == leave_type_id), None)

    if balance is None:
        return BalanceCheck(is_valid=False, available_days=0, message="Leave balance not found")

    if days_requested > balance.remaining_days:
        return BalanceCheck(
            is_valid=False,
            available_days=balance.remaining_days,
            message=f"Insufficient balance. Available: {balance.remaining_days} days",
        )

    return BalanceCheck(is_valid=True, available_days=balance.remaining_days)


def ranges_overlap(a_start, a_end, b_start, b_end) -> bool:
    return a_start <= b_end and a_end >= b_start


def find_overlaps(
    application: LeaveApplication,
    existing: Iterable[LeaveRequestRecord],
) -> List[LeaveRequestRecord]:
    return [
        req for req in existing
        if req.employee_id == application.employee_id
        and req.status.value in BLOCKING_STATUSES
        and ranges_overlap(req.start_date, req.end_date, application.start_date, application.end_date)
    ]


def _rejected(error: LeaveValidationError, requested_days: int = 0, available_days: float = 0.0, conflicts=None) -> GateVerdict:
    return GateVerdict(
        accepted=False,
        reason=error.message,
        code=error.error_code,
        requested_days=requested_days,
        available_days=available_days,
        conflicting_request_ids=[req.id for req in conflicts or []],
    )


class LeaveBalanceGate:
    def __init__(self, store: LeaveStore, weekend_days: Optional[Iterable[Weekday]] = None):
        self.store = store
        self.weekend_days = None if weekend_days is None else frozenset(weekend_days)

    def requested_days(self, application: LeaveApplication) -> int:
        return count_working_days(application.start_date, application.end_date, self.weekend_days)

    def _validate_fields(self, application: LeaveApplication) -> None:
        if not application.leave_type_id:
            raise MissingFieldError("leave_type_id", "Please select a leave type")
        if not application.reason or not application.reason.strip():
            raise MissingFieldError("reason", "Please provide a reason for the leave")

    def _validate_balance(self, application: LeaveApplication, balances: Sequence[LeaveBalanceRecord]) -> BalanceCheck:
        requested = self.requested_days(application)
        check = check_balance(application.leave_type_id, requested, balances)
        if requested > check.available_days:
            raise InsufficientBalanceError(requested, check.available_days)
        return check

    def evaluate(
        self,
        application: LeaveApplication,
        balances: Sequence[LeaveBalanceRecord],
        existing: Iterable[LeaveRequestRecord] = (),
    ) -> GateVerdict:
        """Decide without touching the data store."""
        try:
            self._validate_fields(application)
            requested = self.requested_days(application)
        except (MissingFieldError, InvalidRangeError) as e:
            return _rejected(e)

        try:
            check = self._validate_balance(application, balances)
        except InsufficientBalanceError as e:
            return _rejected(e, requested, e.available_days)

        conflicts = find_overlaps(application, existing)
        if conflicts:
            return _rejected(
                OverlappingLeaveError(req.id for req in conflicts),
                requested,
                check.available_days,
                conflicts,
            )

        return GateVerdict(
            accepted=True,
            reason="Balance and overlap checks passed.",
            requested_days=requested,
            available_days=check.available_days,
        )

    def load_balances(self, employee_id: str, year: int) -> List[LeaveBalanceRecord]:
        """Read balances; a failed read counts as no balance at all."""
        try:
            return self.store.get_balances(employee_id, year)
        except RemoteStoreError as e:
            logger.warning(
                f"Leave balance read failed for employee {employee_id}, treating as zero available days: {e.message}"
            )
            return []

    def submit(
        self,
        application: LeaveApplication,
        balances: Optional[Sequence[LeaveBalanceRecord]] = None,
    ) -> LeaveRequestRecord:
        """
        Validate and persist a new pending leave request.

        Raises:
            LeaveValidationError: the request is refused (nothing is written).
            RemoteStoreError: the data store failed.
        """
        self._validate_fields(application)
        requested = self.requested_days(application)

        if balances is None:
            balances = self.load_balances(application.employee_id, application.start_date.year)
        self._validate_balance(application, balances)

        existing = self.store.find_overlapping(
            application.employee_id, application.start_date, application.end_date
        )
        conflicts = find_overlaps(application, existing)
        if conflicts:
            logger.info(
                f"Leave request for employee {application.employee_id} overlaps {len(conflicts)} existing request(s)"
            )
            raise OverlappingLeaveError(req.id for req in conflicts)

        values = {
            "employee_id": application.employee_id,
            "leave_type_id": application.leave_type_id,
            "start_date": application.start_date,
            "end_date": application.end_date,
            "days_requested": requested,
            "reason": application.reason.strip(),
            "status": LeaveStatus.PENDING.value,
        }
        if application.store_id:
            values["store_id"] = application.store_id
        record = self.store.insert_request(values)
        logger.info(
            f"Leave request {record.id} submitted for employee {record.employee_id} ({requested} working days)"
        )
        return record
