from datetime import datetime, timezone
from typing import Optional
import logging

from mawared.core.exceptions import MissingFieldError, NotFoundError, RequestAlreadyReviewedError
from mawared.models.leave_request import LeaveStatus
from mawared.schemas.leave import LeaveRequestRecord
from mawared.services.leave_store import LeaveStore

logger = logging.getLogger(__name__)


def _load_pending(store: LeaveStore, request_id: str) -> LeaveRequestRecord:
    leave = store.get_request(request_id)
    if leave is None:
        raise NotFoundError("Leave request not found")
    if leave.status != LeaveStatus.PENDING:
        raise RequestAlreadyReviewedError(leave.status.value)
    return leave


def _review(store: LeaveStore, request_id: str, values: dict) -> LeaveRequestRecord:
    updated = store.update_request(request_id, values)
    if updated is None:
        raise NotFoundError("Leave request not found")
    return updated


def approve_request(store: LeaveStore, request_id: str, reviewer_id: str) -> LeaveRequestRecord:
    """
    Approve a pending request. Balances are recomputed by the backend,
    so nothing else is written here.
    """
    _load_pending(store, request_id)
    updated = _review(store, request_id, {
        "status": LeaveStatus.APPROVED.value,
        "reviewed_by": reviewer_id,
        "reviewed_at": datetime.now(timezone.utc),
    })
    logger.info(f"Leave request {request_id} approved by {reviewer_id}")
    return updated


def reject_request(
    store: LeaveStore,
    request_id: str,
    reviewer_id: str,
    reason: Optional[str],
) -> LeaveRequestRecord:
    if not reason or not reason.strip():
        raise MissingFieldError("reason", "Please provide a reason for rejection")

    _load_pending(store, request_id)
    updated = _review(store, request_id, {
        "status": LeaveStatus.REJECTED.value,
        "reviewed_by": reviewer_id,
        "reviewed_at": datetime.now(timezone.utc),
        "rejection_reason": reason.strip(),
    })
    logger.info(f"Leave request {request_id} rejected by {reviewer_id}")
    return updated
