from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self, 
        message: str, 
        status_code: int = 400, 
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

# --- Leave validation ---

class LeaveValidationError(AppException):
    """Base for every reason a leave request is refused before it is written."""
    def __init__(
        self,
        message: str,
        error_code: str = "LEAVE_VALIDATION_FAILED",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code,
            details=details
        )

class MissingFieldError(LeaveValidationError):
    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(
            message=message or f"Missing required field: {field}",
            error_code="MISSING_FIELD",
            details={"field": field}
        )

class InvalidRangeError(LeaveValidationError):
    def __init__(self, start_date, end_date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            message=f"Start date {start_date} is after end date {end_date}",
            error_code="INVALID_DATE_RANGE",
            details={"start_date": str(start_date), "end_date": str(end_date)}
        )

class InsufficientBalanceError(LeaveValidationError):
    def __init__(self, requested_days: float, available_days: float):
        self.requested_days = requested_days
        self.available_days = available_days
        super().__init__(
            message=f"Insufficient balance. Requested: {requested_days}, Available: {available_days} days",
            error_code="INSUFFICIENT_BALANCE",
            details={"requested_days": requested_days, "available_days": available_days}
        )

class OverlappingLeaveError(LeaveValidationError):
    def __init__(self, conflicting_ids=None):
        super().__init__(
            message="You have an overlapping leave request for these dates",
            error_code="OVERLAPPING_LEAVE",
            status_code=409,
            details={"conflicting_request_ids": list(conflicting_ids or [])}
        )

class RequestAlreadyReviewedError(AppException):
    def __init__(self, status: str):
        super().__init__(
            message=f"Leave request already processed (status: {status})",
            status_code=409,
            error_code="ALREADY_REVIEWED"
        )

# --- Remote services ---

class RemoteStoreError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=502,
            error_code="REMOTE_STORE_ERROR",
            details=details
        )

class DecodingError(AppException):
    """A row from the data store is missing fields or has the wrong shape."""
    def __init__(self, record_type: str, errors: Any = None):
        self.record_type = record_type
        super().__init__(
            message=f"Malformed {record_type} record received from data store",
            status_code=502,
            error_code="MALFORMED_RECORD",
            details={"errors": errors} if errors else None
        )

class AdminApiError(AppException):
    def __init__(self, message: str = "API request failed", status_code: int = 502):
        super().__init__(
            message=message,
            status_code=status_code,
            error_code="ADMIN_API_ERROR"
        )
