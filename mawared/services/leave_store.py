"""
Leave Data Store

The leave gate and the review flow never talk to a database directly; they
go through a LeaveStore. Two backends exist:

- SqlLeaveStore: the local SQLAlchemy database (development, tests).
- RestLeaveStore: the hosted backend's auto-generated REST endpoints.

Every row leaving a store is decoded into a typed record, so malformed
data fails here instead of further up.
"""
import abc
import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests
from fastapi import Depends
from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mawared.core.config import settings
from mawared.core.exceptions import RemoteStoreError
from mawared.database import get_db
from mawared.models.leave_balance import LeaveBalance
from mawared.models.leave_request import BLOCKING_STATUSES, LeaveRequest
from mawared.models.leave_type import LeaveType
from mawared.schemas.leave import (
    LeaveBalanceRecord,
    LeaveRequestRecord,
    LeaveTypeRecord,
    decode_record,
    decode_records,
)

logger = logging.getLogger(__name__)


class LeaveStore(abc.ABC):
    @abc.abstractmethod
    def find_overlapping(self, employee_id: str, start_date: date, end_date: date) -> List[LeaveRequestRecord]:
        """Pending or approved requests of the employee sharing a day with the range."""

    @abc.abstractmethod
    def insert_request(self, values: Dict[str, Any]) -> LeaveRequestRecord:
        ...

    @abc.abstractmethod
    def get_balances(self, employee_id: str, year: Optional[int] = None) -> List[LeaveBalanceRecord]:
        ...

    @abc.abstractmethod
    def list_requests(self, employee_id: Optional[str] = None, status: Optional[str] = None) -> List[LeaveRequestRecord]:
        ...

    @abc.abstractmethod
    def get_request(self, request_id: str) -> Optional[LeaveRequestRecord]:
        ...

    @abc.abstractmethod
    def update_request(self, request_id: str, values: Dict[str, Any]) -> Optional[LeaveRequestRecord]:
        ...

    @abc.abstractmethod
    def list_leave_types(self, active_only: bool = True) -> List[LeaveTypeRecord]:
        ...


class SqlLeaveStore(LeaveStore):
    def __init__(self, db: Session):
        self.db = db

    def _read(self, what: str, load):
        try:
            return load()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Reading {what} failed: {e}", exc_info=True)
            raise RemoteStoreError(f"Failed to read {what}") from e

    def _commit(self, what: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Leave request {what} failed: {e}", exc_info=True)
            raise RemoteStoreError(f"Failed to {what} leave request") from e

    def find_overlapping(self, employee_id, start_date, end_date):
        rows = self._read("leave requests", lambda: self.db.query(LeaveRequest).filter(
            LeaveRequest.employee_id == employee_id,
            LeaveRequest.status.in_(BLOCKING_STATUSES),
            and_(LeaveRequest.start_date <= end_date, LeaveRequest.end_date >= start_date)
        ).all())
        return [decode_record(LeaveRequestRecord, row) for row in rows]

    def insert_request(self, values):
        leave = LeaveRequest(**values)
        self.db.add(leave)
        self._commit("submit")
        self.db.refresh(leave)
        return decode_record(LeaveRequestRecord, leave)

    def get_balances(self, employee_id, year=None):
        query = self.db.query(LeaveBalance).filter(LeaveBalance.employee_id == employee_id)
        if year is not None:
            query = query.filter(LeaveBalance.year == year)
        rows = self._read("leave balances", query.all)
        return [decode_record(LeaveBalanceRecord, row) for row in rows]

    def list_requests(self, employee_id=None, status=None):
        query = self.db.query(LeaveRequest)
        if employee_id:
            query = query.filter(LeaveRequest.employee_id == employee_id)
        if status:
            query = query.filter(LeaveRequest.status == status)
        rows = self._read("leave requests", query.order_by(LeaveRequest.created_at.desc()).all)
        return [decode_record(LeaveRequestRecord, row) for row in rows]

    def get_request(self, request_id):
        row = self._read("leave request", lambda: self.db.get(LeaveRequest, request_id))
        return decode_record(LeaveRequestRecord, row) if row else None

    def update_request(self, request_id, values):
        row = self._read("leave request", lambda: self.db.get(LeaveRequest, request_id))
        if row is None:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        self._commit("update")
        self.db.refresh(row)
        return decode_record(LeaveRequestRecord, row)

    def list_leave_types(self, active_only=True):
        query = self.db.query(LeaveType)
        if active_only:
            query = query.filter(LeaveType.is_active.is_(True))
        rows = self._read("leave types", query.order_by(LeaveType.name).all)
        return [decode_record(LeaveTypeRecord, row) for row in rows]


class RestLeaveStore(LeaveStore):
    """
    Client for the hosted backend's REST endpoints (PostgREST dialect).

    Filters use the ``column=op.value`` query syntax; writes ask for the
    written rows back with ``Prefer: return=representation``. There is no
    retry: a failed call surfaces as RemoteStoreError.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("BAAS_URL is not configured. Set it in the environment.")
        self.base_url = base_url.rstrip("/") + settings.baas.rest_path
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.access_token or self.api_key or ''}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _call(self, method: str, table: str, params=None, json=None, prefer: Optional[str] = None):
        url = f"{self.base_url}/{table}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Data store call failed: {method} {table}: {e}")
            raise RemoteStoreError(f"Data store unreachable while accessing {table}") from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(
                f"Data store returned {response.status_code} for {method} {table}",
                extra={"store_message": message}
            )
            raise RemoteStoreError(
                message or f"Data store request failed ({response.status_code})",
                details={"status": response.status_code, "table": table},
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteStoreError(f"Data store returned a non-JSON body for {table}") from e

    def find_overlapping(self, employee_id, start_date, end_date):
        params = [
            ("select", "*"),
            ("employee_id", f"eq.{employee_id}"),
            ("status", f"in.({','.join(BLOCKING_STATUSES)})"),
            ("start_date", f"lte.{end_date.isoformat()}"),
            ("end_date", f"gte.{start_date.isoformat()}"),
        ]
        return decode_records(LeaveRequestRecord, self._call("GET", "leave_requests", params=params))

    def insert_request(self, values):
        payload = {k: (v.isoformat() if isinstance(v, date) else v) for k, v in values.items()}
        rows = self._call("POST", "leave_requests", json=payload, prefer="return=representation")
        records = decode_records(LeaveRequestRecord, rows)
        if not records:
            raise RemoteStoreError("Data store did not return the inserted leave request")
        return records[0]

    def get_balances(self, employee_id, year=None):
        params = [("select", "*"), ("employee_id", f"eq.{employee_id}")]
        if year is not None:
            params.append(("year", f"eq.{year}"))
        return decode_records(LeaveBalanceRecord, self._call("GET", "leave_balances", params=params))

    def list_requests(self, employee_id=None, status=None):
        params = [("select", "*"), ("order", "created_at.desc")]
        if employee_id:
            params.append(("employee_id", f"eq.{employee_id}"))
        if status:
            params.append(("status", f"eq.{status}"))
        return decode_records(LeaveRequestRecord, self._call("GET", "leave_requests", params=params))

    def get_request(self, request_id):
        params = [("select", "*"), ("id", f"eq.{request_id}")]
        records = decode_records(LeaveRequestRecord, self._call("GET", "leave_requests", params=params))
        return records[0] if records else None

    def update_request(self, request_id, values):
        payload = {k: (v.isoformat() if isinstance(v, date) else v) for k, v in values.items()}
        rows = self._call(
            "PATCH",
            "leave_requests",
            params=[("id", f"eq.{request_id}")],
            json=payload,
            prefer="return=representation",
        )
        records = decode_records(LeaveRequestRecord, rows)
        return records[0] if records else None

    def list_leave_types(self, active_only=True):
        params = [("select", "*"), ("order", "name.asc")]
        if active_only:
            params.append(("is_active", "eq.true"))
        return decode_records(LeaveTypeRecord, self._call("GET", "leave_types", params=params))


def get_leave_store(db: Session = Depends(get_db)) -> LeaveStore:
    """FastAPI dependency selecting the configured backend."""
    if settings.data_store_backend == "rest":
        return RestLeaveStore(
            base_url=settings.baas.url,
            api_key=settings.baas.anon_key,
            access_token=settings.baas.access_token,
            timeout=settings.http_timeout_seconds,
        )
    return SqlLeaveStore(db)
