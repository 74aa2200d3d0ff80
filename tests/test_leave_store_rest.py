import pytest
import requests
from datetime import date

from mawared.core.exceptions import DecodingError, RemoteStoreError
from mawared.models.leave_request import LeaveStatus
from mawared.services.leave_store import RestLeaveStore

ROW = {
    "id": "8f1c",
    "employee_id": "emp-1",
    "store_id": "store-1",
    "leave_type_id": "annual",
    "start_date": "2024-06-11",
    "end_date": "2024-06-15",
    "days_requested": 3,
    "reason": "Trip",
    "status": "pending",
    "created_at": "2024-06-01T08:00:00+00:00",
    "employees": {"id": "emp-1"},
}


def _store(session):
    return RestLeaveStore("https://example.supabase.co/", "anon-key", access_token="user-jwt", session=session)


def test_overlap_query_filters(fake_session, fake_response):
    session = fake_session(fake_response(200, [ROW]))
    records = _store(session).find_overlapping("emp-1", date(2024, 6, 10), date(2024, 6, 12))

    assert records[0].id == "8f1c"
    assert records[0].status == LeaveStatus.PENDING
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://example.supabase.co/rest/v1/leave_requests"
    params = dict(call["params"])
    assert params["employee_id"] == "eq.emp-1"
    assert params["status"] == "in.(pending,approved)"
    assert params["start_date"] == "lte.2024-06-12"
    assert params["end_date"] == "gte.2024-06-10"
    assert call["headers"]["apikey"] == "anon-key"
    assert call["headers"]["Authorization"] == "Bearer user-jwt"


def test_insert_returns_representation(fake_session, fake_response):
    session = fake_session(fake_response(201, [ROW]))
    record = _store(session).insert_request({
        "employee_id": "emp-1",
        "leave_type_id": "annual",
        "start_date": date(2024, 6, 11),
        "end_date": date(2024, 6, 15),
        "days_requested": 3,
        "reason": "Trip",
        "status": "pending",
    })

    assert record.start_date == date(2024, 6, 11)
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["headers"]["Prefer"] == "return=representation"
    assert call["json"]["start_date"] == "2024-06-11"


def test_error_response_raises(fake_session, fake_response):
    session = fake_session(fake_response(401, {"message": "JWT expired"}))
    with pytest.raises(RemoteStoreError) as exc:
        _store(session).get_balances("emp-1", 2024)
    assert exc.value.message == "JWT expired"
    assert exc.value.details["status"] == 401


def test_transport_failure_raises(fake_session):
    session = fake_session(requests.ConnectionError("boom"))
    with pytest.raises(RemoteStoreError):
        _store(session).list_requests()
    assert len(session.calls) == 1


def test_malformed_row_fails_fast(fake_session, fake_response):
    broken = {k: v for k, v in ROW.items() if k != "start_date"}
    session = fake_session(fake_response(200, [broken]))
    with pytest.raises(DecodingError) as exc:
        _store(session).list_requests(employee_id="emp-1")
    assert exc.value.error_code == "MALFORMED_RECORD"


def test_update_and_get(fake_session, fake_response):
    approved = {**ROW, "status": "approved", "reviewed_by": "hr-1"}
    session = fake_session(fake_response(200, [approved]), fake_response(200, []))
    store = _store(session)

    record = store.update_request("8f1c", {"status": "approved", "reviewed_by": "hr-1"})
    assert record.status == LeaveStatus.APPROVED
    assert session.calls[0]["method"] == "PATCH"
    assert dict(session.calls[0]["params"]) == {"id": "eq.8f1c"}

    assert store.get_request("missing") is None


def test_requires_base_url():
    with pytest.raises(ValueError):
        RestLeaveStore("", "anon-key")


def test_leave_types_filter_active(fake_session, fake_response):
    session = fake_session(fake_response(200, [{"id": "lt-1", "name": "Annual", "days_per_year": 21, "is_active": True}]))
    types = _store(session).list_leave_types()
    assert [t.name for t in types] == ["Annual"]
    assert session.calls[0]["url"] == "https://example.supabase.co/rest/v1/leave_types"
    assert ("is_active", "eq.true") in session.calls[0]["params"]
