import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["DATA_STORE_BACKEND"] = "sql"
os.environ["WEEKEND_DAYS"] = "friday,saturday"

from mawared.database import Base, get_db
from mawared.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    
    yield session
    
    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def leave_type(db_session):
    from mawared.models.leave_type import LeaveType
    lt = LeaveType(name="Annual", days_per_year=21)
    db_session.add(lt)
    db_session.commit()
    return lt

@pytest.fixture(scope="function")
def employee(db_session):
    from mawared.models.employee import Employee
    emp = Employee(store_id="store-1", employee_number="E-001", full_name="Sara Ali", department="Sales")
    db_session.add(emp)
    db_session.commit()
    return emp

@pytest.fixture(scope="function")
def balance(db_session, employee, leave_type):
    """Five remaining days of annual leave for 2024."""
    from mawared.models.leave_balance import LeaveBalance
    bal = LeaveBalance(
        employee_id=employee.id,
        leave_type_id=leave_type.id,
        year=2024,
        total_days=21,
        used_days=16,
        remaining_days=5,
    )
    db_session.add(bal)
    db_session.commit()
    return bal

@pytest.fixture(scope="function")
def make_leave(db_session):
    """Insert a leave request row directly."""
    from mawared.models.leave_request import LeaveRequest, LeaveStatus

    def _make_leave(employee_id, leave_type_id, start, end, status=LeaveStatus.PENDING.value, store_id="store-1"):
        leave = LeaveRequest(
            employee_id=employee_id,
            store_id=store_id,
            leave_type_id=leave_type_id,
            start_date=start,
            end_date=end,
            days_requested=(end - start).days + 1,
            reason="Family visit",
            status=status,
        )
        db_session.add(leave)
        db_session.commit()
        return leave
    return _make_leave

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
            
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._text is not None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses and records calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_session():
    return FakeSession

@pytest.fixture
def fake_response():
    return FakeResponse
