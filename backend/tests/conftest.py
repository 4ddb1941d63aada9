from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from ems.core.auth import hash_password
from ems.core.config import Settings
from ems.core.database import Database
from ems.core.dependencies import get_current_user, get_login_throttle
from ems.main import app
from ems.models.auth import Role, UserInfo
from ems.models.entities import Department, Employee
from ems.services.login_throttle import LoginThrottle

TEST_JWT_SECRET = "test-secret-0000000000000000000000000000"
ADMIN_EMAIL = "root@ems.test"
ADMIN_PASSWORD = "root-password"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _test_settings():
    from ems.core.config import settings

    original = {
        "JWT_SECRET": settings.JWT_SECRET,
        "DATABASE_URL": settings.DATABASE_URL,
        "BCRYPT_ROUNDS": settings.BCRYPT_ROUNDS,
    }
    settings.JWT_SECRET = TEST_JWT_SECRET
    settings.DATABASE_URL = "sqlite://"
    settings.BCRYPT_ROUNDS = 4
    yield
    for key, value in original.items():
        setattr(settings, key, value)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def throttle(clock):
    return LoginThrottle(
        max_attempts=5,
        lock_seconds=15 * 60,
        exempt_emails=["admin@example.com", "admin@initech.com"],
        clock=clock,
    )


@pytest.fixture
def client(throttle):
    app.dependency_overrides[get_login_throttle] = lambda: throttle
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(throttle):
    from ems.core.config import settings
    from ems.core.database import database

    app.dependency_overrides[get_login_throttle] = lambda: throttle
    database.initialize(settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    database.close()
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    database = Database()
    database.initialize(Settings(DATABASE_URL="sqlite://"))
    yield database
    database.close()


@pytest.fixture
def session(db):
    with db.session() as s:
        yield s


def add_department(session, name: str, description: str | None = None) -> Department:
    department = Department(name=name, description=description)
    session.add(department)
    session.commit()
    return department


def add_employee(
    session,
    email: str,
    *,
    first_name: str = "Test",
    last_name: str = "User",
    role: Role = Role.EMPLOYEE,
    password: str = "password123",
    manager_id: int | None = None,
    department: Department | None = None,
    active: bool = True,
    job_title: str | None = None,
) -> Employee:
    employee = Employee(
        email=email,
        password=hash_password(password, rounds=4),
        first_name=first_name,
        last_name=last_name,
        role=role,
        manager_id=manager_id,
        department_id=department.id if department else None,
        active=active,
        job_title=job_title,
    )
    session.add(employee)
    session.commit()
    session.refresh(employee)
    return employee


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def initialize_admin(client: TestClient) -> str:
    response = client.post(
        "/api/setup/initialize",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "firstName": "Root", "lastName": "Admin"},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


def create_employee(client: TestClient, token: str, **fields) -> dict:
    payload = {
        "email": fields.pop("email"),
        "password": fields.pop("password", "password123"),
        "firstName": fields.pop("firstName", "Test"),
        "lastName": fields.pop("lastName", "User"),
        **fields,
    }
    response = client.post("/api/employees", json=payload, headers=auth_headers(token))
    assert response.status_code == 200, response.text
    return response.json()


def login(client: TestClient, email: str, password: str = "password123") -> str:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def admin_token(client):
    return initialize_admin(client)


@pytest.fixture
def mock_user_admin():
    return UserInfo(id=1, name="Admin User", email="admin@ems.test", role=Role.ADMIN)


@pytest.fixture
def mock_user_employee():
    return UserInfo(id=2, name="Employee User", email="employee@ems.test", role=Role.EMPLOYEE)


@pytest.fixture
def mock_user_guest():
    return UserInfo(id=3, name="Guest User", email="guest@demo.com", role=Role.GUEST)


@pytest.fixture
def authenticated_client(client, mock_user_admin):
    app.dependency_overrides[get_current_user] = lambda: mock_user_admin
    yield client
