"""Login, guest access and first-run setup."""

from __future__ import annotations

import logging
import secrets

from ems.core.auth import create_access_token, hash_password, verify_password
from ems.core.config import Settings
from ems.core.exceptions import AuthenticationError, ForbiddenError, RateLimitedError, ValidationError
from ems.models.auth import Role, SetupRequest, UserInfo
from ems.models.entities import Department, Employee
from ems.repositories.department_repository import DepartmentRepository
from ems.repositories.employee_repository import EmployeeRepository
from ems.services.login_throttle import LoginThrottle

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."
INACTIVE_MESSAGE = "Your account is inactive. Please contact your administrator."
LOCKED_MESSAGE = (
    "Your account is temporarily locked due to too many failed login attempts. Please try again later."
)

ADMIN_DEPARTMENT_NAME = "Administration"
ADMIN_DEPARTMENT_DESCRIPTION = "System Administration Department"


def to_user_info(employee: Employee) -> UserInfo:
    return UserInfo(id=employee.id, name=employee.full_name, email=employee.email, role=employee.role)


class AuthService:
    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        throttle: LoginThrottle,
        settings: Settings,
    ) -> None:
        self._employees = employees
        self._departments = departments
        self._throttle = throttle
        self._settings = settings

    def login(self, email: str, password: str) -> str:
        email = email.strip()
        if self._throttle.is_blocked(email):
            logger.warning("Blocked login attempt for locked account %s", email)
            raise RateLimitedError(LOCKED_MESSAGE)

        employee = self._employees.get_by_email(email)
        if employee is None:
            self._throttle.login_failed(email)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not employee.active:
            self._throttle.login_failed(email)
            raise ForbiddenError(INACTIVE_MESSAGE)

        if not verify_password(password, employee.password):
            self._throttle.login_failed(email)
            logger.warning("Failed login for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        self._throttle.login_succeeded(email)
        return create_access_token(employee.email, self._settings)

    def resolve_user(self, email: str) -> UserInfo:
        employee = self._employees.get_by_email(email)
        if employee is None:
            raise AuthenticationError("User not found")
        if not employee.active:
            raise ForbiddenError(INACTIVE_MESSAGE)
        return to_user_info(employee)

    def guest_access(self) -> str:
        guest_email = self._settings.GUEST_EMAIL
        guest = self._employees.get_by_email(guest_email)
        if guest is None:
            guest = self._employees.save(
                Employee(
                    email=guest_email,
                    # Never used for password login; the guest only signs in through this endpoint
                    password=hash_password(secrets.token_urlsafe(24), self._settings.BCRYPT_ROUNDS),
                    first_name="Guest",
                    last_name="User",
                    job_title="Demo User",
                    role=Role.GUEST,
                    active=True,
                )
            )
            logger.info("Guest account %s created", guest_email)
        return create_access_token(guest.email, self._settings)

    def needs_setup(self) -> bool:
        return self._employees.count() == 0

    def initialize(self, payload: SetupRequest) -> str:
        if not self.needs_setup():
            raise ValidationError("System is already initialized")
        if not payload.email.strip() or not payload.password:
            raise ValidationError("Email and password are required")
        password_hash = hash_password(payload.password, self._settings.BCRYPT_ROUNDS)

        department = self._departments.get_by_name(ADMIN_DEPARTMENT_NAME)
        if department is None:
            department = self._departments.save(
                Department(name=ADMIN_DEPARTMENT_NAME, description=ADMIN_DEPARTMENT_DESCRIPTION)
            )

        admin = self._employees.save(
            Employee(
                email=payload.email.strip(),
                password=password_hash,
                first_name=payload.first_name,
                last_name=payload.last_name,
                job_title="System Administrator",
                active=True,
                role=Role.ADMIN,
                department_id=department.id,
            )
        )
        logger.info("System initialized with administrator %s", admin.email)
        return create_access_token(admin.email, self._settings)
