from __future__ import annotations

import logging
from collections.abc import Iterator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ems.core.auth import extract_subject, validate_token
from ems.core.config import settings
from ems.core.database import database
from ems.core.exceptions import AuthenticationError, ForbiddenError
from ems.models.auth import Role, UserInfo
from ems.repositories.department_repository import DepartmentRepository
from ems.repositories.employee_repository import EmployeeRepository
from ems.services.auth_service import AuthService
from ems.services.department_service import DepartmentService
from ems.services.employee_service import EmployeeService
from ems.services.login_throttle import LoginThrottle, login_throttle
from ems.services.report_service import ReportService

logger = logging.getLogger(__name__)


def get_session() -> Iterator[Session]:
    if not database.initialized:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not available",
        )
    with database.session() as session:
        yield session


def get_login_throttle() -> LoginThrottle:
    return login_throttle


def get_auth_service(
    session: Session = Depends(get_session),
    throttle: LoginThrottle = Depends(get_login_throttle),
) -> AuthService:
    return AuthService(EmployeeRepository(session), DepartmentRepository(session), throttle, settings)


def get_employee_service(session: Session = Depends(get_session)) -> EmployeeService:
    return EmployeeService(
        EmployeeRepository(session),
        DepartmentRepository(session),
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )


def get_department_service(session: Session = Depends(get_session)) -> DepartmentService:
    return DepartmentService(DepartmentRepository(session), EmployeeRepository(session))


def get_report_service(
    employee_service: EmployeeService = Depends(get_employee_service),
) -> ReportService:
    return ReportService(employee_service)


def get_current_user(
    authorization: str | None = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserInfo:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]

    try:
        payload = validate_token(token, settings)
        email = extract_subject(payload)
        if email is None:
            raise AuthenticationError("Token has no subject")
        return auth_service.resolve_user(email)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    except RuntimeError as e:
        logger.error("Token validation error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication is not configured",
        ) from e


def require_role(*roles: Role):
    async def _check_role(user: UserInfo = Depends(get_current_user)) -> UserInfo:
        if user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(r.value for r in roles)}",
            )
        return user

    return _check_role
