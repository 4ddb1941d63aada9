from __future__ import annotations

from fastapi import APIRouter, Depends

from ems.api.v1.errors import to_http_exception
from ems.core.dependencies import get_auth_service, get_current_user, get_employee_service
from ems.core.exceptions import EmsError
from ems.models.auth import LoginRequest, TokenResponse, UserInfo
from ems.models.employee import EmployeeResponse
from ems.services.auth_service import AuthService
from ems.services.employee_service import EmployeeService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    try:
        token = service.login(payload.email, payload.password)
    except EmsError as err:
        raise to_http_exception(err) from err
    return TokenResponse(token=token)


@router.get("/me", response_model=EmployeeResponse)
def current_user(
    user: UserInfo = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return service.get_employee(user, user.id)
    except EmsError as err:
        raise to_http_exception(err) from err


@router.get("/guest-access", response_model=TokenResponse)
def guest_access(service: AuthService = Depends(get_auth_service)):
    return TokenResponse(token=service.guest_access())
