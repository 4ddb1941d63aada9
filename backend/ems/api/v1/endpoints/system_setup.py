from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ems.api.v1.errors import to_http_exception
from ems.core.dependencies import get_auth_service
from ems.core.exceptions import EmsError
from ems.models.auth import SetupRequest, SetupStatus, TokenResponse
from ems.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/setup", tags=["setup"])


@router.get("/status", response_model=SetupStatus)
def setup_status(service: AuthService = Depends(get_auth_service)):
    return SetupStatus(needs_setup=service.needs_setup())


@router.post("/initialize", response_model=TokenResponse)
def initialize_system(
    payload: SetupRequest,
    service: AuthService = Depends(get_auth_service),
):
    try:
        token = service.initialize(payload)
    except EmsError as err:
        logger.warning("Setup rejected: %s", err)
        raise to_http_exception(err) from err
    return TokenResponse(token=token)
