"""Authentication models: roles, caller identity and login/setup payloads."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from ems.models.base import CamelModel


class Role(str, Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    GUEST = "GUEST"


class UserInfo(BaseModel):
    id: int
    name: str | None = None
    email: str
    role: Role


class LoginRequest(CamelModel):
    email: str
    password: str


class TokenResponse(CamelModel):
    token: str


class SetupRequest(CamelModel):
    email: str
    password: str
    first_name: str
    last_name: str


class SetupStatus(CamelModel):
    needs_setup: bool
