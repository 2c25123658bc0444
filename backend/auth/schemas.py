# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    username: str
    password: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(min_length=1)


class SettingsFields(BaseModel):
    max_number_of_links: Optional[int] = None
    link_in_new_tab: Optional[bool] = None
    use_bg_image: Optional[bool] = None
    bg_image: Optional[str] = None
    columns: Optional[int] = None
    card_style: Optional[str] = None
    enable_neon_shadows: Optional[bool] = None
    card_position: Optional[str] = None


class UpdateSettingsRequest(SettingsFields):
    model_config = {"extra": "forbid"}


# -- Responses -------------------------------------------------------------


class UserRow(BaseModel):
    id: int
    username: str
    is_admin: bool

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    session_id: str
    user_id: int
    username: str
    is_admin: bool

    model_config = {"from_attributes": True}


class LogoutResponse(BaseModel):
    status: bool


class StatusResponse(BaseModel):
    status: str  # always "OK"


class AuthenticatedMe(BaseModel):
    authenticated: Literal[True] = True
    id: int
    username: str
    is_admin: bool


class AnonymousMe(BaseModel):
    authenticated: Literal[False] = False
    id: None = None
    username: None = None
    is_admin: Literal[False] = False


class MeSettingsResponse(SettingsFields):
    id: int
    username: str
    is_admin: bool
