# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request models for the admin endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


# -- Requests --------------------------------------------------------------


class UpdateUserRequest(BaseModel):
    # Both optional; an empty body is accepted and changes nothing
    password: Optional[str] = Field(default=None, min_length=1)
    is_admin: Optional[bool] = None
