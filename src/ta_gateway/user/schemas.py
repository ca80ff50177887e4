"""Pydantic request/response schemas for ta_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class StaffUser(BaseModel):
    """Current staff member as reported by the backend."""

    id: int
    username: str
    name: str
    role: str = "subscriber"


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_at: str | None = None  # ISO-8601, None when the token has no exp
    user: StaffUser
