from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    token: str


class CreateUserRequest(BaseModel):
    """Self-registration. Extra profile fields (photo, phone, ...) are stored too."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(min_length=1)
    name: Optional[str] = None


class UpdateRoleRequest(BaseModel):
    role: str = Field(min_length=1)


class MessageResponse(BaseModel):
    message: str
