"""Pydantic schemas for login and password changes."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Username (or, for customers, email) and password."""

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class UpdatePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1, alias="currentPassword")
    new_password: str = Field(min_length=1, alias="newPassword")

    model_config = {"populate_by_name": True}


class StatusChangeRequest(BaseModel):
    """Administrative status change. ``status`` is validated by the state machine."""

    id: str = Field(min_length=1)
    status: str
