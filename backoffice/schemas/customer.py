"""Pydantic schemas for customers."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class CustomerResponse(BaseModel):
    """Customer profile. Never includes the password hash or identity images."""

    id: str
    username: str
    email: str
    name: str | None
    date_of_birth: date
    phone_number: str | None
    address: str | None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CustomerProfileUpdate(BaseModel):
    """Fields a customer may change on their own profile."""

    name: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=20, alias="phoneNumber")
    address: str | None = Field(default=None, max_length=255)

    model_config = {"populate_by_name": True, "extra": "forbid"}
