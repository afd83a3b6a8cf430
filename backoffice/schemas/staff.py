"""Pydantic schemas for staff members."""

from datetime import datetime

from pydantic import BaseModel, Field

from backoffice.schemas.common import PaginatedResponse


class RoleResponse(BaseModel):
    description: str

    model_config = {"from_attributes": True}


class StaffResponse(BaseModel):
    id: str
    username: str
    name: str | None
    status: str
    role: RoleResponse | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StaffCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=255)
    name: str | None = Field(default=None, max_length=255)


class StaffProfileUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)

    model_config = {"extra": "forbid"}


class StaffListResponse(PaginatedResponse):
    """Paginated list of staff members."""

    items: list[StaffResponse]
