"""Response envelopes and shared schemas."""

from math import ceil
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class DataResponse(BaseModel, Generic[DataT]):
    """``{"status": "success", "data": ...}``"""

    status: Literal["success"] = "success"
    data: DataT


class TokenResponse(BaseModel):
    """``{"status": "success", "token": ...}``"""

    status: Literal["success"] = "success"
    token: str


class ErrorResponse(BaseModel):
    """``{"status": "error", "message": ...}``"""

    status: Literal["error"] = "error"
    message: str


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def paginate(cls, *, items: list, total: int, page: int, size: int, **kwargs):
        """Build a paginated response with automatic page count."""
        return cls(
            items=items,
            total=total,
            page=page,
            size=size,
            pages=ceil(total / size) if size > 0 else 0,
            **kwargs,
        )
