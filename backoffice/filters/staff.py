"""Declarative filters for Staff queries."""

from __future__ import annotations

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter
from pydantic import field_validator

from backoffice.models.staff import Staff

ORDERING_FIELDS = frozenset({"username", "name"})


class StaffFilter(Filter):
    """FilterSet for staff list queries.

    Supported query params::

        ?username__like=ali
        ?name__like=smith
        ?order_by=-username
    """

    username__like: Optional[str] = None
    name__like: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = Staff

    @field_validator("order_by")
    @classmethod
    def restrict_order_by(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        for field_name in value or ():
            if field_name.lstrip("+-") not in ORDERING_FIELDS:
                raise ValueError(f"{field_name} is not a valid ordering field.")
        return value
