"""Declarative filter classes for API query parameter filtering."""

from .staff import StaffFilter

__all__ = ["StaffFilter"]
