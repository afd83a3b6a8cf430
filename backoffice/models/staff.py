"""Staff and role models for back-office access control."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base import Base, TimestampMixin, UUIDMixin
from backoffice.models.enums import AccountStatus


class Role(UUIDMixin, TimestampMixin, Base):
    """Capability label attached to staff members."""

    __tablename__ = "roles"

    description: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)


class Staff(UUIDMixin, TimestampMixin, Base):
    """Internal staff user. Admins are staff whose role is ``admin``."""

    __tablename__ = "staffs"

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("roles.id"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountStatus.active.value
    )
    password_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    role = relationship("Role", lazy="selectin")

    __table_args__ = (Index("idx_staff_status", "status"),)
