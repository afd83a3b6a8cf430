"""Customer and identity document models."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, LargeBinary, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base import Base, TimestampMixin, UUIDMixin
from backoffice.models.enums import AccountStatus


class Customer(UUIDMixin, TimestampMixin, Base):
    """Self-registered bank customer."""

    __tablename__ = "customers"

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    verify_code: Mapped[str] = mapped_column(String(36), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountStatus.active.value
    )
    password_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    identity = relationship(
        "Identity",
        back_populates="customer",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="raise",
    )

    __table_args__ = (Index("idx_customer_status", "status"),)


class Identity(UUIDMixin, TimestampMixin, Base):
    """Identity document submitted once at registration."""

    __tablename__ = "identities"

    customer_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("customers.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    identity_number: Mapped[str] = mapped_column(String(12), nullable=False)
    registration_date: Mapped[date] = mapped_column(Date, nullable=False)
    front_image: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    back_image: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    customer = relationship("Customer", back_populates="identity")
