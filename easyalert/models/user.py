"""User model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from easyalert.db.database import Base, utcnow

if TYPE_CHECKING:
    from easyalert.models.alert import Alert

EMAIL_CONSTRAINT = "uq_users_email"
TOKEN_CONSTRAINT = "uq_users_token"


class User(Base):
    """User account model."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_digest: Mapped[str] = mapped_column(String(255), nullable=False)
    token: Mapped[str] = mapped_column(String(255), nullable=False)
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    alerts: Mapped[list["Alert"]] = relationship(back_populates="user", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
        UniqueConstraint("token", name=TOKEN_CONSTRAINT),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
