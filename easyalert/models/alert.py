"""Alert model - notification records owned by a user."""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from easyalert.db.database import Base, utcnow

if TYPE_CHECKING:
    from easyalert.models.user import User


class AlertStatus(enum.IntEnum):
    PENDING = 0
    SENT = 1
    FAILED = 2


INVALID_STATUS = "invalid status"


class Alert(Base):
    """A notification the user asked for.

    Alerts are only recorded here. Moving them to ``SENT`` or ``FAILED`` is
    the job of whatever dispatches them, through ``mark_sent``/``mark_failed``
    and ``AlertRepository.update_alert``.
    """

    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=AlertStatus.PENDING)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="alerts")

    @property
    def human_status(self) -> str:
        """Status name as shown to clients; never raises on a bad stored value."""
        try:
            return AlertStatus(self.status).name.lower()
        except ValueError:
            return INVALID_STATUS

    def mark_sent(self, at: datetime | None = None) -> None:
        self.status = AlertStatus.SENT
        self.sent_at = at or utcnow()

    def mark_failed(self) -> None:
        self.status = AlertStatus.FAILED

    def __repr__(self) -> str:
        return f"<Alert id={self.id} user_id={self.user_id} status={self.human_status}>"
