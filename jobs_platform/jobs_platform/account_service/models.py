from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, Index
from datetime import datetime, timezone
from .db import Base
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


USER_TYPES = ("employer", "jobseeker")

ACCOUNT_EVENT_TYPES = ("signup", "login_success", "login_failure", "login_forbidden")


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    user_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class AccountEvent(Base):
    __tablename__ = "account_events"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    email = Column(String, nullable=False)
    event_type = Column(Enum(*ACCOUNT_EVENT_TYPES, name="account_event_type"), nullable=False)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    timestamp = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        Index('ix_account_events_user_id', 'user_id'),
        Index('ix_account_events_timestamp', 'timestamp'),
        Index('ix_account_events_event_type', 'event_type'),
    )

    def to_dict(self) -> dict:
        """
        Serialize AccountEvent to a dictionary.

        Returns:
            Dictionary with all event fields, UUIDs as strings,
            datetimes in ISO 8601 format
        """
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "email": self.email,
            "event_type": self.event_type,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
