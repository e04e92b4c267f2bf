"""SQLAlchemy ORM models for state owned by the dashboard service"""

import uuid
from sqlalchemy import Column, DateTime, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class DismissedNotification(Base):
    """Notification a member has dismissed; ids are stable across regenerations"""

    __tablename__ = "dismissed_notification"
    __table_args__ = (UniqueConstraint("user_id", "notification_id", name="uq_dismissed_user_notification"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    notification_id = Column(Text, nullable=False)
    dismissed_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
