"""Data access layer for dismissed notifications"""

from typing import Set
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from medfin_dashboard.infrastructure.database.models import DismissedNotification


class DismissalRepository:
    """Repository for per-member notification dismissals"""

    def __init__(self, db: Session):
        self.db = db

    def get_dismissal(self, user_id: str, notification_id: str) -> DismissedNotification | None:
        return (
            self.db.query(DismissedNotification)
            .filter(
                DismissedNotification.user_id == user_id,
                DismissedNotification.notification_id == notification_id,
            )
            .first()
        )

    def dismiss(self, user_id: str, notification_id: str) -> DismissedNotification:
        """Record a dismissal; dismissing twice returns the existing row"""
        existing = self.get_dismissal(user_id, notification_id)
        if existing:
            return existing

        dismissal = DismissedNotification(user_id=user_id, notification_id=notification_id)
        try:
            # Savepoint keeps the outer transaction usable if the unique constraint fires
            with self.db.begin_nested():
                self.db.add(dismissal)
        except IntegrityError:
            # Another request dismissed it between the lookup and the insert
            return self.get_dismissal(user_id, notification_id)

        self.db.refresh(dismissal)  # Server-side dismissed_at
        return dismissal

    def get_dismissed_ids(self, user_id: str) -> Set[str]:
        """All notification ids the member has dismissed"""
        rows = (
            self.db.query(DismissedNotification.notification_id)
            .filter(DismissedNotification.user_id == user_id)
            .all()
        )
        return {row.notification_id for row in rows}

    def clear(self, user_id: str) -> int:
        """Forget every dismissal for a member; returns the number removed"""
        return (
            self.db.query(DismissedNotification)
            .filter(DismissedNotification.user_id == user_id)
            .delete(synchronize_session=False)
        )
