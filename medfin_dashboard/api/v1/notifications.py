"""/v1/notifications - generated alerts and member dismissals"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from medfin_dashboard.api.dependencies import get_account_records, get_now, get_request_id
from medfin_dashboard.api.v1.schemas import (
    ClearDismissalsResponse,
    DismissRequest,
    DismissResponse,
    NotificationSchema,
    NotificationsResponse,
)
from medfin_dashboard.config import settings
from medfin_dashboard.domain.models import AccountRecords
from medfin_dashboard.domain.notifications import generate_notifications
from medfin_dashboard.domain.snapshot import build_financial_snapshot
from medfin_dashboard.infrastructure.database.repositories import DismissalRepository
from medfin_dashboard.infrastructure.database.session import get_db
from medfin_dashboard.infrastructure.observability.logging import log_dashboard_computed
from medfin_dashboard.infrastructure.observability.metrics import dashboard_request_counter, record_notifications

router = APIRouter()


@router.get("/notifications", response_model=NotificationsResponse)
def list_notifications(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records: AccountRecords = Depends(get_account_records),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    """
    Regenerate notifications from the current records.

    Returns:
        Up to `notification_limit` notifications, highest priority first,
        excluding any the member has dismissed
    """
    start_time = time.time()

    snapshot = build_financial_snapshot(records)
    dismissed = DismissalRepository(db).get_dismissed_ids(user_id)
    notifications = generate_notifications(
        records.loans,
        records.savings_goals,
        snapshot.wallet_balance,
        records.medicine_requests,
        now,
        dismissed_ids=dismissed,
        limit=settings.notification_limit,
    )

    dashboard_request_counter.labels(widget="notifications").inc()
    record_notifications(notifications)
    log_dashboard_computed(
        get_request_id(request),
        user_id,
        "notifications",
        (time.time() - start_time) * 1000,
        notification_count=len(notifications),
        dismissed_count=len(dismissed),
    )

    return NotificationsResponse(
        user_id=user_id,
        notifications=[NotificationSchema.model_validate(n) for n in notifications],
    )


@router.post("/notifications/{notification_id}/dismiss", response_model=DismissResponse)
def dismiss_notification(
    notification_id: str,
    request_body: DismissRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Hide a notification for the member; repeating the call is a no-op"""
    request_id = get_request_id(request)

    try:
        dismissal = DismissalRepository(db).dismiss(request_body.user_id, notification_id)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        "Notification dismissed",
        extra={"request_id": request_id, "user_id": request_body.user_id, "notification_id": notification_id},
    )

    return DismissResponse.model_validate(dismissal)


@router.delete("/notifications/dismissed", response_model=ClearDismissalsResponse)
def clear_dismissals(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    db: Session = Depends(get_db),
):
    """Bring every dismissed notification back for the member"""
    request_id = get_request_id(request)

    try:
        cleared = DismissalRepository(db).clear(user_id)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return ClearDismissalsResponse(user_id=user_id, cleared=cleared)
