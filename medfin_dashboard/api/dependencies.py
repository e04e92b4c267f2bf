"""Dependency injection for FastAPI endpoints"""

import logging
from datetime import datetime, timezone

from fastapi import Depends, HTTPException, Query, Request

from medfin_dashboard.domain.exceptions import DataAccessError
from medfin_dashboard.domain.models import AccountRecords
from medfin_dashboard.infrastructure.clients.records import RecordsClient
from medfin_dashboard.infrastructure.observability.metrics import records_fetch_failures_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_records_client() -> RecordsClient:
    """Provide records service client instance"""
    return RecordsClient()


def get_now() -> datetime:
    """Clock for every time-windowed computation; tests override it"""
    return datetime.now(timezone.utc)


async def get_account_records(
    request: Request,
    user_id: str = Query(..., min_length=1, description="Member identifier"),
    records_client: RecordsClient = Depends(get_records_client),
) -> AccountRecords:
    """Fetch the member's records once per request, mapping outages to 503"""
    try:
        return await records_client.fetch_account_records(user_id)
    except DataAccessError as e:
        records_fetch_failures_counter.inc()
        logging.error(f"Records service error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Records service unavailable")
