"""Records service HTTP client for fetching a member's loans, goals and medicine requests"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from medfin_dashboard.config import settings
from medfin_dashboard.domain.exceptions import DataAccessError
from medfin_dashboard.domain.models import (
    AccountRecords,
    LoanAccount,
    MedicineRequest,
    SavingsGoal,
    SavingsTransaction,
)
from medfin_dashboard.utils.date_utils import parse_datetime

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _date_field(row: Row, key: str) -> Optional[datetime]:
    """Parse an optional date column; bad values are treated as absent"""
    raw = row.get(key)
    parsed = parse_datetime(raw)
    if parsed is None and raw not in (None, ""):
        logger.warning("Unparseable date treated as absent", extra={"field": key, "record_id": row.get("id")})
    return parsed


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def parse_loan(row: Row) -> LoanAccount:
    return LoanAccount(
        id=str(row["id"]),
        amount=float(row["amount"]),
        status=row["status"],
        purpose=row.get("purpose") or "",
        outstanding_balance=float(row.get("outstanding_balance") or 0),
        total_paid=float(row.get("total_paid") or 0),
        total_payable=float(row.get("total_payable") or 0),
        monthly_payment=float(row.get("monthly_payment") or 0),
        interest_rate=float(row.get("interest_rate") or 0),
        term_months=int(row.get("term_months") or 0),
        maturity_date=_date_field(row, "maturity_date"),
        created_at=_date_field(row, "created_at"),
    )


def parse_savings_goal(row: Row) -> SavingsGoal:
    return SavingsGoal(
        id=str(row["id"]),
        name=row["name"],
        target_amount=float(row.get("target_amount") or 0),
        current_amount=float(row.get("current_amount") or 0),
        priority=row.get("priority") or "medium",
        category=row.get("category") or "general",
        target_date=_date_field(row, "target_date"),
        is_completed=bool(row.get("is_completed")),
        created_at=_date_field(row, "created_at"),
        updated_at=_date_field(row, "updated_at"),
    )


def parse_savings_transaction(row: Row) -> SavingsTransaction:
    return SavingsTransaction(
        id=str(row["id"]),
        amount=float(row["amount"]),
        transaction_type=row.get("transaction_type") or "",
        description=row.get("description") or "",
        created_at=_date_field(row, "created_at"),
    )


def parse_medicine_request(row: Row) -> MedicineRequest:
    return MedicineRequest(
        id=str(row["id"]),
        generic_name=row["generic_name"],
        urgency_level=row["urgency_level"],
        status=row["status"],
        medical_condition=row.get("medical_condition") or "",
        brand_name=row.get("brand_name"),
        total_amount=_optional_float(row.get("total_amount")),
        created_at=_date_field(row, "created_at"),
    )


class RecordsClient:
    """Client for the hosted Postgres REST endpoint that owns the member's records"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.records_api_base).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.records_api_key
        self.timeout = timeout or settings.http_timeout_seconds

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def _select(
        self,
        client: httpx.AsyncClient,
        table: str,
        user_id: str,
        order: str | None = None,
    ) -> List[Row]:
        params = {"select": "*", "user_id": f"eq.{user_id}"}
        if order:
            params["order"] = order

        response = await client.get(f"{self.base_url}/rest/v1/{table}", params=params)
        response.raise_for_status()
        rows = response.json()
        if not isinstance(rows, list):
            raise DataAccessError(f"Expected a list of rows from {table}")
        return rows

    async def fetch_account_records(self, user_id: str) -> AccountRecords:
        """
        Fetch the member's records as one snapshot (four concurrent selects).

        Raises:
            DataAccessError: On timeout, HTTP errors, or malformed rows
        """
        async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
            try:
                loans, goals, transactions, medicine = await asyncio.gather(
                    self._select(client, "loans", user_id),
                    self._select(client, "savings_goals", user_id),
                    self._select(client, "savings_transactions", user_id, order="created_at.desc"),
                    self._select(client, "medicine_requests", user_id),
                )

                return AccountRecords(
                    loans=[parse_loan(row) for row in loans],
                    savings_goals=[parse_savings_goal(row) for row in goals],
                    savings_transactions=[parse_savings_transaction(row) for row in transactions],
                    medicine_requests=[parse_medicine_request(row) for row in medicine],
                )

            except httpx.TimeoutException as e:
                raise DataAccessError(f"Records service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataAccessError(f"Records service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise DataAccessError(f"Records service unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise DataAccessError(f"Invalid record data: {e}") from e
