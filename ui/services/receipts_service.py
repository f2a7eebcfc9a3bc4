"""Receipt listing, viewing, soft delete/restore and dashboard stats."""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from pydantic import ValidationError

from core.logger import get_logger
from core.utils import to_num
from gateway import ApiError, AuthSession, NotAuthenticatedError, unwrap_items
from models.receipt import ReceiptRecord

log = get_logger("ui/services/receipts_service")

DEFAULT_PAGE_SIZE = 20
DEFAULT_SORT = "created_at:desc"


def month_start(today: Optional[date] = None) -> date:
    today = today or date.today()
    return today.replace(day=1)


@dataclass
class ReceiptFilters:
    date_from: date = field(default_factory=month_start)
    date_to: date = field(default_factory=date.today)
    category: str = ""
    issuer: str = ""
    emp_code: str = ""
    page: int = 1
    size: int = DEFAULT_PAGE_SIZE
    sort: str = DEFAULT_SORT

    def to_query(self) -> Dict[str, Any]:
        return {
            "from": self.date_from.isoformat() if self.date_from else None,
            "to": self.date_to.isoformat() if self.date_to else None,
            "category": self.category or None,
            "issuer": self.issuer.strip() or None,
            "emp_code": self.emp_code.strip() or None,
            "page": self.page,
            "size": self.size,
            "sort": self.sort,
        }


@dataclass(frozen=True)
class ReceiptPage:
    items: List[Dict[str, Any]]
    total: int
    has_more: bool


def _require_token(auth: AuthSession) -> str:
    if not auth.is_authenticated:
        raise NotAuthenticatedError()
    return auth.token


class ReceiptsService:
    """Backend calls behind the Transactions page."""

    @staticmethod
    def load(auth: AuthSession, filters: ReceiptFilters) -> ReceiptPage:
        """
        Fetch one page of receipts.

        Employees only ever see their own receipts. Admins see everything,
        or one employee's receipts when filtering by code.
        """
        token = _require_token(auth)
        user = auth.current_user()
        query = filters.to_query()

        if auth.is_admin and filters.emp_code.strip():
            result = auth.api.get_receipts_by_emp_code(token, filters.emp_code.strip(), query)
        elif not auth.is_admin and user is not None and user.emp_code:
            query["emp_code"] = None
            result = auth.api.get_receipts_by_emp_code(token, user.emp_code, query)
        else:
            result = auth.api.list_receipts(token, query)

        items, total = unwrap_items(result)
        has_more = len(items) == filters.size
        if isinstance(result, dict) and "hasMore" in result:
            has_more = bool(result["hasMore"])
        log.info(f"Loaded {len(items)} receipt(s), total={total}, page={filters.page}")
        return ReceiptPage(items=items, total=total, has_more=has_more)

    @staticmethod
    def delete(auth: AuthSession, receipt_id: str, reason: str = "deleted by user") -> None:
        token = _require_token(auth)
        auth.api.delete_receipt(token, receipt_id, reason.strip() or "deleted by user")
        log.info(f"Receipt {receipt_id} deleted: reason={reason!r}")

    @staticmethod
    def restore(auth: AuthSession, receipt_id: str) -> None:
        token = _require_token(auth)
        auth.api.restore_receipt(token, receipt_id)
        log.info(f"Receipt {receipt_id} restored")

    @staticmethod
    def fetch(auth: AuthSession, receipt_id: str) -> ReceiptRecord:
        """
        Load one stored receipt for viewing or reprinting.

        Raises:
            ApiError: On 403/404 or transport failure (see ``view_error_message``)
        """
        token = _require_token(auth)
        record = record_from_server(auth.api.get_receipt(token, receipt_id))
        log.info(f"Receipt {receipt_id} loaded for viewing: {record.receiptNo}")
        return record

    @staticmethod
    def is_deleted(receipt: Dict[str, Any]) -> bool:
        return bool(receipt.get("deleted_at"))


class StatsService:
    """Aggregate figures for the dashboard."""

    @staticmethod
    def load(auth: AuthSession, date_from: date, date_to: date) -> Tuple[Dict[str, Any], List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Returns:
            (summary, by_category, by_day)

        Raises:
            ApiError: If any of the three stats calls fails
        """
        token = _require_token(auth)
        query: Dict[str, Any] = {"from": date_from.isoformat(), "to": date_to.isoformat()}
        user = auth.current_user()
        if not auth.is_admin and user is not None and user.emp_code:
            query["emp_code"] = user.emp_code

        summary = auth.api.stats_summary(token, query)
        by_category, _ = unwrap_items(auth.api.stats_by_category(token, query))
        by_day, _ = unwrap_items(auth.api.stats_by_day(token, query))
        if not isinstance(summary, dict):
            raise ApiError("Unexpected summary response", payload=summary)
        return summary, by_category, by_day


def _first(receipt: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = receipt.get(key)
        if value not in (None, ""):
            return value
    return ""


def receipt_row(receipt: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a server receipt into a table row; the server mixes snake_case and camelCase."""
    return {
        "ID": str(_first(receipt, "id", "_id")),
        "Receipt No": _first(receipt, "receipt_no", "receiptNo"),
        "Date": _first(receipt, "date"),
        "Investor": _first(receipt, "investor_name", "investorName"),
        "Investor ID": _first(receipt, "investor_id", "investorId"),
        "Scheme": _first(receipt, "scheme_name", "schemeName"),
        "Category": _first(receipt, "product_category", "issuer_category", "issuerCategory"),
        "Amount": to_num(_first(receipt, "investment_amount", "investmentAmount")),
        "Employee": _first(receipt, "employee_name", "employeeName"),
        "Emp Code": _first(receipt, "emp_code", "empCode"),
        "Status": "Deleted" if ReceiptsService.is_deleted(receipt) else "Active",
    }


def can_modify(receipt: Dict[str, Any], auth: AuthSession) -> bool:
    """Admins may touch any receipt, employees only their own."""
    if auth.is_admin:
        return True
    user = auth.current_user()
    return user is not None and bool(user.emp_code) and _first(receipt, "emp_code", "empCode") == user.emp_code


def _snake(name: str) -> str:
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name).lower()


def record_from_server(data: Dict[str, Any]) -> ReceiptRecord:
    """
    Rebuild a ``ReceiptRecord`` from a stored receipt.

    The backend may wrap the row in ``{"data": ...}`` and returns either the
    wire (camelCase) names or their snake_case form. Unknown keys are dropped and missing ones
    take the record defaults.
    """
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]
    if not isinstance(data, dict):
        raise ApiError("Unexpected receipt response", payload=data)

    values: Dict[str, Any] = {}
    for name, info in ReceiptRecord.model_fields.items():
        wire = info.alias or name
        value = _first(data, wire, _snake(wire))
        if value == "":
            continue
        values[wire] = to_num(value) if wire == "investmentAmount" else str(value)
    try:
        return ReceiptRecord.model_validate(values)
    except ValidationError as e:
        raise ApiError("Unexpected receipt response", payload=data) from e


def view_error_message(error: ApiError) -> str:
    """User-facing text for a failed single-receipt fetch."""
    text = error.message or ""
    if error.status_code == 403 or "forbidden" in text.lower():
        return "You do not have permission to view this receipt. You can only view receipts you created."
    if error.status_code == 404 or "not found" in text.lower():
        return "Receipt not found. It may have been deleted or the ID is incorrect."
    return text or "Failed to load receipt"
