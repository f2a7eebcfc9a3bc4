"""
Utility functions for common operations.

Provides helper functions for:
- Receipt number generation
- Lenient numeric coercion of form input
- INR amount and date formatting for receipts
- Content hashing and safe file writing
"""
from __future__ import annotations
from datetime import date, datetime
from pathlib import Path
import hashlib
import json
import random
from typing import Any, Optional, Union

from core.config import config
from core.logger import get_logger

log = get_logger("core/utils")

PLACEHOLDER = "—"


def generate_receipt_no(today: Optional[date] = None, rng: Optional[random.Random] = None) -> str:
    """
    Generate a display receipt number of the form ``ECS-<YYYYMMDD>-<NNNN>``.

    The 4-digit suffix is random (1000-9999). The number is an opaque
    reference for printing; it is not guaranteed to be unique.

    Args:
        today: Date to stamp into the number (defaults to the current date)
        rng: Optional random source, mainly for tests

    Returns:
        str: Receipt number

    Examples:
        >>> generate_receipt_no(date(2024, 3, 9))
        "ECS-20240309-4821"
    """
    today = today or date.today()
    suffix = (rng or random).randint(1000, 9999)
    return f"{config.receipt_prefix}-{today.strftime('%Y%m%d')}-{suffix}"


def to_num(value: Any) -> float:
    """
    Parse a typed amount into a number.

    Empty, missing or non-numeric input is coerced to ``0`` instead of raising.

    Examples:
        >>> to_num("50000")
        50000.0
        >>> to_num("")
        0
        >>> to_num("abc")
        0
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    s = str(value).strip().replace(",", "")
    if not s:
        return 0
    try:
        number = float(s)
    except ValueError:
        log.debug(f"Coercing non-numeric input to 0: {s!r}")
        return 0
    # NaN / inf never make sense as amounts
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return number


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    parts = []
    while len(head) > 2:
        parts.insert(0, head[-2:])
        head = head[:-2]
    if head:
        parts.insert(0, head)
    return ",".join(parts) + "," + tail


def format_inr(amount: Union[int, float, str, None], symbol: str = "₹") -> str:
    """
    Format an amount as Indian Rupees with lakh/crore digit grouping.

    Blank input formats to an empty string so the caller can substitute a
    placeholder. Text that is not a number is returned unchanged.

    Examples:
        >>> format_inr(5000000)
        "₹50,00,000.00"
        >>> format_inr("1234.5", symbol="Rs. ")
        "Rs. 1,234.50"
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return ""
    try:
        value = float(str(amount).replace(",", "")) if isinstance(amount, str) else float(amount)
    except ValueError:
        return str(amount)

    sign = "-" if value < 0 else ""
    whole, frac = f"{abs(value):.2f}".split(".")
    return f"{sign}{symbol}{_group_indian(whole)}.{frac}"


def format_display_date(value: Union[str, date, None]) -> str:
    """Render an ISO date as DD/MM/YYYY; anything unparseable is returned as given."""
    if not value:
        return ""
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").strftime("%d/%m/%Y")
    except ValueError:
        return str(value)


def sha256_bytes(data: bytes) -> str:
    """
    Calculate SHA-256 hash of byte data.

    Args:
        data: Bytes to hash

    Returns:
        str: Hexadecimal hash digest

    Raises:
        TypeError: If data is not bytes
    """
    if not isinstance(data, bytes):
        error_msg = f"Expected bytes, got {type(data)}"
        log.error(error_msg)
        raise TypeError(error_msg)

    hash_digest = hashlib.sha256(data).hexdigest()
    log.debug(f"Generated SHA-256 hash: length={len(data)} bytes hash={hash_digest[:16]}...")

    return hash_digest


def stable_hash(payload: Any) -> str:
    """Content hash of a JSON-serializable payload, independent of key order."""
    encoded = json.dumps(payload, sort_keys=True, default=str, ensure_ascii=False).encode("utf-8")
    return sha256_bytes(encoded)


def safe_write(path: Path, data: bytes) -> None:
    """
    Safely write bytes to a file, creating directories as needed.

    Args:
        path: Path where file should be written
        data: Bytes to write

    Raises:
        TypeError: If data is not bytes
        IOError: If write operation fails
    """
    if not isinstance(data, bytes):
        error_msg = f"Expected bytes, got {type(data)}"
        log.error(error_msg)
        raise TypeError(error_msg)

    path = Path(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("wb") as f:
            f.write(data)

        log.debug(f"Safely wrote file: path={path} size={len(data)} bytes")

    except Exception as e:
        log.error(f"Failed to write file {path}: {e}")
        raise IOError(f"Failed to write file: {e}")
