# =============================================================================
# tools/handlers/formatting.py  -  Shared display helpers
# =============================================================================
#
# Every Ordiscan handler returns the raw API payload plus a "formatted" view
# meant for humans (and LLMs) to read.  These helpers keep that view
# consistent across tools: thousands separators, USD strings, shortened ids,
# readable UTC timestamps.
# =============================================================================

from datetime import datetime, timezone
from typing import Any, Optional, Union

NA = "N/A"
SATS_PER_BTC = 100_000_000

Number = Union[int, float, str]


def or_na(value: Any) -> Any:
    """Return `value`, or "N/A" when it is empty/None/zero-length."""
    return value if value else NA


def short_id(value: str) -> str:
    """Shorten a txid / inscription id to "first8...last8"."""
    if len(value) <= 19:
        return value
    return f"{value[:8]}...{value[-8:]}"


def number(value: Optional[Number]) -> str:
    """Format a count with thousands separators ("1234567" → "1,234,567")."""
    if value is None:
        return NA
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return value
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.8f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


def decimal(value: Optional[Number], places: int = 8) -> str:
    """Format with at least two and at most `places` decimals."""
    if value is None:
        return NA
    text = f"{float(value):,.{places}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0").ljust(2, "0")
    return f"{whole}.{fraction}"


def usd(value: Optional[Number]) -> str:
    if value is None:
        return NA
    return f"${float(value):,.2f}"


def btc(sats: int) -> str:
    """Satoshis as a BTC amount with 8 decimals ("150000000" → "1.50000000")."""
    return f"{sats / SATS_PER_BTC:.8f}"


def percent(part: float, whole: float) -> str:
    if not whole:
        return "0.00%"
    return f"{part / whole * 100:.2f}%"


def parse_time(value: Union[str, int, float, None]) -> Optional[datetime]:
    """Parse an ISO-8601 string or unix seconds into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def timestamp(value: Union[str, int, float, None]) -> str:
    """Readable UTC timestamp, or "N/A" when missing/unparseable."""
    parsed = parse_time(value)
    if parsed is None:
        return NA
    return parsed.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
