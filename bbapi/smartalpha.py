"""SMART Alpha helpers: transaction types, chart windows and duration parsing."""

from __future__ import annotations

import time
from datetime import timedelta
from decimal import Decimal
from typing import Sequence

CHART_NR_OF_POINTS = 30

TX_TYPES = frozenset(
    {
        "JUNIOR_ENTRY",
        "JUNIOR_REDEEM_TOKENS",
        "JUNIOR_EXIT",
        "JUNIOR_REDEEM_UNDERLYING",
        "SENIOR_ENTRY",
        "SENIOR_REDEEM_TOKENS",
        "SENIOR_EXIT",
        "SENIOR_REDEEM_UNDERLYING",
        "JTOKEN_SEND",
        "JTOKEN_RECEIVE",
        "STOKEN_SEND",
        "STOKEN_RECEIVE",
    }
)

REWARD_POOL_TX_TYPES = frozenset({"DEPOSIT", "WITHDRAW"})

_WINDOWS = {
    "24h": ("'24 hours'", "'minute'"),
    "1w": ("'7 days'", "'hour'"),
    "30d": ("'30 days'", "'day'"),
}

_TOTAL_POINTS = {
    "24h": "30 * 60",
    "1w": "3*60*60",
    "30d": "12*60*60",
}

_POOL_TOKEN_TYPES = frozenset(
    {"JUNIOR_ENTRY", "SENIOR_ENTRY", "JUNIOR_REDEEM_UNDERLYING", "SENIOR_REDEEM_UNDERLYING"}
)
_JUNIOR_TOKEN_TYPES = frozenset(
    {"JUNIOR_EXIT", "JUNIOR_REDEEM_TOKENS", "JTOKEN_SEND", "JTOKEN_RECEIVE"}
)
_SENIOR_TOKEN_TYPES = frozenset(
    {"SENIOR_EXIT", "SENIOR_REDEEM_TOKENS", "STOKEN_SEND", "STOKEN_RECEIVE"}
)


def is_tx_type(action: str) -> bool:
    """True for a known pool transaction type."""
    return action in TX_TYPES


def is_reward_pool_tx_type(action: str) -> bool:
    """True for a known reward pool staking action."""
    return action in REWARD_POOL_TX_TYPES


def validate_window(window: str) -> tuple[str, str]:
    """Return the SQL interval and date_trunc precision for a chart window."""
    try:
        return _WINDOWS[window]
    except KeyError:
        raise ValueError("invalid window") from None


def total_points(window: str) -> str:
    """The SQL step expression between portfolio points, or "" when unknown."""
    return _TOTAL_POINTS.get(window, "")


def tx_token_symbol(
    tx_type: str, pool_token_symbol: str, junior_token_symbol: str, senior_token_symbol: str
) -> str:
    """The symbol of the token a transaction of this type moves, or ""."""
    if tx_type in _POOL_TOKEN_TYPES:
        return pool_token_symbol
    if tx_type in _JUNIOR_TOKEN_TYPES:
        return junior_token_symbol
    if tx_type in _SENIOR_TOKEN_TYPES:
        return senior_token_symbol
    return ""


def amount_in_asset(
    tx_type: str, amount: Decimal, junior_token_price: Decimal, senior_token_price: Decimal
) -> Decimal:
    """The transaction amount expressed in the pool's underlying asset."""
    if tx_type in _POOL_TOKEN_TYPES:
        return amount
    if tx_type in _JUNIOR_TOKEN_TYPES:
        return amount * junior_token_price
    if tx_type in _SENIOR_TOKEN_TYPES:
        return amount * senior_token_price
    return Decimal(0)


_NANOSECOND = 1
_UNITS = {
    "ns": _NANOSECOND,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_LIMIT = 1 << 63
_FRACTION_CAP = ((1 << 63) - 1) // 10


def _invalid(text: str, reason: str = "invalid duration") -> ValueError:
    return ValueError(f"time: {reason} {text!r}")


def _duration_nanoseconds(text: str) -> int:
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if not rest:
        raise _invalid(text)

    total = 0
    while rest:
        if not (rest[0] == "." or rest[0].isascii() and rest[0].isdigit()):
            raise _invalid(text)

        digits = 0
        value = 0
        while digits < len(rest) and rest[digits].isascii() and rest[digits].isdigit():
            value = value * 10 + int(rest[digits])
            if value >= _LIMIT:
                raise _invalid(text)
            digits += 1
        has_int = digits > 0
        rest = rest[digits:]

        fraction, scale, has_frac = 0, 1, False
        if rest.startswith("."):
            rest = rest[1:]
            count = 0
            overflow = False
            while count < len(rest) and rest[count].isascii() and rest[count].isdigit():
                if not overflow:
                    if fraction > _FRACTION_CAP:
                        overflow = True
                    else:
                        candidate = fraction * 10 + int(rest[count])
                        if candidate >= _LIMIT:
                            overflow = True
                        else:
                            fraction = candidate
                            scale *= 10
                count += 1
            has_frac = count > 0
            rest = rest[count:]
        if not has_int and not has_frac:
            raise _invalid(text)

        end = 0
        while end < len(rest) and rest[end] != "." and not (
            rest[end].isascii() and rest[end].isdigit()
        ):
            end += 1
        if end == 0:
            raise _invalid(text, "missing unit in duration")
        unit_name, rest = rest[:end], rest[end:]
        unit = _UNITS.get(unit_name)
        if unit is None:
            raise ValueError(f"time: unknown unit {unit_name!r} in duration {text!r}")

        if value > _LIMIT // unit:
            raise _invalid(text)
        value *= unit
        if fraction > 0:
            value += int(float(fraction) * (float(unit) / scale))
            if value > _LIMIT:
                raise _invalid(text)
        total += value
        if total > _LIMIT:
            raise _invalid(text)

    if negative:
        return -total
    if total > _LIMIT - 1:
        raise _invalid(text)
    return total


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as "300ms", "1.5h" or "-2h45m" (to the microsecond)."""
    nanoseconds = _duration_nanoseconds(text)
    micro = abs(nanoseconds) // 1000
    return timedelta(microseconds=micro if nanoseconds >= 0 else -micro)


def performance_window(
    window: str, epoch_ts: Sequence[int], now: int | None = None
) -> tuple[int, int]:
    """Start and end timestamps of a pool performance chart window.

    ``epoch_ts`` holds the end timestamps of the latest epochs, newest first.
    """
    current = int(time.time()) if now is None else now

    if window == "current":
        if not epoch_ts:
            raise ValueError("no finished epoch")
        return epoch_ts[0], current
    if window == "last":
        if len(epoch_ts) < 2:
            raise ValueError("not enough finished epochs")
        return epoch_ts[1], epoch_ts[0] - 1

    if window == "1w":
        duration = timedelta(days=7)
    elif window == "30d":
        duration = timedelta(days=30)
    else:
        try:
            duration = parse_duration(window)
        except ValueError as err:
            raise ValueError(f"invalid window: {err}") from err

    micro = duration // timedelta(microseconds=1)
    start = (current * 1_000_000 - micro) // 1_000_000
    return start, current