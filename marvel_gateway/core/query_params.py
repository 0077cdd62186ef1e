"""Query Parameter Parsing — lenient integer parsing shared by proxy and store.

Invariants:
    - Pure function: no IO
    - Never raises: anything without a leading integer falls back to the default
    - Leading integer prefix wins ("12abc" -> 12, "1.9" -> 1)
"""

import re

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DEFAULT_SKIP = 0
DEFAULT_LIMIT = 100


def parse_int_or_default(raw: str | None, default: int) -> int:
    """Parse the leading integer of `raw`, or return `default`."""
    if not raw:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    return int(match.group(1))


def parse_pagination(skip: str | None, limit: str | None) -> tuple[int, int]:
    """Parse skip/limit query text with the gateway defaults (0 / 100)."""
    return (
        parse_int_or_default(skip, DEFAULT_SKIP),
        parse_int_or_default(limit, DEFAULT_LIMIT),
    )
