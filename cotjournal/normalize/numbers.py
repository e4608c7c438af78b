from __future__ import annotations

import math
import re

_STRIP = re.compile(r"[\s,]")


def parse_number(raw) -> float:
    """
    Lenient numeric parse for CFTC fields.

    Whitespace and thousands separators are dropped. Blank, missing,
    non-numeric and non-finite values all parse to 0.0, so callers cannot
    tell "absent" from a true zero.
    """
    if raw is None:
        return 0.0
    cleaned = _STRIP.sub("", str(raw))
    if not cleaned:
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def field_number(fields: list[str], index: int) -> float:
    """parse_number for a positional field; short rows read as 0."""
    if index >= len(fields):
        return 0.0
    return parse_number(fields[index])
