from __future__ import annotations
from datetime import datetime, timezone
import re

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def today_utc_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()

def is_iso_date(s: str) -> bool:
    if not isinstance(s, str) or not _ISO_DATE.match(s):
        return False
    try:
        datetime.strptime(s, "%Y-%m-%d")
    except ValueError:
        return False
    return True
