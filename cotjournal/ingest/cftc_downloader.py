from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
import requests
from tenacity import retry, stop_after_attempt, wait_exponential

@dataclass(frozen=True)
class FetchResult:
    url: str
    text: str
    size_bytes: int
    fetched_at_utc: str

@retry(stop=stop_after_attempt(4), wait=wait_exponential(multiplier=1, min=1, max=10), reraise=True)
def fetch_text(url: str, timeout_s: int = 60) -> FetchResult:
    r = requests.get(url, timeout=timeout_s)
    r.raise_for_status()

    r.encoding = r.encoding or "utf-8"
    text = r.text
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    return FetchResult(url=url, text=text, size_bytes=len(r.content), fetched_at_utc=ts)
