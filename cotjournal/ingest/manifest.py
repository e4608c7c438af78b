from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import hashlib
import pandas as pd

MANIFEST_COLUMNS = [
    "dataset", "report_date", "url", "downloaded_at_utc",
    "raw_path", "sha256", "size_bytes", "status", "error"
]

@dataclass
class ManifestRow:
    dataset: str
    report_date: str
    url: str
    downloaded_at_utc: str
    raw_path: str
    sha256: str
    size_bytes: int
    status: str
    error: str = ""

def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()

def archive_raw(text: str, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    tmp = out_path.with_suffix(out_path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(out_path)
    return out_path

def load_manifest(path: Path) -> pd.DataFrame:
    if path.exists():
        return pd.read_csv(path, dtype={"report_date": str, "sha256": str})
    return pd.DataFrame(columns=MANIFEST_COLUMNS)

def append_manifest(path: Path, row: ManifestRow) -> None:
    df = load_manifest(path)
    new = pd.DataFrame([row.__dict__], columns=MANIFEST_COLUMNS)
    df = new if df.empty else pd.concat([df, new], ignore_index=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
