# audit.py
from __future__ import annotations
import csv, json, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
import contextvars

from path_helper import user_log_dir

# global "current actor"
_current_actor: contextvars.ContextVar[str] = contextvars.ContextVar("actor", default="system")

HEADER = ["ts", "level", "actor", "action", "details_json"]

LOG_DIR  = user_log_dir()
LOG_FILE = LOG_DIR / "events.csv"

def configure(log_dir: Path | str) -> None:
    global LOG_DIR, LOG_FILE
    LOG_DIR = Path(log_dir)
    LOG_FILE = LOG_DIR / "events.csv"

def set_actor(username: str | None) -> None:
    """Called by the host to attribute following journal rows (e.g. to a console user)."""
    _current_actor.set((username or "system").strip() or "system")

def _ensure():
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    if not LOG_FILE.exists():
        with open(LOG_FILE, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(HEADER)

def log(action: str, details: Optional[Dict[str, Any] | str] = None, level: str = "INFO") -> None:
    _ensure()
    actor = _current_actor.get()
    ts = datetime.datetime.now().isoformat(timespec="seconds")
    if isinstance(details, str):
        details_json = json.dumps({"msg": details}, ensure_ascii=False)
    else:
        details_json = json.dumps(details or {}, ensure_ascii=False)
    with open(LOG_FILE, "a", newline="", encoding="utf-8") as f:
        csv.writer(f).writerow([ts, level, actor, action, details_json])

def read_all() -> List[Dict[str, str]]:
    """Every journal row, oldest first."""
    if not LOG_FILE.exists():
        return []
    with open(LOG_FILE, "r", newline="", encoding="utf-8") as f:
        return [{k: row.get(k, "") for k in HEADER} for row in csv.DictReader(f)]
