# run_log.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List

import pytz

from reconcile import ensure_header_row
from sheet_store import SheetTab

SUMMARY_COLUMNS = [
    "timestamp", "run_id", "script_version", "job", "collection_id", "sheet_tab",
    "tasks_fetched", "done_tasks", "updated", "appended",
    "result", "error_message",
]

LOG_VALUE_MAX_CHARS = 2000


def now_local(tz_name: str = "UTC") -> str:
    tz = pytz.timezone(tz_name)
    return datetime.now(tz).replace(microsecond=0).strftime("%Y-%m-%d %H:%M:%S")


def clip(v: Any, n: int = LOG_VALUE_MAX_CHARS) -> str:
    if v is None:
        return ""
    s = str(v)
    if len(s) <= n:
        return s
    return s[: max(0, n - 12)] + f"...({len(s)}c)"


class RunLog:
    """One summary row per run, appended to a log tab (no-op when disabled)."""

    def __init__(self, svc, cfg):
        self.cfg = cfg
        self.tab = SheetTab(svc, cfg.log_sheet_id, cfg.log_summary_tab, len(SUMMARY_COLUMNS)) if svc else None

    @property
    def enabled(self) -> bool:
        return bool(self.cfg.log_enabled and self.tab is not None)

    def summary_row(self, run_id: str, result: str, counts=None, error: str = "") -> List[str]:
        c = counts or {}
        return [
            now_local(self.cfg.log_timezone), run_id, self.cfg.script_version,
            f"clickup_{self.cfg.scope}_to_sheet", self.cfg.collection_id, self.cfg.sheet_tab,
            str(c.get("fetched", "?")), str(c.get("done", "?")),
            str(c.get("updated", 0)), str(c.get("appended", 0)),
            result, clip(error),
        ]

    def write(self, row: List[str]):
        if not self.enabled:
            return
        self.tab.ensure_exists()
        ensure_header_row(self.tab, SUMMARY_COLUMNS)
        self.tab.append_rows([row])
