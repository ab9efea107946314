# task_records.py
from __future__ import annotations

import json
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

# Sheet column order (column A must stay task_id)
HEADERS = ["task_id", "task_name", "status", "assignees", "page_url", "date_closed", "url"]

# Adjust via DONE_STATUSES if your workspace uses different terminal names
DEFAULT_DONE_STATUSES = frozenset(
    {"complete", "completed", "done", "published", "finalized", "closed"}
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def status_label(task: Dict) -> str:
    st = task.get("status")
    if isinstance(st, dict):
        v = st.get("status")
        return "" if v is None else str(v)
    return ""


def is_done(task: Dict, done_statuses: Iterable[str] = DEFAULT_DONE_STATUSES) -> bool:
    s = status_label(task).strip().lower()
    return s in done_statuses or task.get("archived") is True


def _number_str(v: Any) -> str:
    if isinstance(v, float):
        if math.isnan(v) or math.isinf(v):
            return str(v)
        if v.is_integer():
            return str(int(v))
    return str(v)


def coerce_field_value(v: Any) -> str:
    """
    ClickUp custom field values are not always plain strings.
    URL fields are usually a string, but some field configs hand back
    {"url": ...} or {"value": ...}; anything else structured is kept as JSON.
    """
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, bool):
        return ""
    if isinstance(v, (int, float)):
        return _number_str(v)
    if isinstance(v, dict):
        if isinstance(v.get("url"), str):
            return v["url"]
        if isinstance(v.get("value"), str):
            return v["value"]
    if isinstance(v, (dict, list)):
        try:
            return json.dumps(v, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return ""
    return ""


def custom_field_value(task: Dict, field_name: str) -> str:
    fields = task.get("custom_fields")
    if not isinstance(fields, list):
        return ""
    want = (field_name or "").strip().lower()
    for f in fields:
        if not isinstance(f, dict):
            continue
        if str(f.get("name") or "").strip().lower() == want:
            return coerce_field_value(f.get("value"))
    return ""


def to_iso(ms: Any) -> str:
    """Epoch milliseconds -> 2023-11-14T22:13:20.000Z ("" if missing/zero/garbage)."""
    if not ms or isinstance(ms, bool):
        return ""
    try:
        n = float(ms)
    except (TypeError, ValueError):
        return ""
    if not n or math.isnan(n) or math.isinf(n):
        return ""
    try:
        dt = _EPOCH + timedelta(milliseconds=int(n))
    except OverflowError:
        return ""
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + ".%03dZ" % (dt.microsecond // 1000)


def assignee_label(a: Any) -> str:
    if not isinstance(a, dict):
        return ""
    for k in ("username", "email", "id"):
        v = a.get(k)
        if v:
            return str(v)
    return ""


def to_record(task: Dict, page_url_field: str) -> Dict[str, str]:
    assignees = task.get("assignees") or []
    return {
        "task_id": str(task.get("id") or "").strip(),
        "task_name": str(task.get("name") or ""),
        "status": status_label(task),
        "assignees": ", ".join(assignee_label(a) for a in assignees),
        "page_url": custom_field_value(task, page_url_field),
        "date_closed": to_iso(task.get("date_closed") or task.get("date_done") or ""),
        "url": str(task.get("url") or ""),
    }


def normalize(
    tasks: List[Dict],
    page_url_field: str,
    done_statuses: Optional[Iterable[str]] = None,
) -> List[Dict[str, str]]:
    done = frozenset(done_statuses) if done_statuses is not None else DEFAULT_DONE_STATUSES
    out: List[Dict[str, str]] = []
    for t in tasks:
        if not isinstance(t, dict) or not is_done(t, done):
            continue
        r = to_record(t, page_url_field)
        if r["task_id"]:
            out.append(r)
    return out


def row_from_record(r: Dict[str, str]) -> List[str]:
    return [r.get(h) or "" for h in HEADERS]
