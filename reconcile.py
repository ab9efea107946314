# reconcile.py
from __future__ import annotations

from typing import Dict, List

from task_records import HEADERS, row_from_record


def header_matches(existing: List[str], columns: List[str]) -> bool:
    return len(existing) == len(columns) and all(
        str(v).strip() == columns[i] for i, v in enumerate(existing)
    )


def ensure_header_row(store, columns: List[str] = HEADERS, dry: bool = False) -> bool:
    """
    Rewrites row 1 unless it already equals `columns` exactly (after trim).
    Returns True when the header was (or, with dry=True, would be) written.
    """
    if header_matches(store.read_header(), columns):
        return False
    if not dry:
        store.write_header(columns)
    return True


def index_task_rows(rows: List[List[str]]) -> Dict[str, int]:
    # First occurrence wins; later rows with the same task_id are never touched
    out: Dict[str, int] = {}
    for i, row in enumerate(rows):
        k = str(row[0]).strip() if row else ""
        if k and k not in out:
            out[k] = i + 2
    return out


def upsert_by_task_id(store, records: List[Dict[str, str]], dry: bool = False) -> Dict[str, int]:
    """
    Overwrite rows whose column A matches a record's task_id, append the rest.
    Row numbers come from this one read and are never reused across runs.
    """
    rownum_by_key = index_task_rows(store.read_rows())

    # One row per task_id: first occurrence keeps its place, last one supplies values
    by_key: Dict[str, List[str]] = {}
    order: List[str] = []
    for r in records:
        k = str(r["task_id"]).strip()
        if k not in by_key:
            order.append(k)
        by_key[k] = row_from_record(r)

    updates: Dict[int, List[str]] = {}
    appends: List[List[str]] = []
    for k in order:
        rn = rownum_by_key.get(k)
        if rn:
            updates[rn] = by_key[k]
        else:
            appends.append(by_key[k])

    if not dry:
        store.update_rows(updates)
        store.append_rows(appends)

    return {"updated": len(updates), "appended": len(appends)}
