# sync_pipeline.py
from __future__ import annotations

import argparse
import json
import sys
import uuid
from typing import Any, Callable, Dict, List

import requests
from googleapiclient.errors import HttpError

from clickup_api import ClickUpClient, fetch_all_tasks
from reconcile import ensure_header_row, upsert_by_task_id
from run_log import RunLog
from sheet_store import SheetTab, sheets_service
from sync_config import SyncConfig, load_config, load_env
from task_records import HEADERS, normalize

FETCH_METHODS = {"list": "list_tasks", "team": "team_tasks"}


def collection_fetcher(client: ClickUpClient, scope: str, collection_id: str) -> Callable[[int], List[Dict]]:
    method = getattr(client, FETCH_METHODS[scope])
    return lambda page: method(collection_id, page)


def run_sync(cfg: SyncConfig, fetch_page: Callable[[int], List[Dict]], store, dry: bool = False) -> Dict[str, Any]:
    """
    ClickUp -> Sheet, one pass:
    fetch every page, keep done tasks, guard the header, upsert by task_id.
    """
    print(f"Fetching tasks from {cfg.scope} {cfg.collection_id}...")
    tasks = fetch_all_tasks(fetch_page, cfg.max_pages, debug=cfg.debug)
    print(f"Fetched {len(tasks)} tasks.")

    records = normalize(tasks, cfg.page_url_field, cfg.done_statuses)
    print(f"Done tasks to sync: {len(records)}")
    if cfg.debug:
        print("DEBUG sample_task_ids:", [r["task_id"] for r in records[:5]])

    if dry:
        if store.exists():
            header_needed = ensure_header_row(store, HEADERS, dry=True)
            counts = upsert_by_task_id(store, records, dry=True)
        else:
            # Missing tab: everything would land as new rows
            header_needed = True
            counts = {"updated": 0, "appended": len({r["task_id"] for r in records})}
        print(f"Would update: {counts['updated']}, Would append: {counts['appended']}")
        return {
            "ok": True,
            "dry": True,
            "fetched": len(tasks),
            "done": len(records),
            "would_write_header": header_needed,
            "would_update": counts["updated"],
            "would_append": counts["appended"],
        }

    store.ensure_exists()
    header_written = ensure_header_row(store, HEADERS)
    counts = upsert_by_task_id(store, records)

    print(f"Updated: {counts['updated']}, Appended: {counts['appended']}")
    return {
        "ok": True,
        "dry": False,
        "fetched": len(tasks),
        "done": len(records),
        "header_written": header_written,
        "updated": counts["updated"],
        "appended": counts["appended"],
    }


def error_payload(e: BaseException) -> Any:
    """Best structured body the failing collaborator gave us."""
    if isinstance(e, requests.HTTPError) and e.response is not None:
        r = e.response
        try:
            body = r.json()
        except ValueError:
            body = (r.text or "")[:2000]
        return {"status": r.status_code, "body": body}
    if isinstance(e, HttpError):
        status = getattr(e.resp, "status", None)
        try:
            body = json.loads(e.content.decode("utf-8"))
        except (ValueError, AttributeError, UnicodeDecodeError):
            body = str(e)
        return {"status": status, "body": body}
    return {"type": type(e).__name__, "message": str(e)}


def main(scope: str, argv=None) -> int:
    p = argparse.ArgumentParser(description=f"ClickUp {scope} -> Google Sheet: upsert completed tasks by task_id")
    p.add_argument("--dry", action="store_true", help="Show planned changes only; no writes")
    args = p.parse_args(argv)

    load_env()
    cfg = load_config(scope)  # config errors exit here, before any I/O

    run_id = uuid.uuid4().hex[:8]
    svc = None
    try:
        svc = sheets_service(cfg.credentials)
        client = ClickUpClient(cfg.clickup_token, cfg.clickup_base_url, cfg.clickup_timeout_secs)
        store = SheetTab(svc, cfg.sheet_id, cfg.sheet_tab, len(HEADERS))

        res = run_sync(cfg, collection_fetcher(client, scope, cfg.collection_id), store, dry=args.dry)
    except Exception as e:
        payload = error_payload(e)
        print(json.dumps({"ok": False, "error": payload}, indent=2, ensure_ascii=False, default=str), file=sys.stderr)

        # best-effort summary log; never masks the run error
        try:
            log = RunLog(svc, cfg)
            log.write(log.summary_row(run_id, "error", error=json.dumps(payload, ensure_ascii=False, default=str)))
        except Exception as log_err:
            print(f"WARN: run log write failed: {log_err}", file=sys.stderr)
        return 1

    # sync already landed; a failed log row is only a warning
    if not args.dry:
        try:
            log = RunLog(svc, cfg)
            log.write(log.summary_row(run_id, "ok", counts=res))
        except Exception as log_err:
            print(f"WARN: run log write failed: {log_err}", file=sys.stderr)

    print(json.dumps(res, indent=2, ensure_ascii=False))
    return 0
