# sync_config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Optional

import pytz
from dotenv import load_dotenv

from clickup_api import CLICKUP_BASE, MAX_PAGES
from task_records import DEFAULT_DONE_STATUSES

# ========================
# Load .env (repo root)
# ========================
ENV_PATH = Path(__file__).resolve().parent / ".env"

# scope -> env var holding the collection id
COLLECTION_ENV = {"list": "CLICKUP_LIST_ID", "team": "CLICKUP_TEAM_ID"}


def load_env():
    load_dotenv(dotenv_path=ENV_PATH)


def need(name: str) -> str:
    v = os.getenv(name)
    if v is None or str(v).strip() == "":
        raise SystemExit(f"Missing required env: {name} (in {ENV_PATH})")
    return v.strip()


def opt(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def truthy(v: str) -> bool:
    return (v or "").strip().lower() in ("1", "true", "yes", "y", "on")


def opt_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    v = opt(name, "")
    if not v:
        return default
    try:
        n = int(v)
    except ValueError:
        raise SystemExit(f"Invalid {name}: expected an integer, got {v!r}")
    if minimum is not None and n < minimum:
        raise SystemExit(f"Invalid {name}: must be at least {minimum}, got {n}")
    return n


def opt_float(name: str, default: float) -> float:
    v = opt(name, "")
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        raise SystemExit(f"Invalid {name}: expected a number, got {v!r}")


def parse_service_account(raw: str) -> Dict:
    try:
        info = json.loads(raw)
    except ValueError as e:
        raise SystemExit(f"Invalid GOOGLE_SERVICE_ACCOUNT_JSON: {e}")
    if not isinstance(info, dict):
        raise SystemExit("Invalid GOOGLE_SERVICE_ACCOUNT_JSON: expected a JSON object")
    missing = [k for k in ("client_email", "private_key") if not str(info.get(k) or "").strip()]
    if missing:
        raise SystemExit(f"GOOGLE_SERVICE_ACCOUNT_JSON is missing: {', '.join(missing)}")
    return info


def parse_done_statuses(raw: str) -> FrozenSet[str]:
    labels = frozenset(s.strip().lower() for s in (raw or "").split(",") if s.strip())
    return labels or DEFAULT_DONE_STATUSES


@dataclass(frozen=True)
class SyncConfig:
    scope: str                     # list | team
    collection_id: str
    clickup_token: str
    sheet_id: str
    credentials: Dict = field(repr=False)
    sheet_tab: str = "Completed Tasks"
    page_url_field: str = "Page URL"
    done_statuses: FrozenSet[str] = DEFAULT_DONE_STATUSES
    clickup_base_url: str = CLICKUP_BASE
    clickup_timeout_secs: float = 30
    max_pages: int = MAX_PAGES
    log_enabled: bool = False
    log_sheet_id: str = ""
    log_summary_tab: str = "clickup_run_summary"
    log_timezone: str = "UTC"
    script_version: str = ""
    debug: bool = False


def load_config(scope: str = "list") -> SyncConfig:
    """Collects every setting once; nothing downstream reads os.environ."""
    if scope not in COLLECTION_ENV:
        raise SystemExit(f"Unknown scope: {scope!r} (expected one of {sorted(COLLECTION_ENV)})")

    token = need("CLICKUP_TOKEN")
    collection_id = need(COLLECTION_ENV[scope])
    sheet_id = need("GOOGLE_SHEET_ID")
    creds = parse_service_account(need("GOOGLE_SERVICE_ACCOUNT_JSON"))

    log_tz = opt("LOG_TIMEZONE", "UTC") or "UTC"
    try:
        pytz.timezone(log_tz)
    except pytz.UnknownTimeZoneError:
        raise SystemExit(f"Invalid LOG_TIMEZONE: {log_tz!r}")

    return SyncConfig(
        scope=scope,
        collection_id=collection_id,
        clickup_token=token,
        sheet_id=sheet_id,
        credentials=creds,
        sheet_tab=opt("SHEET_TAB_NAME", "Completed Tasks") or "Completed Tasks",
        page_url_field=opt("PAGE_URL_FIELD_NAME", "Page URL") or "Page URL",
        done_statuses=parse_done_statuses(opt("DONE_STATUSES", "")),
        clickup_base_url=(opt("CLICKUP_BASE_URL", CLICKUP_BASE) or CLICKUP_BASE).rstrip("/"),
        clickup_timeout_secs=opt_float("CLICKUP_TIMEOUT_SECS", 30),
        max_pages=opt_int("CLICKUP_MAX_PAGES", MAX_PAGES, minimum=1),
        log_enabled=truthy(opt("LOG_ENABLED", "false")),
        log_sheet_id=opt("LOG_SHEET_ID", "") or sheet_id,
        log_summary_tab=opt("LOG_SUMMARY_TAB", "clickup_run_summary") or "clickup_run_summary",
        log_timezone=log_tz,
        script_version=opt("SCRIPT_VERSION", ""),
        debug=truthy(opt("SYNC_DEBUG", "false")),
    )
