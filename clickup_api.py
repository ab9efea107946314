# clickup_api.py
from __future__ import annotations

from typing import Any, Callable, Dict, List

import requests

CLICKUP_BASE = "https://api.clickup.com/api/v2"
MAX_PAGES = 200


class ClickUpClient:
    def __init__(self, token: str, base_url: str = CLICKUP_BASE, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def _get(self, path: str, params: Dict[str, Any]) -> Dict:
        r = requests.get(
            f"{self.base_url}{path}",
            headers={"Authorization": self.token},
            params=params,
            timeout=self.timeout,
        )
        r.raise_for_status()
        return r.json()

    @staticmethod
    def _tasks(payload: Any) -> List[Dict]:
        if not isinstance(payload, dict):
            return []
        tasks = payload.get("tasks") or []
        return tasks if isinstance(tasks, list) else []

    def list_tasks(self, list_id: str, page: int) -> List[Dict]:
        j = self._get(f"/list/{list_id}/task", {"include_closed": "true", "page": page})
        return self._tasks(j)

    def team_tasks(self, team_id: str, page: int) -> List[Dict]:
        j = self._get(f"/team/{team_id}/task", {"include_closed": "true", "page": page})
        return self._tasks(j)


def fetch_all_tasks(
    fetch_page: Callable[[int], List[Dict]],
    max_pages: int = MAX_PAGES,
    debug: bool = False,
) -> List[Dict]:
    """
    Pages are requested strictly in order (0, 1, 2, ...) until one comes back empty.
    max_pages is only a safety valve for an endpoint that never runs dry:
    hitting it returns whatever was collected so far.
    """
    all_tasks: List[Dict] = []
    for page in range(max(0, max_pages)):
        tasks = fetch_page(page)
        if debug:
            print(f"DEBUG page={page} tasks={len(tasks)}")
        if not tasks:
            return all_tasks
        all_tasks.extend(tasks)

    print(f"WARN: stopped after {max_pages} pages; returning {len(all_tasks)} tasks collected so far.")
    return all_tasks
