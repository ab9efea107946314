# sheet_store.py
from __future__ import annotations

from typing import Dict, List

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


# ========================
# Sheets helpers
# ========================
def sheets_service(creds_info: Dict):
    creds = Credentials.from_service_account_info(creds_info, scopes=SCOPES)
    return build("sheets", "v4", credentials=creds)


def col_letter(n: int) -> str:
    s = ""
    while n > 0:
        n, r = divmod(n - 1, 26)
        s = chr(65 + r) + s
    return s


def tab_range(tab: str, a1: str) -> str:
    # Sheets escapes a quote inside a quoted tab name by doubling it
    return "'" + tab.replace("'", "''") + "'!" + a1


class SheetTab:
    """
    One tab of a spreadsheet, addressed by 1-based row numbers.
    Row 1 is the header, data starts at row 2.
    """

    def __init__(self, svc, spreadsheet_id: str, tab: str, width: int):
        self.svc = svc
        self.spreadsheet_id = spreadsheet_id
        self.tab = tab
        self.width = width
        self.end = col_letter(max(1, width))

    def exists(self) -> bool:
        meta = self.svc.spreadsheets().get(spreadsheetId=self.spreadsheet_id).execute()
        return any(sh["properties"]["title"] == self.tab for sh in meta.get("sheets", []))

    def ensure_exists(self) -> bool:
        """Adds the tab if missing. Returns True when it had to be created."""
        if self.exists():
            return False
        self.svc.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": [{"addSheet": {"properties": {"title": self.tab}}}]},
        ).execute()
        return True

    def read_header(self) -> List[str]:
        res = self.svc.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=tab_range(self.tab, f"A1:{self.end}1"),
        ).execute()
        return [str(x) for x in (res.get("values") or [[]])[0]]

    def write_header(self, header: List[str]):
        self.svc.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=tab_range(self.tab, f"A1:{self.end}1"),
            valueInputOption="RAW",
            body={"values": [list(header)]},
        ).execute()

    def read_rows(self) -> List[List[str]]:
        res = self.svc.spreadsheets().values().get(
            spreadsheetId=self.spreadsheet_id,
            range=tab_range(self.tab, f"A2:{self.end}"),
        ).execute()
        return res.get("values", [])

    def update_rows(self, updates: Dict[int, List[str]]):
        """updates: {row_1based: full row values}, sent as one batchUpdate."""
        if not updates:
            return
        data = []
        for rn, values in updates.items():
            data.append({
                "range": tab_range(self.tab, f"A{rn}:{self.end}{rn}"),
                "values": [list(values)],
            })
        self.svc.spreadsheets().values().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"valueInputOption": "RAW", "data": data},
        ).execute()

    def append_rows(self, rows: List[List[str]]):
        if not rows:
            return
        self.svc.spreadsheets().values().append(
            spreadsheetId=self.spreadsheet_id,
            range=tab_range(self.tab, f"A:{self.end}"),
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": rows},
        ).execute()
