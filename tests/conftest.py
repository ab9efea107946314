"""Test configuration ensuring the root modules import without an editable install.

Also provides an in-memory stand-in for a sheet tab so the reconciler can be
exercised without the Sheets API.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class MemoryTab:
    """Mimics SheetTab: rows[0] is row 1 (header), rows[1] is row 2, ..."""

    def __init__(self, rows=None, present=True):
        self.rows = [list(r) for r in (rows or [])]
        self.present = present
        self.calls = []

    def exists(self):
        return self.present

    def ensure_exists(self):
        self.calls.append("ensure_exists")
        created = not self.present
        self.present = True
        return created

    def read_header(self):
        self.calls.append("read_header")
        return list(self.rows[0]) if self.rows else []

    def write_header(self, header):
        self.calls.append("write_header")
        if self.rows:
            self.rows[0] = list(header)
        else:
            self.rows.append(list(header))

    def read_rows(self):
        self.calls.append("read_rows")
        return [list(r) for r in self.rows[1:]]

    def update_rows(self, updates):
        if not updates:
            return
        self.calls.append("update_rows")
        for rn, values in updates.items():
            self.rows[rn - 1] = list(values)

    def append_rows(self, rows):
        if not rows:
            return
        self.calls.append("append_rows")
        if not self.rows:
            self.rows.append([])
        self.rows.extend(list(r) for r in rows)


@pytest.fixture
def memory_tab():
    return MemoryTab()


@pytest.fixture
def make_tab():
    return MemoryTab
