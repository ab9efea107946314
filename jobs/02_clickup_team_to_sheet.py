# jobs/02_clickup_team_to_sheet.py
from __future__ import annotations

# --- import path fix (cron) ---
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# --- end fix ---

from sync_pipeline import main

if __name__ == "__main__":
    sys.exit(main("team"))
