import os
import sys
import subprocess
from pathlib import Path

from dotenv import load_dotenv

# job script -> env var that must be set for it to run
JOBS = [
    ("jobs/01_clickup_list_to_sheet.py", "CLICKUP_LIST_ID"),
    ("jobs/02_clickup_team_to_sheet.py", "CLICKUP_TEAM_ID"),
]

def configured_jobs(env) -> list:
    return [job for job, selector in JOBS if (env.get(selector) or "").strip()]

def main():
    root = Path(__file__).resolve().parent
    load_dotenv(dotenv_path=root / ".env")
    env = os.environ.copy()

    jobs = configured_jobs(env)
    if not jobs:
        raise SystemExit("No job configured: set CLICKUP_LIST_ID and/or CLICKUP_TEAM_ID")

    # Run sequentially (one writer per sheet at a time)
    failed = 0
    for job in jobs:
        p = root / job
        print(f"\n=== RUN: {job} ===")
        r = subprocess.run([sys.executable, str(p)] + sys.argv[1:], env=env)
        if r.returncode != 0:
            failed += 1
            print(f"!! FAILED: {job} (code={r.returncode})")

    if failed:
        sys.exit(1)

if __name__ == "__main__":
    main()
