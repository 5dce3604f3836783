"""Runtime configuration read from the environment."""
import os
from pathlib import Path

APP_DIR = Path.home() / ".prep_planner"

# Database
DEFAULT_DB_PATH = os.getenv("PREP_PLANNER_DB", str(APP_DIR / "planner.db"))

# Import
DEFAULT_WORKBOOK_NAME = os.getenv("PREP_PLANNER_WORKBOOK", "full_fledged_plan_v2.xlsx")
WORKBOOK_SEARCH_DIRS = [
    Path(p) for p in os.getenv("PREP_PLANNER_WORKBOOK_DIRS", "").split(os.pathsep) if p
] or [Path.cwd().parent, Path.cwd(), Path.cwd() / "data", APP_DIR]

# Playbooks
PLAYBOOKS_DIR = Path(os.getenv("PREP_PLANNER_PLAYBOOKS", str(Path.cwd() / "playbooks")))

# Logging
LOG_LEVEL = os.getenv("PREP_PLANNER_LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("PREP_PLANNER_LOG_DIR", str(APP_DIR / "logs")))
