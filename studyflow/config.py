"""
Configuration for the study planner.

All settings come from environment variables so the CLI and the web app can
share one database without extra files.
"""

import os
from pathlib import Path

# Where the SQLite database and log files live
DATA_DIR = Path(os.getenv("STUDYFLOW_DATA_DIR", str(Path.home() / ".studyflow")))

# Full path to the SQLite database (overrides DATA_DIR for the db only)
DB_PATH = Path(os.getenv("STUDYFLOW_DB_PATH", str(DATA_DIR / "studyflow.db")))

# "sqlite" (default) or "memory" for a throwaway store
STORAGE_BACKEND = os.getenv("STUDYFLOW_STORAGE", "sqlite").lower()

# Local wall-clock timezone used for "today" and calendar export
TIMEZONE = os.getenv("STUDYFLOW_TIMEZONE", "America/Toronto")

LOG_LEVEL = os.getenv("STUDYFLOW_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("STUDYFLOW_LOG_FILE")

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

# Fixed storage namespace keys
SESSIONS_KEY = "studyflow_sessions"
SAMPLES_LOADED_KEY = "studyflow_samples_loaded"
