import sqlite3
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from .config import DB_PATH

SCHEMA = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS meetings (
  id TEXT PRIMARY KEY,
  title TEXT NOT NULL,
  date TEXT NOT NULL,               -- ISO 8601 date or datetime
  participants TEXT NOT NULL DEFAULT '',  -- freeform, comma-separated
  raw_notes TEXT NOT NULL DEFAULT '',
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_meetings_date ON meetings(date);
CREATE INDEX IF NOT EXISTS idx_meetings_title ON meetings(LOWER(title));

CREATE TABLE IF NOT EXISTS action_items (
  id TEXT PRIMARY KEY,
  meeting_id TEXT NOT NULL,
  description TEXT NOT NULL,
  owner TEXT,
  due_date TEXT,
  status TEXT NOT NULL DEFAULT 'open' CHECK (status IN ('open', 'done')),
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL,
  FOREIGN KEY (meeting_id) REFERENCES meetings(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_action_items_meeting ON action_items(meeting_id);
CREATE INDEX IF NOT EXISTS idx_action_items_status ON action_items(status);

-- AI outputs, cached per (meeting, type, notes hash)
CREATE TABLE IF NOT EXISTS ai_outputs (
  id TEXT PRIMARY KEY,
  meeting_id TEXT NOT NULL,
  type TEXT NOT NULL CHECK (type IN ('summary', 'decisions', 'actions')),
  content TEXT NOT NULL,
  raw_notes_hash TEXT NOT NULL,     -- sha256 hex of the notes that produced it
  prompt_tokens INTEGER NOT NULL DEFAULT 0,
  completion_tokens INTEGER NOT NULL DEFAULT 0,
  model TEXT NOT NULL,
  created_at TEXT NOT NULL,
  FOREIGN KEY (meeting_id) REFERENCES meetings(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_ai_outputs_lookup ON ai_outputs(meeting_id, type, raw_notes_hash);
"""


def connect():
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db():
    with connect() as conn:
        conn.executescript(SCHEMA)


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow_iso() -> str:
    # Microsecond precision keeps "newest first" ordering stable within a second
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def normalize_date(value: Optional[str]) -> Optional[str]:
    """Validate an ISO 8601 date or datetime string for storage.

    Date-only values stay ``YYYY-MM-DD``. Aware datetimes are converted to UTC
    so stored values sort chronologically as text.

    Raises:
        ValueError: not an ISO 8601 date or datetime.
    """
    if value is None or not value.strip():
        return None
    value = value.strip()
    if len(value) == 10:
        return date.fromisoformat(value).isoformat()
    # fromisoformat only accepts a trailing Z from Python 3.11 on
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.isoformat()
