# src/meetnotes/repositories/ai_outputs.py
"""
AI Output Repository - Ports and Adapters

Stored model replies, looked up by (meeting, type, notes hash).
Outputs are immutable once written.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, List, Optional

from .. import db
from .base import BaseRepository, QueryOptions

logger = logging.getLogger(__name__)


class AIOutputRepository(BaseRepository[Dict[str, Any]]):
    """AI Output Repository Port."""

    @abstractmethod
    def find_cached(
        self, meeting_id: str, output_type: str, raw_notes_hash: str
    ) -> Optional[Dict[str, Any]]:
        """Return the newest output for this exact notes hash, if any."""
        pass

    @abstractmethod
    def get_for_meeting(self, meeting_id: str) -> List[Dict[str, Any]]:
        """All outputs for a meeting, newest first."""
        pass


# =============================================================================
# SQLITE ADAPTER
# =============================================================================

class SQLiteAIOutputRepository(AIOutputRepository):
    """SQLite adapter for AI output repository."""

    def get_all(self, options: Optional[QueryOptions] = None) -> List[Dict[str, Any]]:
        options = options or QueryOptions()
        direction = "DESC" if options.order_desc else "ASC"
        with db.connect() as conn:
            rows = conn.execute(
                f"SELECT * FROM ai_outputs ORDER BY created_at {direction} LIMIT ? OFFSET ?",
                (options.limit, options.offset),
            ).fetchall()
        return [dict(row) for row in rows]

    def get_by_id(self, entity_id: str) -> Optional[Dict[str, Any]]:
        with db.connect() as conn:
            row = conn.execute("SELECT * FROM ai_outputs WHERE id = ?", (entity_id,)).fetchone()
        return dict(row) if row else None

    def get_count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        filters = filters or {}
        with db.connect() as conn:
            if filters.get("meeting_id"):
                return conn.execute(
                    "SELECT COUNT(*) AS count FROM ai_outputs WHERE meeting_id = ?",
                    (filters["meeting_id"],),
                ).fetchone()["count"]
            return conn.execute("SELECT COUNT(*) AS count FROM ai_outputs").fetchone()["count"]

    def get_for_meeting(self, meeting_id: str) -> List[Dict[str, Any]]:
        with db.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM ai_outputs WHERE meeting_id = ? ORDER BY created_at DESC",
                (meeting_id,),
            ).fetchall()
        return [dict(row) for row in rows]

    def find_cached(
        self, meeting_id: str, output_type: str, raw_notes_hash: str
    ) -> Optional[Dict[str, Any]]:
        with db.connect() as conn:
            row = conn.execute(
                """SELECT * FROM ai_outputs
                   WHERE meeting_id = ? AND type = ? AND raw_notes_hash = ?
                   ORDER BY created_at DESC
                   LIMIT 1""",
                (meeting_id, output_type, raw_notes_hash),
            ).fetchone()
        return dict(row) if row else None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        output_id = db.new_id()
        with db.connect() as conn:
            conn.execute(
                """INSERT INTO ai_outputs
                   (id, meeting_id, type, content, raw_notes_hash,
                    prompt_tokens, completion_tokens, model, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    output_id,
                    data["meeting_id"],
                    data["type"],
                    data["content"],
                    data["raw_notes_hash"],
                    data.get("prompt_tokens", 0),
                    data.get("completion_tokens", 0),
                    data["model"],
                    db.utcnow_iso(),
                ),
            )
        logger.info(f"Stored {data['type']} output {output_id} for meeting {data['meeting_id']}")
        return self.get_by_id(output_id)

    def update(self, entity_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError("AI outputs are immutable")

    def delete(self, entity_id: str) -> bool:
        with db.connect() as conn:
            cursor = conn.execute("DELETE FROM ai_outputs WHERE id = ?", (entity_id,))
        return cursor.rowcount > 0
