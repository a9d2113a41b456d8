# src/meetnotes/repositories/meetings.py
"""
Meeting Repository - Ports and Adapters

Port: MeetingRepository (abstract interface)
Adapter: SQLiteMeetingRepository
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, List, Optional

from .. import db
from .base import BaseRepository, QueryOptions

logger = logging.getLogger(__name__)

# Columns a caller may order by; anything else falls back to date
ORDERABLE_COLUMNS = {"date", "created_at", "updated_at", "title"}
UPDATABLE_FIELDS = ("title", "date", "participants", "raw_notes")


class MeetingRepository(BaseRepository[Dict[str, Any]]):
    """
    Meeting Repository Port - defines the interface for meeting data access.

    Extends BaseRepository with meeting-specific operations.
    """

    @abstractmethod
    def get_detail(self, meeting_id: str) -> Optional[Dict[str, Any]]:
        """Get a meeting together with its AI outputs and action items."""
        pass

    @abstractmethod
    def search(self, query: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Search meetings by title or participants."""
        pass


# =============================================================================
# SQLITE ADAPTER
# =============================================================================

class SQLiteMeetingRepository(MeetingRepository):
    """SQLite adapter for meeting repository."""

    def _format_row(self, row) -> Dict[str, Any]:
        """Format a sqlite row to the standard meeting dict."""
        meeting = dict(row)
        meeting["participants"] = meeting.get("participants") or ""
        meeting["raw_notes"] = meeting.get("raw_notes") or ""
        return meeting

    def get_all(self, options: Optional[QueryOptions] = None) -> List[Dict[str, Any]]:
        """Get meetings, newest meeting date first, with action item counts."""
        options = options or QueryOptions(order_by="date")
        order_by = options.order_by if options.order_by in ORDERABLE_COLUMNS else "date"
        direction = "DESC" if options.order_desc else "ASC"

        where = ""
        params: List[Any] = []
        query = options.filters.get("q")
        if query:
            where = "WHERE LOWER(m.title) LIKE ? OR LOWER(m.participants) LIKE ?"
            pattern = f"%{query.lower()}%"
            params.extend([pattern, pattern])

        with db.connect() as conn:
            rows = conn.execute(
                f"""SELECT m.*,
                          (SELECT COUNT(*) FROM action_items a WHERE a.meeting_id = m.id)
                              AS action_item_count
                   FROM meetings m
                   {where}
                   ORDER BY m.{order_by} {direction}, m.created_at DESC
                   LIMIT ? OFFSET ?""",
                (*params, options.limit, options.offset),
            ).fetchall()

        return [self._format_row(row) for row in rows]

    def get_by_id(self, entity_id: str) -> Optional[Dict[str, Any]]:
        """Get a single meeting by ID."""
        with db.connect() as conn:
            row = conn.execute("SELECT * FROM meetings WHERE id = ?", (entity_id,)).fetchone()
        return self._format_row(row) if row else None

    def get_detail(self, meeting_id: str) -> Optional[Dict[str, Any]]:
        """Get a meeting with its AI outputs and action items, newest first."""
        with db.connect() as conn:
            row = conn.execute("SELECT * FROM meetings WHERE id = ?", (meeting_id,)).fetchone()
            if not row:
                return None

            outputs = conn.execute(
                "SELECT * FROM ai_outputs WHERE meeting_id = ? ORDER BY created_at DESC",
                (meeting_id,),
            ).fetchall()
            items = conn.execute(
                "SELECT * FROM action_items WHERE meeting_id = ? ORDER BY created_at DESC",
                (meeting_id,),
            ).fetchall()

        meeting = self._format_row(row)
        meeting["ai_outputs"] = [dict(o) for o in outputs]
        meeting["action_items"] = [dict(i) for i in items]
        return meeting

    def get_count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Get count of meetings."""
        with db.connect() as conn:
            return conn.execute("SELECT COUNT(*) AS count FROM meetings").fetchone()["count"]

    def search(self, query: str, limit: int = 100) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on title or participants."""
        return self.get_all(QueryOptions(limit=limit, order_by="date", filters={"q": query}))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new meeting."""
        meeting_id = db.new_id()
        now = db.utcnow_iso()
        with db.connect() as conn:
            conn.execute(
                """INSERT INTO meetings
                   (id, title, date, participants, raw_notes, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    meeting_id,
                    data["title"],
                    data["date"],
                    data.get("participants") or "",
                    data.get("raw_notes") or "",
                    now,
                    now,
                ),
            )
        logger.info(f"Created meeting {meeting_id}")
        return self.get_by_id(meeting_id)

    def update(self, entity_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update only the provided meeting fields."""
        updates = []
        params: List[Any] = []
        for field_name in UPDATABLE_FIELDS:
            if field_name in data:
                updates.append(f"{field_name} = ?")
                value = data[field_name]
                if field_name in ("participants", "raw_notes") and value is None:
                    value = ""
                params.append(value)

        updates.append("updated_at = ?")
        params.append(db.utcnow_iso())

        with db.connect() as conn:
            cursor = conn.execute(
                f"UPDATE meetings SET {', '.join(updates)} WHERE id = ?",
                (*params, entity_id),
            )
            if cursor.rowcount == 0:
                return None

        return self.get_by_id(entity_id)

    def delete(self, entity_id: str) -> bool:
        """Delete a meeting and, by cascade, its action items and AI outputs."""
        with db.connect() as conn:
            cursor = conn.execute("DELETE FROM meetings WHERE id = ?", (entity_id,))
        return cursor.rowcount > 0
