# src/meetnotes/repositories/action_items.py
"""
Action Item Repository - Ports and Adapters

Port: ActionItemRepository (abstract interface)
Adapter: SQLiteActionItemRepository
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from .. import db
from .base import BaseRepository, QueryOptions

logger = logging.getLogger(__name__)

STATUSES = ("open", "done")
UPDATABLE_FIELDS = ("description", "owner", "due_date", "status")

# Open before done, then earliest due date, undated items last
BOARD_ORDER = """
    CASE a.status WHEN 'open' THEN 0 ELSE 1 END,
    CASE WHEN a.due_date IS NULL THEN 1 ELSE 0 END,
    a.due_date ASC,
    a.created_at DESC
"""


class ActionItemRepository(BaseRepository[Dict[str, Any]]):
    """Action Item Repository Port."""

    @abstractmethod
    def create_many(self, meeting_id: str, items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Create several action items for one meeting in a single transaction."""
        pass


# =============================================================================
# SQLITE ADAPTER
# =============================================================================

class SQLiteActionItemRepository(ActionItemRepository):
    """SQLite adapter for action item repository."""

    def _format_row(self, row) -> Dict[str, Any]:
        item = dict(row)
        # Joined meeting columns are folded into a nested summary
        if "meeting_title" in item:
            item["meeting"] = {
                "id": item["meeting_id"],
                "title": item.pop("meeting_title"),
                "date": item.pop("meeting_date"),
            }
        return item

    def _where(self, filters: Dict[str, Any]) -> tuple:
        clauses = []
        params: List[Any] = []
        if filters.get("status"):
            clauses.append("a.status = ?")
            params.append(filters["status"])
        if filters.get("meeting_id"):
            clauses.append("a.meeting_id = ?")
            params.append(filters["meeting_id"])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    def get_all(self, options: Optional[QueryOptions] = None) -> List[Dict[str, Any]]:
        """Get action items in board order, each with its meeting summary."""
        options = options or QueryOptions(limit=1000)
        where, params = self._where(options.filters)

        with db.connect() as conn:
            rows = conn.execute(
                f"""SELECT a.*, m.title AS meeting_title, m.date AS meeting_date
                   FROM action_items a
                   JOIN meetings m ON m.id = a.meeting_id
                   {where}
                   ORDER BY {BOARD_ORDER}
                   LIMIT ? OFFSET ?""",
                (*params, options.limit, options.offset),
            ).fetchall()

        return [self._format_row(row) for row in rows]

    def get_by_id(self, entity_id: str) -> Optional[Dict[str, Any]]:
        """Get a single action item by ID."""
        with db.connect() as conn:
            row = conn.execute(
                """SELECT a.*, m.title AS meeting_title, m.date AS meeting_date
                   FROM action_items a
                   JOIN meetings m ON m.id = a.meeting_id
                   WHERE a.id = ?""",
                (entity_id,),
            ).fetchone()
        return self._format_row(row) if row else None

    def get_count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count action items, optionally by status or meeting."""
        where, params = self._where(filters or {})
        with db.connect() as conn:
            return conn.execute(
                f"SELECT COUNT(*) AS count FROM action_items a {where}", params
            ).fetchone()["count"]

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a single action item."""
        created = self.create_many(data["meeting_id"], [data])
        return created[0]

    def create_many(self, meeting_id: str, items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Create several action items in one transaction."""
        now = db.utcnow_iso()
        rows = [
            (
                db.new_id(),
                meeting_id,
                item["description"],
                item.get("owner") or None,
                item.get("due_date") or None,
                item.get("status") or "open",
                now,
                now,
            )
            for item in items
        ]
        if not rows:
            return []

        with db.connect() as conn:
            conn.executemany(
                """INSERT INTO action_items
                   (id, meeting_id, description, owner, due_date, status, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                rows,
            )

        logger.info(f"Created {len(rows)} action item(s) for meeting {meeting_id}")
        return [self.get_by_id(row[0]) for row in rows]

    def update(self, entity_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update only the provided fields. None clears owner or due_date."""
        updates = []
        params: List[Any] = []
        for field_name in UPDATABLE_FIELDS:
            if field_name in data:
                updates.append(f"{field_name} = ?")
                params.append(data[field_name])

        updates.append("updated_at = ?")
        params.append(db.utcnow_iso())

        with db.connect() as conn:
            cursor = conn.execute(
                f"UPDATE action_items SET {', '.join(updates)} WHERE id = ?",
                (*params, entity_id),
            )
            if cursor.rowcount == 0:
                return None

        return self.get_by_id(entity_id)

    def delete(self, entity_id: str) -> bool:
        """Delete an action item."""
        with db.connect() as conn:
            cursor = conn.execute("DELETE FROM action_items WHERE id = ?", (entity_id,))
        return cursor.rowcount > 0
