# src/meetnotes/services/ai_generation.py
"""
AI generation with a notes-hash cache.

For a meeting and an output type: hash the current notes, return the stored
output for that hash if there is one, otherwise call the model and store the
reply. Action lists are additionally parsed into action item rows.
"""

import json
import logging
import re
import sqlite3
from typing import Any, Dict, List, Optional, Tuple

from .. import llm
from ..db import normalize_date
from ..errors import EmptyNotesError, MeetingNotFoundError
from ..repositories import (
    get_action_item_repository,
    get_ai_output_repository,
    get_meeting_repository,
)

logger = logging.getLogger(__name__)

OUTPUT_TYPES = ("summary", "decisions", "actions")

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?```$", re.DOTALL)


def parse_json_reply(content: str) -> Any:
    """json.loads the model reply, tolerating one surrounding code fence."""
    text = (content or "").strip()
    match = _CODE_FENCE.match(text)
    if match:
        text = match.group(1).strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Model reply is not valid JSON: {e}") from e


def parse_decisions(content: str) -> List[str]:
    """Decision strings from a decisions reply; empty list if unparseable."""
    try:
        parsed = parse_json_reply(content)
    except ValueError:
        return []
    if not isinstance(parsed, list):
        return []
    return [str(d) for d in parsed if d is not None and str(d).strip()]


def parse_action_items(content: str) -> List[Dict[str, Any]]:
    """
    Action item rows from an actions reply.

    Raises:
        ValueError: the reply is not a JSON array.
    """
    parsed = parse_json_reply(content)
    if not isinstance(parsed, list):
        raise ValueError("Model reply is not a JSON array")

    items = []
    for action in parsed:
        if not isinstance(action, dict) or not action.get("description"):
            continue
        owner = action.get("owner")
        items.append({
            "description": str(action["description"]),
            "owner": owner if isinstance(owner, str) and owner.strip() else None,
            "due_date": _parse_due_date(action.get("dueDate") or action.get("due_date")),
            "status": "open",
        })
    return items


def _parse_due_date(value: Any) -> Optional[str]:
    # Anything that is not an ISO date is dropped rather than stored verbatim
    if not isinstance(value, str):
        return None
    try:
        return normalize_date(value)
    except ValueError:
        return None


def generate_ai_output(meeting_id: str, output_type: str) -> Tuple[Dict[str, Any], bool]:
    """
    Return the AI output for the meeting's current notes.

    Returns:
        (ai_output_record, cached)

    Raises:
        ValueError: unknown output type
        MeetingNotFoundError: no such meeting
        EmptyNotesError: the meeting has no notes
    """
    if output_type not in OUTPUT_TYPES:
        raise ValueError(f"Unknown output type: {output_type}")

    meeting = get_meeting_repository().get_by_id(meeting_id)
    if not meeting:
        raise MeetingNotFoundError(meeting_id)

    raw_notes = meeting.get("raw_notes") or ""
    if not raw_notes.strip():
        verb = "summarize" if output_type == "summary" else "analyze"
        raise EmptyNotesError(f"No notes to {verb}")

    outputs = get_ai_output_repository()
    notes_hash = llm.hash_notes(raw_notes)
    existing = outputs.find_cached(meeting_id, output_type, notes_hash)
    if existing:
        logger.info(f"Cache hit for {output_type} on meeting {meeting_id}")
        return existing, True

    response = llm.generate(output_type, raw_notes)
    record = outputs.create({
        "meeting_id": meeting_id,
        "type": output_type,
        "content": response.content,
        "raw_notes_hash": notes_hash,
        "prompt_tokens": response.prompt_tokens,
        "completion_tokens": response.completion_tokens,
        "model": response.model,
    })

    if output_type == "actions":
        _store_action_items(meeting_id, response.content)

    return record, False


def _store_action_items(meeting_id: str, content: str) -> None:
    # The raw reply is already stored, so a bad parse only skips item creation
    try:
        items = parse_action_items(content)
    except ValueError as e:
        logger.error(f"Error parsing action items for meeting {meeting_id}: {e}")
        return

    if not items:
        return
    try:
        get_action_item_repository().create_many(meeting_id, items)
    except sqlite3.Error as e:
        logger.error(f"Error creating action items for meeting {meeting_id}: {e}")
