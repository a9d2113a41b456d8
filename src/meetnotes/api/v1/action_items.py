# src/meetnotes/api/v1/action_items.py
"""
API v1 - Action item endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from .models import ActionItemUpdate, ActionItemWithMeeting
from ...repositories import QueryOptions, get_action_item_repository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ActionItemWithMeeting])
def list_action_items(
    status: Optional[str] = Query(None, pattern=r"^(open|done)$"),
    meeting_id: Optional[str] = Query(None),
):
    """
    List action items across all meetings.

    Open items come first, then by earliest due date; undated items last.
    """
    try:
        options = QueryOptions(limit=1000, filters={"status": status, "meeting_id": meeting_id})
        return get_action_item_repository().get_all(options)
    except Exception as e:
        logger.error(f"Error fetching action items: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch action items")


@router.patch("/{item_id}", response_model=ActionItemWithMeeting)
def update_action_item(item_id: str, item: ActionItemUpdate):
    """Update description, owner, due date, or status."""
    try:
        updated = get_action_item_repository().update(item_id, item.to_updates())
    except Exception as e:
        logger.error(f"Error updating action item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update action item")

    if not updated:
        raise HTTPException(status_code=404, detail="Action item not found")
    return updated


@router.delete("/{item_id}", status_code=204)
def delete_action_item(item_id: str):
    try:
        deleted = get_action_item_repository().delete(item_id)
    except Exception as e:
        logger.error(f"Error deleting action item {item_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete action item")

    if not deleted:
        raise HTTPException(status_code=404, detail="Action item not found")
    return Response(status_code=204)
