# src/meetnotes/api/v1/meetings.py
"""
API v1 - Meetings endpoints.

CRUD over meetings, plus manual action item creation for a meeting.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from .models import (
    ActionItemCreate, ActionItemResponse, MeetingCreate, MeetingDetail,
    MeetingListItem, MeetingResponse, MeetingUpdate,
)
from ...repositories import (
    QueryOptions, get_action_item_repository, get_meeting_repository,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[MeetingListItem])
def list_meetings(
    q: Optional[str] = Query(None, description="Filter by title or participants"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=500, description="Max records to return"),
):
    """
    List meetings, most recent meeting date first.

    Each meeting carries its action item count.
    """
    try:
        options = QueryOptions(limit=limit, offset=skip, order_by="date", filters={"q": q})
        return get_meeting_repository().get_all(options)
    except Exception as e:
        logger.error(f"Error fetching meetings: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch meetings")


@router.post("", response_model=MeetingResponse, status_code=201)
def create_meeting(meeting: MeetingCreate):
    """Create a new meeting."""
    try:
        return get_meeting_repository().create(meeting.to_record())
    except Exception as e:
        logger.error(f"Error creating meeting: {e}")
        raise HTTPException(status_code=500, detail="Failed to create meeting")


@router.get("/{meeting_id}", response_model=MeetingDetail)
def get_meeting(meeting_id: str):
    """
    Get a single meeting with its AI outputs and action items.

    Returns 404 if meeting not found.
    """
    try:
        meeting = get_meeting_repository().get_detail(meeting_id)
    except Exception as e:
        logger.error(f"Error fetching meeting {meeting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch meeting")

    if not meeting:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return meeting


@router.patch("/{meeting_id}", response_model=MeetingResponse)
def update_meeting(meeting_id: str, meeting: MeetingUpdate):
    """
    Update an existing meeting.

    Only updates fields that are provided.
    Returns 404 if meeting not found.
    """
    try:
        updated = get_meeting_repository().update(meeting_id, meeting.to_updates())
    except Exception as e:
        logger.error(f"Error updating meeting {meeting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update meeting")

    if not updated:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return updated


@router.delete("/{meeting_id}", status_code=204)
def delete_meeting(meeting_id: str):
    """
    Delete a meeting along with its action items and AI outputs.

    Returns 204 No Content on success, 404 if meeting not found.
    """
    try:
        deleted = get_meeting_repository().delete(meeting_id)
    except Exception as e:
        logger.error(f"Error deleting meeting {meeting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete meeting")

    if not deleted:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return Response(status_code=204)


@router.post("/{meeting_id}/action-items", response_model=ActionItemResponse, status_code=201)
def create_action_item(meeting_id: str, item: ActionItemCreate):
    """Manually add an action item to a meeting."""
    if not get_meeting_repository().exists(meeting_id):
        raise HTTPException(status_code=404, detail="Meeting not found")

    try:
        return get_action_item_repository().create(item.to_record(meeting_id))
    except Exception as e:
        logger.error(f"Error creating action item for meeting {meeting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create action item")
