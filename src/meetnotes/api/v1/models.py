# src/meetnotes/api/v1/models.py
"""
Pydantic models for API v1 request/response validation.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ...db import normalize_date


# -------------------------
# Meetings
# -------------------------

class MeetingCreate(BaseModel):
    """Request model for creating a meeting."""
    title: str = Field(..., min_length=1, max_length=500)
    date: str
    participants: Optional[str] = ""
    raw_notes: Optional[str] = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v

    @field_validator("date")
    @classmethod
    def date_is_iso(cls, v: str) -> str:
        normalized = normalize_date(v)
        if normalized is None:
            raise ValueError("Date is required")
        return normalized

    def to_record(self) -> dict:
        return {
            "title": self.title,
            "date": self.date,
            "participants": self.participants or "",
            "raw_notes": self.raw_notes or "",
        }


class MeetingUpdate(BaseModel):
    """Request model for updating a meeting. Only provided fields change."""
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    date: Optional[str] = None
    participants: Optional[str] = None
    raw_notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_is_iso(cls, v: Optional[str]) -> Optional[str]:
        return normalize_date(v)

    def to_updates(self) -> dict:
        updates = self.model_dump(exclude_unset=True)
        # title and date are NOT NULL columns
        for required in ("title", "date"):
            if required in updates and updates[required] is None:
                updates.pop(required)
        return updates


class MeetingResponse(BaseModel):
    """Response model for a meeting."""
    id: str
    title: str
    date: str
    participants: str
    raw_notes: str
    created_at: str
    updated_at: str


class MeetingListItem(MeetingResponse):
    action_item_count: int = 0


class MeetingSummary(BaseModel):
    """Meeting reference embedded in action item listings."""
    id: str
    title: str
    date: str


# -------------------------
# AI Outputs
# -------------------------

class AIOutputResponse(BaseModel):
    """Response model for a stored AI output."""
    id: str
    meeting_id: str
    type: str
    content: str
    raw_notes_hash: str
    prompt_tokens: int
    completion_tokens: int
    model: str
    created_at: str


class AIOutputResult(AIOutputResponse):
    """AI output plus whether it came from the notes-hash cache."""
    cached: bool


# -------------------------
# Action Items
# -------------------------

class ActionItemResponse(BaseModel):
    """Response model for an action item."""
    id: str
    meeting_id: str
    description: str
    owner: Optional[str] = None
    due_date: Optional[str] = None
    status: str
    created_at: str
    updated_at: str


class ActionItemWithMeeting(ActionItemResponse):
    meeting: MeetingSummary


class ActionItemCreate(BaseModel):
    """Request model for manually adding an action item to a meeting."""
    description: str = Field(..., min_length=1)
    owner: Optional[str] = None
    due_date: Optional[str] = None
    status: str = Field(default="open", pattern=r"^(open|done)$")

    @field_validator("due_date")
    @classmethod
    def due_date_is_iso(cls, v: Optional[str]) -> Optional[str]:
        return normalize_date(v)

    def to_record(self, meeting_id: str) -> dict:
        return {
            "meeting_id": meeting_id,
            "description": self.description,
            "owner": self.owner or None,
            "due_date": self.due_date,
            "status": self.status,
        }


class ActionItemUpdate(BaseModel):
    """Request model for updating an action item. Null clears owner/due_date."""
    description: Optional[str] = Field(None, min_length=1)
    owner: Optional[str] = None
    due_date: Optional[str] = None
    status: Optional[str] = Field(None, pattern=r"^(open|done)$")

    @field_validator("due_date")
    @classmethod
    def due_date_is_iso(cls, v: Optional[str]) -> Optional[str]:
        return normalize_date(v)

    def to_updates(self) -> dict:
        updates = self.model_dump(exclude_unset=True)
        for required in ("description", "status"):
            if required in updates and updates[required] is None:
                updates.pop(required)
        if "owner" in updates:
            updates["owner"] = updates["owner"] or None
        return updates


class MeetingDetail(MeetingResponse):
    ai_outputs: List[AIOutputResponse] = []
    action_items: List[ActionItemResponse] = []
