# src/meetnotes/api/v1/ai_outputs.py
"""
API v1 - AI output endpoints.

POST /meetings/{id}/ai/{summary|decisions|actions} returns the stored output
for the meeting's current notes, generating it first on a cache miss.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from .models import AIOutputResponse, AIOutputResult
from ...errors import EmptyNotesError, LLMConfigurationError, MeetingNotFoundError
from ...repositories import get_ai_output_repository, get_meeting_repository
from ...services.ai_generation import OUTPUT_TYPES, generate_ai_output

logger = logging.getLogger(__name__)

router = APIRouter()

FAILURE_LABELS = {
    "summary": "summary",
    "decisions": "decisions",
    "actions": "action items",
}


@router.get("/{meeting_id}/ai", response_model=List[AIOutputResponse])
def list_ai_outputs(meeting_id: str):
    """All stored AI outputs for a meeting, newest first."""
    try:
        exists = get_meeting_repository().exists(meeting_id)
        outputs = get_ai_output_repository().get_for_meeting(meeting_id) if exists else []
    except Exception as e:
        logger.error(f"Error fetching AI outputs for meeting {meeting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch AI outputs")

    if not exists:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return outputs


@router.post("/{meeting_id}/ai/{output_type}", response_model=AIOutputResult)
def generate_output(meeting_id: str, output_type: str):
    """
    Generate (or return the cached) summary, decisions, or action items.

    Action item generation also creates open action items from the reply.
    """
    if output_type not in OUTPUT_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown AI output type: {output_type}")

    try:
        record, cached = generate_ai_output(meeting_id, output_type)
    except MeetingNotFoundError:
        raise HTTPException(status_code=404, detail="Meeting not found")
    except EmptyNotesError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LLMConfigurationError as e:
        logger.error(f"AI provider not configured: {e}")
        raise HTTPException(status_code=503, detail="AI provider is not configured")
    except Exception as e:
        logger.error(f"Error generating {output_type} for meeting {meeting_id}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to generate {FAILURE_LABELS[output_type]}"
        )

    return {"cached": cached, **record}
