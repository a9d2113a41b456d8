# src/meetnotes/api/v1/__init__.py
"""
API v1 - Versioned REST API endpoints.

- Meetings CRUD
- AI outputs (summary, decisions, action items) cached by notes hash
- Action item board
"""

from fastapi import APIRouter

from .meetings import router as meetings_router
from .ai_outputs import router as ai_outputs_router
from .action_items import router as action_items_router

router = APIRouter(prefix="/api/v1", tags=["v1"])

router.include_router(meetings_router, prefix="/meetings", tags=["meetings"])
router.include_router(ai_outputs_router, prefix="/meetings", tags=["ai"])
router.include_router(action_items_router, prefix="/action-items", tags=["action-items"])
