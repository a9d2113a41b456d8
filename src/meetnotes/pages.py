# src/meetnotes/pages.py
"""
Server-rendered pages.

Handles:
- Meeting list with search and a create form
- Meeting detail editor (notes autosave and AI tabs live in the template JS)
- Action item board with open/done filter and status toggle
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Form, Request, Query
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from .api.v1.models import MeetingCreate
from .repositories import (
    QueryOptions, get_action_item_repository, get_meeting_repository,
)
from .services.ai_generation import OUTPUT_TYPES, parse_decisions

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

BOARD_FILTERS = ("all", "open", "done")


def _latest_outputs(ai_outputs: list) -> dict:
    """Newest output per type; ai_outputs is already newest first."""
    latest = {}
    for output in ai_outputs:
        latest.setdefault(output["type"], output)
    return {t: latest.get(t) for t in OUTPUT_TYPES}


@router.get("/")
def index():
    return RedirectResponse(url="/meetings", status_code=302)


@router.get("/meetings")
def meetings_page(request: Request, q: Optional[str] = Query(None)):
    """Meeting list, most recent first, optionally filtered."""
    repo = get_meeting_repository()
    if q and q.strip():
        meetings = repo.search(q.strip(), limit=500)
    else:
        meetings = repo.get_all(QueryOptions(limit=500, order_by="date"))
    return templates.TemplateResponse(
        request,
        "meetings.html",
        {"meetings": meetings, "q": q or "", "error": None},
    )


@router.post("/meetings")
def create_meeting_page(
    request: Request,
    title: str = Form(""),
    date: str = Form(""),
    participants: str = Form(""),
    raw_notes: str = Form(""),
):
    """Create a meeting from the list page form."""
    try:
        meeting = MeetingCreate(
            title=title, date=date, participants=participants, raw_notes=raw_notes
        )
    except ValidationError as e:
        logger.info(f"Rejected meeting form: {e.error_count()} error(s)")
        meetings = get_meeting_repository().get_all(QueryOptions(limit=500, order_by="date"))
        return templates.TemplateResponse(
            request,
            "meetings.html",
            {"meetings": meetings, "q": "", "error": "Title and date are required"},
            status_code=400,
        )

    created = get_meeting_repository().create(meeting.to_record())
    return RedirectResponse(url=f"/meetings/{created['id']}", status_code=303)


@router.get("/meetings/{meeting_id}")
def meeting_detail_page(request: Request, meeting_id: str):
    """Meeting detail editor."""
    meeting = get_meeting_repository().get_detail(meeting_id)
    if not meeting:
        return templates.TemplateResponse(
            request, "not_found.html", {"what": "Meeting"}, status_code=404
        )

    latest = _latest_outputs(meeting["ai_outputs"])
    decisions = parse_decisions(latest["decisions"]["content"]) if latest["decisions"] else []
    return templates.TemplateResponse(
        request,
        "meeting_detail.html",
        {"meeting": meeting, "latest": latest, "decisions": decisions},
    )


@router.get("/action-items")
def action_items_page(request: Request, filter: str = Query("all")):
    """Action item board across all meetings."""
    if filter not in BOARD_FILTERS:
        filter = "all"

    repo = get_action_item_repository()
    status = None if filter == "all" else filter
    items = repo.get_all(QueryOptions(limit=1000, filters={"status": status}))
    counts = {
        "open": repo.get_count({"status": "open"}),
        "done": repo.get_count({"status": "done"}),
    }
    counts["total"] = counts["open"] + counts["done"]

    return templates.TemplateResponse(
        request,
        "action_items.html",
        {"items": items, "filter": filter, "filters": BOARD_FILTERS, "counts": counts},
    )


@router.post("/action-items/{item_id}/toggle")
def toggle_action_item(item_id: str, next: str = Form("/action-items")):
    """Flip an action item between open and done, then go back."""
    repo = get_action_item_repository()
    item = repo.get_by_id(item_id)
    if item:
        repo.update(item_id, {"status": "open" if item["status"] == "done" else "done"})
    else:
        logger.warning(f"Toggle requested for missing action item {item_id}")

    # Only redirect within the app
    if not next.startswith("/") or next.startswith("//"):
        next = "/action-items"
    return RedirectResponse(url=next, status_code=303)
