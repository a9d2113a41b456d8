"""
Repository Layer - Ports and Adapters Pattern

Usage:
    from meetnotes.repositories import get_meeting_repository

    meetings_repo = get_meeting_repository()
    meeting = meetings_repo.get_by_id("...")
    meetings_repo.create({"title": "Standup", "date": "2024-01-15"})
"""

from .base import BaseRepository, QueryOptions
from .meetings import MeetingRepository, SQLiteMeetingRepository
from .action_items import ActionItemRepository, SQLiteActionItemRepository
from .ai_outputs import AIOutputRepository, SQLiteAIOutputRepository


def get_meeting_repository() -> MeetingRepository:
    return SQLiteMeetingRepository()


def get_action_item_repository() -> ActionItemRepository:
    return SQLiteActionItemRepository()


def get_ai_output_repository() -> AIOutputRepository:
    return SQLiteAIOutputRepository()


__all__ = [
    "BaseRepository",
    "QueryOptions",
    "MeetingRepository",
    "SQLiteMeetingRepository",
    "get_meeting_repository",
    "ActionItemRepository",
    "SQLiteActionItemRepository",
    "get_action_item_repository",
    "AIOutputRepository",
    "SQLiteAIOutputRepository",
    "get_ai_output_repository",
]
