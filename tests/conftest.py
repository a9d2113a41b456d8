# tests/conftest.py
"""
Pytest configuration and fixtures for the meetnotes test suite.

Provides:
- A temporary SQLite database per test
- FastAPI test client
- A mocked model provider so no test reaches a real API
- Factories and assertion helpers
"""

import os
import tempfile
from typing import Any, Dict, Generator, List
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

# Set test environment before imports
os.environ["MEETNOTES_ENV"] = "test"

from meetnotes import db as app_db
from meetnotes.llm import AIResponse
from meetnotes.main import app
from meetnotes.repositories import (
    get_action_item_repository,
    get_meeting_repository,
)


# ============== Database Fixtures ==============

@pytest.fixture()
def temp_db(monkeypatch) -> Generator[str, None, None]:
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Point app DB to temp file
    monkeypatch.setattr(app_db, "DB_PATH", path)

    # Init schema
    app_db.init_db()

    yield path

    for suffix in ("", "-wal", "-shm"):
        if os.path.exists(path + suffix):
            os.remove(path + suffix)


@pytest.fixture()
def seeded_meeting(temp_db) -> Dict[str, Any]:
    """One meeting with notes and two action items."""
    meeting = get_meeting_repository().create({
        "title": "Test Standup",
        "date": "2024-01-15",
        "participants": "Alice, Bob",
        "raw_notes": "Alice will update the roadmap. We decided to ship on Friday.",
    })
    get_action_item_repository().create_many(meeting["id"], [
        {"description": "Update the roadmap", "owner": "Alice", "due_date": "2024-01-20"},
        {"description": "Book the retro room"},
    ])
    return meeting


# ============== FastAPI Client Fixtures ==============

@pytest.fixture()
def client(temp_db) -> Generator[TestClient, None, None]:
    """FastAPI test client over an empty temp database."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def client_with_data(seeded_meeting) -> Generator[TestClient, None, None]:
    """FastAPI test client with one pre-loaded meeting."""
    with TestClient(app) as test_client:
        yield test_client


# ============== Model Provider Mock ==============

class FakeModel:
    """Stands in for meetnotes.llm.generate, returning canned replies per type."""

    def __init__(self):
        self.replies: Dict[str, str] = {
            "summary": "The team agreed to ship on Friday.",
            "decisions": '["Ship on Friday"]',
            "actions": '[{"description": "Update the roadmap", "owner": "Alice", "dueDate": "2024-01-20"}]',
        }
        self.calls: List[tuple] = []

    def __call__(self, output_type: str, raw_notes: str, model: str = None) -> AIResponse:
        self.calls.append((output_type, raw_notes))
        return AIResponse(
            content=self.replies[output_type],
            prompt_tokens=120,
            completion_tokens=30,
            model="claude-3-5-sonnet-20241022",
        )


@pytest.fixture
def mock_llm() -> Generator[FakeModel, None, None]:
    """Patch the model call used by AI generation."""
    fake = FakeModel()
    with patch("meetnotes.llm.generate", side_effect=fake):
        yield fake


# ============== Sample Data Factories ==============

@pytest.fixture
def meeting_factory():
    """Factory for creating test meeting payloads."""
    def _create_meeting(
        title: str = "Test Meeting",
        date: str = "2024-01-15",
        participants: str = "Alice, Bob",
        raw_notes: str = "Test notes",
    ) -> Dict[str, Any]:
        return {
            "title": title,
            "date": date,
            "participants": participants,
            "raw_notes": raw_notes,
        }
    return _create_meeting


# ============== Assertion Helpers ==============

@pytest.fixture
def assert_response_success():
    """Helper to assert successful API responses."""
    def _assert(response, status_code: int = 200):
        assert response.status_code == status_code, f"Expected {status_code}, got {response.status_code}: {response.text}"
        return response.json()
    return _assert


@pytest.fixture
def assert_response_error():
    """Helper to assert error API responses."""
    def _assert(response, status_code: int = 400, detail: str = None):
        assert response.status_code == status_code, response.text
        if detail:
            assert detail in response.json().get("detail", "")
        return response.json()
    return _assert
