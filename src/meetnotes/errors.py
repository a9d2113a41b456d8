"""Domain exceptions raised below the HTTP layer."""


class MeetnotesError(Exception):
    """Base class for meetnotes errors."""


class MeetingNotFoundError(MeetnotesError):
    def __init__(self, meeting_id: str):
        self.meeting_id = meeting_id
        super().__init__("Meeting not found")


class EmptyNotesError(MeetnotesError):
    """Raised when AI generation is requested for a meeting without notes."""


class LLMConfigurationError(MeetnotesError):
    """Raised when the configured model provider has no API key."""
