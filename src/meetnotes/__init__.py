"""meetnotes - meeting notes with AI summaries, decisions, and action items."""

__version__ = "0.1.0"
