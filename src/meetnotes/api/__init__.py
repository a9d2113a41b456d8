"""HTTP API for meetnotes."""
