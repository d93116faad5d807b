"""API route handlers."""

from sleeper_draftbot.api.routes import slack, tasks

__all__ = ["slack", "tasks"]
