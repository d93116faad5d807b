"""Sleeper Draftbot - Slack draft announcer and lineup auditor."""

__version__ = "0.1.0"
