"""External API clients."""

from sleeper_draftbot.clients.slack import SlackMessenger
from sleeper_draftbot.clients.sleeper import SleeperAPIError, SleeperClient

__all__ = ["SleeperClient", "SleeperAPIError", "SlackMessenger"]
