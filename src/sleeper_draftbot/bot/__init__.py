"""Slack command surface."""

from sleeper_draftbot.bot.app import create_slack_app
from sleeper_draftbot.bot.commands import dispatch, parse_command

__all__ = ["create_slack_app", "dispatch", "parse_command"]
