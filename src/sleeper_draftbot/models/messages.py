"""
Slack message payloads.

Every payload carries a plain-text fallback and a (possibly empty) block
sequence, tagged by ``kind`` so callers can tell the layouts apart.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class SlackMessage(BaseModel):
    """Base payload: fallback text plus Block Kit blocks."""

    text: str
    blocks: list[dict[str, Any]] = Field(default_factory=list)

    def to_slack(self) -> dict[str, Any]:
        """Render as keyword arguments for ``chat_postMessage``/``say``."""
        message: dict[str, Any] = {"text": self.text}
        if self.blocks:
            message["blocks"] = self.blocks
        return message


class TextMessage(SlackMessage):
    kind: Literal["text"] = "text"


class SinglePickMessage(SlackMessage):
    kind: Literal["single_pick"] = "single_pick"
    pick_no: int | None = None


class MultiPickMessage(SlackMessage):
    kind: Literal["multi_pick"] = "multi_pick"
    total_new: int
    shown: int


class RosterReportMessage(SlackMessage):
    kind: Literal["roster_report"] = "roster_report"
    league_id: str


MessagePayload = Annotated[
    Union[TextMessage, SinglePickMessage, MultiPickMessage, RosterReportMessage],
    Field(discriminator="kind"),
]


def section(text: str) -> dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def fields(*texts: str) -> dict[str, Any]:
    return {"type": "section", "fields": [{"type": "mrkdwn", "text": t} for t in texts]}


def divider() -> dict[str, Any]:
    return {"type": "divider"}


def context(text: str) -> dict[str, Any]:
    return {"type": "context", "elements": [{"type": "mrkdwn", "text": text}]}
