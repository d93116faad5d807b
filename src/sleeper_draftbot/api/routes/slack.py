"""
Slack API Routes

Receives Slack Events API and slash command requests.
"""

from fastapi import APIRouter, Request

from sleeper_draftbot.api.dependencies import SlackHandlerDep

router = APIRouter()


@router.post(
    "/events",
    summary="Slack events",
    description="Endpoint for Slack events, mentions and the /lastpick command.",
)
async def slack_events(request: Request, handler: SlackHandlerDep):
    return await handler.handle(request)
