"""
Scheduled Task Routes

Endpoints an external scheduler calls to run the periodic jobs.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from sleeper_draftbot.api.dependencies import RuntimeDep

logger = logging.getLogger(__name__)

router = APIRouter()


class TaskResult(BaseModel):
    task: str
    status: str = "completed"


@router.post(
    "/draft-monitor",
    response_model=TaskResult,
    summary="Run the draft monitor",
    description="Post new picks for every registered draft and advance their baselines.",
)
async def run_draft_monitor(runtime: RuntimeDep) -> TaskResult:
    logger.info("Draft monitor triggered over HTTP")
    await runtime.tracker.check_draft_for_updates()
    return TaskResult(task="draft-monitor")


@router.post(
    "/roster-check",
    response_model=TaskResult,
    summary="Run the roster check",
    description="Audit the starting lineups of every registered league.",
)
async def run_roster_check(runtime: RuntimeDep) -> TaskResult:
    logger.info("Roster check triggered over HTTP")
    await runtime.roster_audit.check_all_channels(runtime.store, runtime.messenger)
    return TaskResult(task="roster-check")
