"""
Scheduling Routes

Drives the run-in-background flow and output location checks on behalf of
the browser. Notifications the flow raises are returned in the response so
the UI can render the matching dialogs.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from ..services.notifications import CollectingNotifier
from ..services.output_location import get_previous_location_path, validate_output_location
from ..services.run_in_background import RunInBackgroundCommand, RunOutcome


router = APIRouter(prefix="/api/scheduling", tags=["Scheduling"])


class RunInBackgroundRequest(BaseModel):
    """Request to run a repository file in the background"""
    path: str = Field(..., min_length=1, description="Repository path of the file to run", examples=["/public/Sales.prpt"])
    output_name: Optional[str] = Field(None, description="Job name")
    output_location_path: Optional[str] = Field(None, description="Folder that receives the output")
    overwrite_file: Optional[str] = Field(None, pattern="^(true|false)$")
    date_format: Optional[str] = Field(None, description="Date format appended to the output name")
    active_perspective: Optional[str] = None


class RunInBackgroundResponse(BaseModel):
    outcome: RunOutcome
    events: List[Dict[str, Any]]


class OutputLocationRequest(BaseModel):
    path: Optional[str] = None


@router.post("/run-in-background", response_model=RunInBackgroundResponse)
async def run_in_background(request: RunInBackgroundRequest):
    """
    Run a file in the background.

    The outcome tells whether the job was submitted or the UI has to collect
    parameters first; errors come back as "error" events, not HTTP errors.
    """
    notifier = CollectingNotifier()
    command = RunInBackgroundCommand(notifier, active_perspective=request.active_perspective)
    command.set_output_name(request.output_name)
    command.set_output_location_path(request.output_location_path)
    command.set_overwrite_file(request.overwrite_file)
    command.set_date_format(request.date_format)

    outcome = await command.perform_operation(request.path)
    return {"outcome": outcome, "events": notifier.events}


@router.post("/output-location/validate")
async def check_output_location(request: OutputLocationRequest):
    """{"valid": null} for an empty path, otherwise whether the folder exists."""
    result: Dict[str, Optional[bool]] = {"valid": None}

    def on_success():
        result["valid"] = True

    def on_error():
        result["valid"] = False

    await validate_output_location(request.path, on_success, on_error)
    return result


@router.get("/output-location/previous")
def previous_output_location(path: str = Query(...)):
    return {"path": get_previous_location_path(path)}
