"""
Run In Background command.

Runs a repository file once, in the background, through the scheduler:

1. ask the platform whether the file takes parameters
2. ask whether outbound email is configured
3. either hand off to a parameter/email dialog, or submit the job directly

Each step awaits the previous one. A transport error or a non-200 answer
shows an error through the notification port and ends the chain; nothing is
retried and nothing is raised to the caller.
"""
import logging
from enum import Enum
from typing import Optional

import httpx

from ..messages import get_string
from ..models import ScheduleRequest
from .environment import (
    NO_CACHE_HEADERS,
    get_fully_qualified_url,
    get_scheduler_plugin_context_url,
    open_client,
)
from .notifications import NotificationPort
from .paths import encode_path_segment


log = logging.getLogger("repo_bridge.run_in_background")

ACTION_FILE_SUFFIX = "xaction"
SCHEDULES_PERSPECTIVE = "schedules.perspective"

# Email delivery for background runs is switched off; the platform's answer
# is fetched but not used.
EMAIL_CONFIG_ENABLED = False


class RunOutcome(str, Enum):
    PARAMETERS_REQUIRED = "parameters_required"
    EMAIL_DIALOG = "email_dialog"
    SUBMITTED = "submitted"
    FAILED = "failed"


class _StepFailed(Exception):
    """Internal: a step already reported its failure; stop the chain."""


def is_action_file(url_path: Optional[str]) -> bool:
    return url_path is not None and url_path.endswith(ACTION_FILE_SUFFIX)


def has_parameters(response_text: str, is_action: bool) -> bool:
    """
    Whether the parameter check answer means the file needs user input.

    Action files return a rendered form: any non-hidden <input> counts.
    Everything else returns a boolean literal; anything other than "true"
    (case-insensitive) reads as False.
    """
    if is_action:
        inputs = response_text.count("<input")
        hidden_inputs = response_text.count('type="hidden"')
        return inputs - hidden_inputs > 0
    return response_text.lower() == "true"


class RunInBackgroundCommand:
    """
    Background run of one repository file.

    The output options are set by the UI before ``perform_operation``; empty
    values are sent as null.

    Args:
        notifier: Where errors, results and dialog requests go
        context_url: Deployment context root (defaults to CONTEXT_URL)
        client: Optional shared AsyncClient
        active_perspective: Id of the UI perspective the command runs from
    """

    def __init__(
        self,
        notifier: NotificationPort,
        context_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        active_perspective: Optional[str] = None,
    ):
        self.notifier = notifier
        self.context_url = get_fully_qualified_url(context_url)
        self.scheduler_context_url = get_scheduler_plugin_context_url(context_url)
        self._client = client
        self.active_perspective = active_perspective

        self.repository_file_path: Optional[str] = None
        self.solution_path: Optional[str] = None
        self.output_location_path: Optional[str] = None
        self.output_name: Optional[str] = None
        self.overwrite_file: Optional[str] = None
        self.date_format: Optional[str] = None

    def set_solution_path(self, solution_path: Optional[str]) -> None:
        self.solution_path = solution_path

    def set_output_location_path(self, output_location_path: Optional[str]) -> None:
        self.output_location_path = output_location_path

    def set_output_name(self, output_name: Optional[str]) -> None:
        self.output_name = output_name

    def set_overwrite_file(self, overwrite_file: Optional[str]) -> None:
        """``overwrite_file`` is the string "true" or "false"."""
        self.overwrite_file = overwrite_file

    def set_date_format(self, date_format: Optional[str]) -> None:
        self.date_format = date_format

    @property
    def schedules_perspective_active(self) -> bool:
        # The parameter dialog reads this as True outside the schedules perspective.
        return self.active_perspective != SCHEDULES_PERSPECTIVE

    def build_schedule_request(self, file_path: str) -> ScheduleRequest:
        return ScheduleRequest(
            input_file=file_path,
            append_date_format=self.date_format or None,
            overwrite_file=self.overwrite_file or None,
            job_name=self.output_name or None,
            output_file=self.output_location_path or None,
            run_in_background=True,
        )

    def parameters_url(self, file_path: str) -> str:
        url_path = encode_path_segment(file_path)
        if is_action_file(url_path):
            return f"{self.context_url}api/repos/{url_path}/parameterUi"
        return f"{self.context_url}api/repo/files/{url_path}/parameterizable"

    def _server_error(self, status_code: int) -> None:
        self.notifier.show_error(f"{get_string('serverErrorColon')} {status_code}")

    async def _send(self, client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one step's request; report and stop on failure."""
        headers = {**NO_CACHE_HEADERS, **kwargs.pop("headers", {})}
        try:
            response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            log.warning("%s %s failed: %s", method, url, e)
            self.notifier.show_error(str(e))
            raise _StepFailed()

        if response.status_code != 200:
            log.warning("%s %s returned %s", method, url, response.status_code)
            self._server_error(response.status_code)
            raise _StepFailed()
        return response

    async def _check_parameters(self, client: httpx.AsyncClient, file_path: str) -> bool:
        response = await self._send(
            client, "GET", self.parameters_url(file_path), headers={"accept": "text/plain"}
        )
        return has_parameters(response.text, is_action_file(encode_path_segment(file_path)))

    async def _check_email_config(self, client: httpx.AsyncClient) -> bool:
        await self._send(
            client, "GET", f"{self.context_url}api/emailconfig/isValid", headers={"accept": "text/plain"}
        )
        return EMAIL_CONFIG_ENABLED

    async def _submit(self, client: httpx.AsyncClient, schedule_request: ScheduleRequest) -> None:
        await self._send(
            client,
            "POST",
            f"{self.scheduler_context_url}api/scheduler/job",
            json=schedule_request.to_payload(),
            headers={"Content-Type": "application/json"},
        )

    async def show_dialog(self, feedback: bool) -> Optional[bool]:
        """
        Open the output location dialog for ``solution_path``.

        Returns:
            Whether the file has parameters, or None if the check failed
        """
        self.notifier.create_output_location_dialog(self.solution_path, feedback)

        async with open_client(self._client) as client:
            try:
                has_params = await self._check_parameters(client, self.solution_path)
            except _StepFailed:
                return None

        if not has_params:
            self.notifier.set_ok_button_text()
        self.notifier.center_output_location_dialog()
        return has_params

    async def perform_operation(self, repository_file_path: Optional[str] = None) -> RunOutcome:
        """
        Run the background chain for ``repository_file_path``.

        When no path is given, the path of the previous call is reused.

        Raises:
            ValueError: If no path was ever given
        """
        if repository_file_path is not None:
            self.repository_file_path = repository_file_path
        file_path = self.repository_file_path
        if not file_path:
            raise ValueError("No repository file path to run")

        async with open_client(self._client) as client:
            try:
                has_params = await self._check_parameters(client, file_path)
                schedule_request = self.build_schedule_request(file_path)
                email_config_valid = await self._check_email_config(client)

                if has_params:
                    self.notifier.open_parameter_dialog(
                        file_path,
                        schedule_request,
                        email_config_valid,
                        self.schedules_perspective_active,
                    )
                    return RunOutcome.PARAMETERS_REQUIRED

                if email_config_valid:
                    self.notifier.open_email_dialog(file_path, schedule_request)
                    return RunOutcome.EMAIL_DIALOG

                self.notifier.collect_schedule_params(schedule_request)
                await self._submit(client, schedule_request)
            except _StepFailed:
                return RunOutcome.FAILED

        log.info("Background execution started for %s", file_path)
        self.notifier.show_info(get_string("runInBackground"), get_string("backgroundExecutionStarted"))
        return RunOutcome.SUBMITTED
