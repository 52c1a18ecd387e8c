"""
UI notification port.

The scheduling flow never talks to a UI toolkit directly. It reports through
a NotificationPort. LoggingNotifier writes every event to the log;
CollectingNotifier, used by the HTTP surface, logs the same way and also
keeps the events to hand back to the browser.
"""
import logging
from typing import Any, Dict, List, Protocol

from ..models import ScheduleRequest


log = logging.getLogger("repo_bridge.notifications")


class NotificationPort(Protocol):
    def show_error(self, message: str) -> None: ...

    def show_info(self, title: str, message: str) -> None: ...

    def open_parameter_dialog(
        self,
        file_path: str,
        schedule_request: ScheduleRequest,
        email_config_valid: bool,
        schedules_perspective_active: bool,
    ) -> None: ...

    def open_email_dialog(self, file_path: str, schedule_request: ScheduleRequest) -> None: ...

    def create_output_location_dialog(self, solution_path: str, feedback: bool) -> None: ...

    def set_ok_button_text(self) -> None: ...

    def center_output_location_dialog(self) -> None: ...

    def collect_schedule_params(self, schedule_request: ScheduleRequest) -> None: ...


class LoggingNotifier:
    """Writes every notification to the log; dialogs are not opened."""

    def show_error(self, message):
        log.error("Error: %s", message)

    def show_info(self, title, message):
        log.info("%s: %s", title, message)

    def open_parameter_dialog(self, file_path, schedule_request, email_config_valid, schedules_perspective_active):
        log.info("Parameters required for %s", file_path)

    def open_email_dialog(self, file_path, schedule_request):
        log.info("Email options requested for %s", file_path)

    def create_output_location_dialog(self, solution_path, feedback):
        log.debug("Output location dialog for %s (feedback=%s)", solution_path, feedback)

    def set_ok_button_text(self):
        pass

    def center_output_location_dialog(self):
        pass

    def collect_schedule_params(self, schedule_request):
        pass


class CollectingNotifier(LoggingNotifier):
    """
    Records notifications as plain dicts, in call order, and logs them.

    Each event has an ``event`` key naming the port operation plus that
    operation's arguments.
    """

    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    def _record(self, event: str, **fields) -> None:
        self.events.append({"event": event, **fields})

    def show_error(self, message):
        super().show_error(message)
        self._record("error", message=message)

    def show_info(self, title, message):
        super().show_info(title, message)
        self._record("info", title=title, message=message)

    def open_parameter_dialog(self, file_path, schedule_request, email_config_valid, schedules_perspective_active):
        super().open_parameter_dialog(file_path, schedule_request, email_config_valid, schedules_perspective_active)
        self._record(
            "parameter_dialog",
            file_path=file_path,
            schedule_request=schedule_request.to_payload(),
            email_config_valid=email_config_valid,
            schedules_perspective_active=schedules_perspective_active,
        )

    def open_email_dialog(self, file_path, schedule_request):
        super().open_email_dialog(file_path, schedule_request)
        self._record("email_dialog", file_path=file_path, schedule_request=schedule_request.to_payload())

    def create_output_location_dialog(self, solution_path, feedback):
        super().create_output_location_dialog(solution_path, feedback)
        self._record("output_location_dialog", solution_path=solution_path, feedback=feedback)

    def set_ok_button_text(self):
        self._record("ok_button_text")

    def center_output_location_dialog(self):
        self._record("center_output_location_dialog")

    def collect_schedule_params(self, schedule_request):
        self._record("collect_schedule_params", schedule_request=schedule_request.to_payload())

    def of_type(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event"] == event]
