import logging

from repo_bridge.messages import get_string
from repo_bridge.models import ScheduleRequest
from repo_bridge.services.notifications import CollectingNotifier, LoggingNotifier


def test_logging_notifier_writes_errors_and_results(caplog):
    notifier = LoggingNotifier()

    with caplog.at_level(logging.INFO, logger="repo_bridge.notifications"):
        notifier.show_error("Server Error: 500")
        notifier.show_info("Run In Background", "The background execution has started.")
        notifier.open_parameter_dialog("/public/a.prpt", ScheduleRequest(input_file="/public/a.prpt"), False, False)

    messages = [r.getMessage() for r in caplog.records]
    assert "Error: Server Error: 500" in messages
    assert "Run In Background: The background execution has started." in messages
    assert "Parameters required for /public/a.prpt" in messages
    assert caplog.records[0].levelno == logging.ERROR


def test_collecting_notifier_keeps_call_order():
    notifier = CollectingNotifier()
    request = ScheduleRequest(input_file="/public/a.prpt", job_name="a")

    notifier.create_output_location_dialog("/public/a.prpt", True)
    notifier.open_email_dialog("/public/a.prpt", request)

    assert [e["event"] for e in notifier.events] == ["output_location_dialog", "email_dialog"]
    assert notifier.events[1]["schedule_request"]["jobName"] == "a"
    assert notifier.events[1]["schedule_request"]["outputFile"] is None


def test_unknown_message_key_falls_back_to_key():
    assert get_string("serverErrorColon") == "Server Error:"
    assert get_string("no.such.key") == "no.such.key"
