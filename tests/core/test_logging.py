import logging

from app.core.logging import RequestIdFilter, build_logging_config, request_id_var


def _record():
    return logging.LogRecord("app.test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_uses_current_request_id():
    token = request_id_var.set("req-42")
    try:
        record = _record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "req-42"
    finally:
        request_id_var.reset(token)


def test_filter_defaults_outside_requests():
    record = _record()
    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def test_filter_keeps_explicit_request_id():
    record = _record()
    record.request_id = "given"
    RequestIdFilter().filter(record)
    assert record.request_id == "given"


def test_test_environment_logs_to_console_only():
    config = build_logging_config()
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"]["app"]["handlers"] == ["console"]
