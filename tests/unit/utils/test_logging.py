import io
import json
import logging

from discrete_powerlaw.utils.logging import JSONFormatter, configure_logging, get_logger


def test_json_formatter_keeps_known_fields_only() -> None:
    record = logging.LogRecord("dpl", logging.INFO, __file__, 1, "fitted", None, None)
    record.alpha = 2.5
    record.unrelated = "x"
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "fitted"
    assert payload["alpha"] == 2.5
    assert "unrelated" not in payload


def test_configure_logging_writes_json_with_context() -> None:
    stream = io.StringIO()
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging(run_id="run-1", component="test", stream=stream)
        get_logger("dpl.test").info("hello", extra={"replicas": 3})
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["run_id"] == "run-1"
    assert payload["component"] == "test"
    assert payload["replicas"] == 3
