import logging

from keplog.logging.formatters import KeplogFormatter, APICallFormatter


def _record(name="keplog.test", level=logging.INFO, msg="hello"):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_keplog_formatter_basic_format():
    formatter = KeplogFormatter(include_timestamps=False)

    output = formatter.format(_record())

    assert output == "INFO [keplog.test] hello"


def test_keplog_formatter_sanitizes_msg():
    formatter = KeplogFormatter(include_timestamps=False)

    output = formatter.format(_record(msg={"apiKey": "kep_live_1234567890"}))

    assert "kep_live_1234567890" not in output
    assert "kep_...7890" in output


def test_keplog_formatter_leaves_plain_values():
    formatter = KeplogFormatter(include_timestamps=False, sanitize_sensitive=False)

    output = formatter.format(_record(msg={"apiKey": "secret-value"}))

    assert "secret-value" in output


def test_api_call_formatter_basic():
    formatter = APICallFormatter()
    record = _record(name="keplog.api", level=logging.DEBUG, msg="")
    record.api_method = "GET"
    record.api_url = "https://api.keplog.io/api/v1/cli/projects/p1/releases"
    record.api_status = 200
    record.api_duration = 0.123

    output = formatter.format(record)

    assert "GET https://api.keplog.io/api/v1/cli/projects/p1/releases -> 200" in output
    assert "(123.0ms)" in output


def test_api_call_formatter_includes_error():
    formatter = APICallFormatter()
    record = _record(name="keplog.api", level=logging.ERROR, msg="")
    record.api_method = "POST"
    record.api_url = "https://api.keplog.io/upload?api_key=abc123"
    record.api_status = None
    record.api_duration = 0.5
    record.api_error = "Connection refused"

    output = formatter.format(record)

    assert "-> ---" in output
    assert "api_key=***" in output
    assert "abc123" not in output
    assert output.endswith("    Error: Connection refused")


def test_api_call_formatter_includes_request_size():
    formatter = APICallFormatter()
    record = _record(name="keplog.api", level=logging.DEBUG, msg="")
    record.api_method = "POST"
    record.api_url = "https://api.keplog.io/api/v1/cli/projects/p1/sourcemaps"
    record.api_status = 200
    record.api_duration = 1.0
    record.api_request_size = 4096

    output = formatter.format(record)

    assert output.endswith("-> 200 (1000.0ms) sent 4096 bytes")
