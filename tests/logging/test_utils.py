import os
from datetime import datetime, timedelta

from keplog.logging.utils import (
    sanitize_data,
    sanitize_dict,
    sanitize_list,
    sanitize_string,
    cleanup_old_logs,
    get_log_directory,
)


def test_sanitize_dict_masks_sensitive_key():
    data = {"api_key": "supersecretvalue", "name": "john"}
    result = sanitize_dict(data, ("api_key",))

    assert result["api_key"] == "supe...alue"
    assert result["name"] == "john"


def test_sanitize_dict_short_secret_fully_masked():
    result = sanitize_dict({"apiKey": "short"}, ("apikey",))

    assert result["apiKey"] == "***"


def test_sanitize_list_masks_nested_data():
    data = [{"password": "secret"}, {"x": 1}]
    result = sanitize_list(data, ("password",))

    assert result[0]["password"] == "***"
    assert result[1]["x"] == 1


def test_sanitize_data_handles_string_patterns():
    text = "Bearer abcdefghijklmnop"
    result = sanitize_data(text, ("token",))

    assert result == "Bearer ***"


def test_sanitize_string_url_key():
    url = "https://example.com?key=abcdef&release=v1"
    result = sanitize_string(url, ("key",))

    assert result == "https://example.com?key=***&release=v1"


def test_cleanup_old_logs_removes_old_files(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()

    old_file = log_dir / "keplog.log.2026-01-01"
    new_file = log_dir / "keplog.log.2026-10-17"
    unrelated = log_dir / "other.log.2026-01-01"

    for path in (old_file, new_file, unrelated):
        path.write_text("entry")

    old_time = (datetime.now() - timedelta(days=40)).timestamp()
    new_time = (datetime.now() - timedelta(days=1)).timestamp()

    os.utime(old_file, (old_time, old_time))
    os.utime(new_file, (new_time, new_time))
    os.utime(unrelated, (old_time, old_time))

    removed = cleanup_old_logs(log_dir, retention_days=7)

    assert removed == 1
    assert not old_file.exists()
    assert new_file.exists()
    assert unrelated.exists()


def test_cleanup_old_logs_no_dir(tmp_path):
    removed = cleanup_old_logs(tmp_path / "missing", retention_days=7)
    assert removed == 0


def test_get_log_directory_delegates_to_config(mocker, tmp_path):
    mocker.patch(
        "keplog.logging.config.get_log_directory",
        return_value=tmp_path,
    )

    result = get_log_directory()
    assert result == tmp_path
