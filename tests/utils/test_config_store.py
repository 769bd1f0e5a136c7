import json
import os

import pytest

from keplog.utils.config_store import ConfigStore, Environment, KeplogConfig


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def work(tmp_path):
    return tmp_path / "work"


@pytest.fixture
def home(tmp_path):
    return tmp_path / "home"


def test_local_config_wins_over_environment(make_environment, work):
    _write_json(work / ".keplog.json", {"projectId": "A", "apiKey": "K"})
    env = make_environment({"KEPLOG_PROJECT_ID": "B", "KEPLOG_API_KEY": "env-key"})

    config = ConfigStore(env).get_config()

    assert config.project_id == "A"
    assert config.api_key == "K"


def test_environment_fills_fields_missing_from_file(make_environment, work):
    _write_json(work / ".keplog.json", {"projectId": "A"})
    env = make_environment({"KEPLOG_API_KEY": "env-key"})

    config = ConfigStore(env).get_config()

    assert config.project_id == "A"
    assert config.api_key == "env-key"


def test_default_api_url_without_any_source(make_environment):
    config = ConfigStore(make_environment()).get_config()

    assert config.api_url == "https://api.keplog.io"
    assert config.project_id is None
    assert config.api_key is None


def test_api_url_from_environment(make_environment):
    env = make_environment({"KEPLOG_API_URL": "https://x"})

    assert ConfigStore(env).get_config().api_url == "https://x"


def test_empty_environment_values_are_unset(make_environment):
    env = make_environment({"KEPLOG_PROJECT_ID": "", "KEPLOG_API_URL": ""})

    config = ConfigStore(env).get_config()

    assert config.project_id is None
    assert config.api_url == "https://api.keplog.io"


def test_find_local_config_walks_up(make_environment, work):
    nested = work / "a" / "b" / "c"
    nested.mkdir(parents=True)
    _write_json(work / ".keplog.json", {"projectId": "root"})

    store = ConfigStore(make_environment(cwd=nested))

    assert store.find_local_config_file() == work / ".keplog.json"
    assert store.get_config().project_id == "root"


def test_nearest_local_config_wins(make_environment, work):
    nested = work / "a" / "b"
    nested.mkdir(parents=True)
    _write_json(work / ".keplog.json", {"projectId": "outer"})
    _write_json(work / "a" / ".keplog.json", {"projectId": "inner"})

    store = ConfigStore(make_environment(cwd=nested))

    assert store.get_config().project_id == "inner"


def test_find_local_config_none_found(make_environment, work):
    store = ConfigStore(make_environment())

    assert store.find_local_config_file(work) is None
    assert store.has_local_config() is False


def test_global_config_used_when_no_local(make_environment, home):
    _write_json(home / ".keplogrc", {"projectId": "global", "apiKey": "g"})

    store = ConfigStore(make_environment())

    assert store.get_config().project_id == "global"
    assert store.get_config_source() == "global"


def test_files_are_not_merged(make_environment, work, home):
    _write_json(work / ".keplog.json", {"projectId": "local"})
    _write_json(home / ".keplogrc", {"projectId": "global", "apiKey": "g"})

    config = ConfigStore(make_environment()).get_config()

    assert config.project_id == "local"
    assert config.api_key is None


def test_malformed_local_config_reads_empty(make_environment, work, mocker):
    warning = mocker.patch("keplog.utils.config_store.warning")
    (work / ".keplog.json").write_text("{not json", encoding="utf-8")

    store = ConfigStore(make_environment())

    assert store.read_config() == KeplogConfig()
    warning.assert_called()


def test_malformed_local_config_falls_back_to_global(make_environment, work, home, mocker):
    mocker.patch("keplog.utils.config_store.warning")
    (work / ".keplog.json").write_text("[1, 2]", encoding="utf-8")
    _write_json(home / ".keplogrc", {"projectId": "global"})

    store = ConfigStore(make_environment())

    assert store.read_config().project_id == "global"


def test_numeric_values_are_stringified(make_environment, work):
    _write_json(work / ".keplog.json", {"projectId": 42, "apiKey": "k"})

    assert ConfigStore(make_environment()).get_config().project_id == "42"


def test_invalid_utf8_local_config_falls_back_to_global(make_environment, work, home, mocker):
    warning = mocker.patch("keplog.utils.config_store.warning")
    (work / ".keplog.json").write_bytes(b'{"projectId": "\xff\xfe"}')
    _write_json(home / ".keplogrc", {"projectId": "global"})

    store = ConfigStore(make_environment())

    assert store.read_config().project_id == "global"
    assert store.get_config_source() == "global"
    warning.assert_called()


def test_non_text_values_are_ignored(make_environment, work):
    _write_json(work / ".keplog.json", {"projectId": "A", "apiKey": False, "apiUrl": ["x"]})
    store = ConfigStore(make_environment({"KEPLOG_API_KEY": "env-key"}))

    config = store.get_config()

    assert config.api_key == "env-key"
    assert config.api_url == "https://api.keplog.io"


def test_config_source(make_environment, work):
    store = ConfigStore(make_environment())
    assert store.get_config_source() == "environment"

    _write_json(work / ".keplog.json", {"projectId": "A"})
    assert store.get_config_source() == "local"


def test_write_local_config_format(make_environment, work):
    store = ConfigStore(make_environment())

    path = store.write_local_config(
        KeplogConfig(project_id="A", api_key="K", api_url="https://api.keplog.io")
    )

    assert path == work / ".keplog.json"
    text = path.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '\n  "projectId": "A"' in text
    assert json.loads(text) == {
        "projectId": "A",
        "apiKey": "K",
        "apiUrl": "https://api.keplog.io",
    }


def test_write_then_read_round_trip(make_environment):
    store = ConfigStore(make_environment())
    config = KeplogConfig(project_id="A", api_key="K", api_url="https://u", project_name="Web")

    store.write_local_config(config)

    assert store.read_config() == config


def test_write_global_config_accepts_mapping(make_environment, home):
    store = ConfigStore(make_environment())

    store.write_global_config({"projectId": "G", "apiKey": "K"})

    assert json.loads((home / ".keplogrc").read_text()) == {"projectId": "G", "apiKey": "K"}
    assert store.has_global_config() is True


def test_write_replaces_whole_file(make_environment, work):
    _write_json(work / ".keplog.json", {"projectId": "A", "projectName": "Old"})
    store = ConfigStore(make_environment())

    store.write_local_config({"projectId": "B"})

    assert json.loads((work / ".keplog.json").read_text()) == {"projectId": "B"}


def test_delete_missing_files_do_not_raise(make_environment):
    store = ConfigStore(make_environment())

    store.delete_local_config()
    store.delete_global_config()


def test_delete_local_config(make_environment, work):
    _write_json(work / ".keplog.json", {"projectId": "A"})
    store = ConfigStore(make_environment())

    store.delete_local_config()

    assert not (work / ".keplog.json").exists()


def test_default_store_reads_process_state(isolated_environment, monkeypatch):
    monkeypatch.setenv("KEPLOG_PROJECT_ID", "from-env")
    store = ConfigStore()

    assert store.get_config().project_id == "from-env"

    monkeypatch.setenv("KEPLOG_PROJECT_ID", "changed")
    assert store.get_config().project_id == "changed"


def test_environment_from_os(isolated_environment, monkeypatch):
    monkeypatch.setenv("KEPLOG_RELEASE", "v2")

    env = Environment.from_os()

    assert env.get("KEPLOG_RELEASE") == "v2"
    assert env.cwd == isolated_environment
    assert os.fspath(env.home).endswith("home")
