"""Shared pytest configuration and fixtures for the keplog test suite.

This module provides:
- Isolation from the real home directory, working directory and KEPLOG_* env
- Config store and environment fixtures
- A recording httpx.MockTransport for exercising the API client offline
"""
import json
import os
import sys
import tempfile
from pathlib import Path

import httpx
import pytest


# Add src/ to path so test modules can import the keplog package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

# Keep log files out of the real home before keplog.logging is imported
os.environ["XDG_DATA_HOME"] = tempfile.mkdtemp(prefix="keplog-test-logs-")

from keplog.utils.config_store import ConfigStore, Environment  # noqa: E402

KEPLOG_ENV_VARS = (
    "KEPLOG_PROJECT_ID",
    "KEPLOG_API_KEY",
    "KEPLOG_API_URL",
    "KEPLOG_RELEASE",
    "KEPLOG_LOG_LEVEL",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Run each test in an empty working directory with a throwaway home"""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()

    for name in KEPLOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def temp_dir(tmp_path):
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def make_environment(tmp_path):
    """Build an explicit Environment rooted in the test's temp directory"""

    def _make(variables=None, cwd=None, home=None):
        return Environment(
            variables=dict(variables or {}),
            cwd=Path(cwd) if cwd else tmp_path / "work",
            home=Path(home) if home else tmp_path / "home",
        )

    return _make


@pytest.fixture
def configured_store(make_environment, tmp_path):
    """ConfigStore with a local .keplog.json in the working directory"""
    work = tmp_path / "work"
    (work / ".keplog.json").write_text(
        json.dumps(
            {
                "projectId": "proj-123",
                "apiKey": "kep_test_key",
                "apiUrl": "https://api.example.test",
            }
        ),
        encoding="utf-8",
    )
    return ConfigStore(make_environment(cwd=work))


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served"""

    def __init__(self, handler):
        self.requests = []

        def _record(request):
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def recording_transport():
    """Factory for a RecordingTransport around a request handler"""
    return RecordingTransport


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
