"""Fixtures for command tests: commands wired to an offline API client."""
import pytest

from keplog.api.client import KeplogClient


@pytest.fixture
def wire_command(mocker, recording_transport):
    """Patch a command's create_client to talk to a RecordingTransport"""

    def _wire(cmd, handler):
        transport = recording_transport(handler)
        client = KeplogClient(
            api_url="https://api.example.test",
            api_key="kep_test_key",
            project_id="proj-123",
            transport=transport,
        )
        mocker.patch.object(cmd, "create_client", return_value=client)
        return transport

    return _wire
