"""Tests for port selection and server startup."""

import socket
from unittest.mock import Mock, patch

import pytest

from src.talentdesk import server
from src.talentdesk.server import (
    PortUnavailableError,
    find_available_port,
    is_port_in_use,
    resolve_port,
)

HOST = "127.0.0.1"


@pytest.fixture
def occupied_port():
    """Listen on an ephemeral port for the duration of the test."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((HOST, 0))
        sock.listen(1)
        yield sock.getsockname()[1]


def test_listening_port_is_in_use(occupied_port: int) -> None:
    assert is_port_in_use(occupied_port, HOST) is True


def test_free_port_is_not_in_use() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((HOST, 0))
        port = sock.getsockname()[1]
    assert is_port_in_use(port, HOST) is False


def test_find_available_port_skips_busy_ports() -> None:
    busy = {5001, 5002}
    with patch.object(server, "is_port_in_use", side_effect=lambda port, host: port in busy):
        assert find_available_port(5001, max_attempts=10, host=HOST) == 5003


def test_find_available_port_gives_up_after_max_attempts() -> None:
    with patch.object(server, "is_port_in_use", return_value=True) as mock_probe:
        with pytest.raises(PortUnavailableError):
            find_available_port(5001, max_attempts=3, host=HOST)

    assert [c.args[0] for c in mock_probe.call_args_list] == [5001, 5002, 5003]


def test_resolve_port_keeps_free_configured_port() -> None:
    with patch.object(server, "is_port_in_use", return_value=False):
        assert resolve_port(5001, HOST, 10) == 5001


def test_resolve_port_starts_search_after_busy_port() -> None:
    with patch.object(server, "is_port_in_use", side_effect=lambda port, host: port == 5001):
        assert resolve_port(5001, HOST, 10) == 5002


def test_run_exits_when_no_port_available() -> None:
    with (
        patch.object(server, "configure_logging"),
        patch.object(server, "resolve_port", side_effect=PortUnavailableError("none")),
        patch.object(server.uvicorn, "Server") as mock_server,
    ):
        with pytest.raises(SystemExit) as exc_info:
            server.run()

    assert exc_info.value.code == 1
    mock_server.assert_not_called()


def test_run_serves_on_resolved_port() -> None:
    uvicorn_server = Mock(started=True)
    with (
        patch.object(server, "configure_logging"),
        patch.object(server, "resolve_port", return_value=5005),
        patch.object(server.uvicorn, "Server", return_value=uvicorn_server) as mock_server,
    ):
        server.run()

    config = mock_server.call_args.args[0]
    assert config.port == 5005
    uvicorn_server.run.assert_called_once()


def test_run_exits_when_startup_fails() -> None:
    uvicorn_server = Mock(started=False)
    with (
        patch.object(server, "configure_logging"),
        patch.object(server, "resolve_port", return_value=5005),
        patch.object(server.uvicorn, "Server", return_value=uvicorn_server),
    ):
        with pytest.raises(SystemExit) as exc_info:
            server.run()

    assert exc_info.value.code == 1
