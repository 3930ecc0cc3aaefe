"""Process entry point: port selection and uvicorn serving."""

import logging
import socket
import sys

import uvicorn

from src.talentdesk.config import settings
from src.talentdesk.logging_config import configure_logging

logger = logging.getLogger(__name__)


class PortUnavailableError(RuntimeError):
    """Raised when no free port is found within the probing window."""


def is_port_in_use(port: int, host: str = "0.0.0.0") -> bool:
    """
    Check whether a TCP port can be bound on the given host.

    Args:
        port: Port to probe
        host: Interface to bind (default: all interfaces)

    Returns:
        True if binding fails, False if the port is free
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        # Match what uvicorn does so TIME_WAIT sockets do not count as busy
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError:
            return True
    return False


def find_available_port(start_port: int, max_attempts: int = 10, host: str = "0.0.0.0") -> int:
    """
    Find the first free port starting at ``start_port``.

    Args:
        start_port: First port to probe
        max_attempts: Number of consecutive ports to try
        host: Interface to bind

    Returns:
        A free port

    Raises:
        PortUnavailableError: If every probed port is in use

    Example:
        >>> find_available_port(5002)
        5002
    """
    port = start_port
    for _ in range(max_attempts):
        if not is_port_in_use(port, host):
            return port
        port += 1

    raise PortUnavailableError(f"Could not find an available port after {max_attempts} attempts")


def resolve_port(port: int, host: str, max_attempts: int) -> int:
    """Return ``port`` if free, otherwise the next free port after it."""
    if not is_port_in_use(port, host):
        return port

    logger.warning(f"Port {port} is already in use.")
    alternative = find_available_port(port + 1, max_attempts, host)
    logger.info(f"Using alternative port: {alternative}")
    return alternative


def run() -> None:
    """
    Start the API server.

    Uvicorn handles SIGINT/SIGTERM: it stops accepting connections, waits for
    in-flight requests, runs the application shutdown (closing MongoDB) and
    returns. Port exhaustion or a failed startup exits with status 1.
    """
    configure_logging(settings.log_level)

    try:
        port = resolve_port(settings.port, settings.host, settings.port_max_attempts)
    except PortUnavailableError as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)

    config = uvicorn.Config(
        "src.talentdesk.main:app",
        host=settings.host,
        port=port,
        log_config=None,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
    )
    server = uvicorn.Server(config)

    logger.info(f"Starting server at http://localhost:{port}")
    server.run()

    if not server.started:
        logger.error("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    run()
