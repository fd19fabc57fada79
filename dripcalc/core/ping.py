"""Health-check payload for the API."""

from dripcalc import __version__

SERVICE_NAME = "dripcalc"


def get_ping_message() -> str:
    return "pong"


def get_service_status() -> dict:
    """Return the static health-check body."""
    return {"message": get_ping_message(), "service": SERVICE_NAME, "version": __version__}
