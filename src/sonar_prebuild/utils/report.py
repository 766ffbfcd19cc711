"""JSON report blocks printed by `sonar-prebuild begin --json`."""

from typing import Any

from sonar_prebuild import REPORT_VERSION, TOOL_VERSION


def build_meta(step: str, duration_ms: float | None = None) -> dict[str, Any]:
    """Tool/report version header, with the step's run time when known."""
    meta: dict[str, Any] = {
        "tool_version": TOOL_VERSION,
        "report_version": REPORT_VERSION,
        "step": step,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_version_lookup(
    server_url: str,
    endpoint_path: str,
    attempts: int,
    checked_at: str | None,
) -> dict[str, Any]:
    """
    Describe how the server version was obtained.

    Args:
        server_url: Server base URL
        endpoint_path: API path that was queried
        attempts: Requests made, 2 when the single retry was needed
        checked_at: UTC timestamp of the lookup

    Returns:
        Dict for the report's "version_lookup" field
    """
    return {
        "server_url": server_url,
        "endpoint": endpoint_path,
        "attempts": attempts,
        "retried": attempts > 1,
        "checked_at": checked_at,
    }


def build_error_response(
    error_type: str,
    message: str,
    server_url: str | None = None,
) -> dict[str, Any]:
    """
    Failure report for a step that aborted.

    Args:
        error_type: configuration_conflict, version_unavailable, invalid_input,
            scanner_not_found or scanner_failed
        message: Human-readable error message
        server_url: Server the step talked to (version_unavailable only)
    """
    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "message": message,
        "meta": build_meta("prebuild"),
    }
    if server_url is not None:
        response["server_url"] = server_url
    return response
