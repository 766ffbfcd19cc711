"""SonarQube web API client with a bounded retry policy."""

import base64
import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import requests

from sonar_prebuild.utils.validators import SonarEndpoint

logger = logging.getLogger(__name__)

SYSTEM_INFO_PATH = "api/system/info"

# Retry configuration
_retry_delay = float(os.environ.get("SONAR_RETRY_DELAY", "1.0"))  # seconds
_http_timeout_env = os.environ.get("SONAR_HTTP_TIMEOUT")
_http_timeout = float(_http_timeout_env) if _http_timeout_env else None  # None: requests default


class VersionFetchFailure(Exception):
    """Raised when the server version is still unknown after the retry."""

    def __init__(self, server_url: str, attempts: int = 0):
        super().__init__(
            f"Could not fetch the SonarQube server version. "
            f"Please check that the server at {server_url} is reachable "
            f"and the credentials are valid."
        )
        self.server_url = server_url
        self.attempts = attempts


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry: one initial attempt plus at most one retry."""

    max_attempts: int = 2
    delay_seconds: float = _retry_delay


@dataclass
class FetchOutcome:
    """Result of a fetch with the number of attempts it took."""

    value: str | None
    attempts: int

    @property
    def ok(self) -> bool:
        return bool(self.value)


def basic_auth_header(username: str, password: str) -> str:
    """Value for the Authorization header; either credential may be empty."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def fetch_with_retry(
    fetch_once: Callable[[], str | None],
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], None] = time.sleep,
    operation_name: str = "fetch",
) -> FetchOutcome:
    """
    Run fetch_once until it yields a non-empty value or attempts run out.

    Args:
        fetch_once: Zero-arg callable returning the value or None/"" on failure
        policy: Retry policy (default: 2 attempts, fixed delay)
        sleep: Sleep function, replaced in tests
        operation_name: Name for logging

    Returns:
        FetchOutcome with the last attempt's value (may be absent)
    """
    policy = policy or RetryPolicy()
    value: str | None = None
    attempts = 0

    for attempt in range(policy.max_attempts):
        if attempt > 0:
            logger.info(
                f"{operation_name}: Attempt {attempt} returned nothing. "
                f"Retrying in {policy.delay_seconds:.1f}s..."
            )
            sleep(policy.delay_seconds)

        attempts = attempt + 1
        value = fetch_once()
        if value:
            return FetchOutcome(value=value, attempts=attempts)

    logger.warning(f"{operation_name}: No result after {attempts} attempts")
    return FetchOutcome(value=value or None, attempts=attempts)


def _extract_version(body: Any) -> str | None:
    """Read SonarQube.Version from a system info body."""
    if not isinstance(body, dict):
        return None
    section = body.get("SonarQube")
    if not isinstance(section, dict):
        return None
    version = section.get("Version")
    if version is None:
        return None
    return str(version).strip() or None


def fetch_version_once(
    endpoint: SonarEndpoint,
    session: requests.Session | None = None,
) -> str | None:
    """
    Single GET against the system info endpoint.

    Network-level errors are logged and reported as an absent result.

    Returns:
        Version string or None
    """
    url = endpoint.api_url(SYSTEM_INFO_PATH)
    headers = {"Authorization": basic_auth_header(endpoint.username, endpoint.password)}
    http = session if session is not None else requests

    try:
        response = http.get(url, headers=headers, timeout=_http_timeout)
        response.raise_for_status()
        body = response.json()
    except requests.exceptions.RequestException as e:
        logger.warning(f"GET {url} failed: {type(e).__name__}: {e}")
        return None
    except ValueError:
        # Body was not JSON (e.g. a login page from a proxy)
        logger.warning(f"GET {url} returned a non-JSON body")
        return None

    version = _extract_version(body)
    if version is None:
        logger.warning(f"GET {url} returned no SonarQube.Version field")
    return version


def fetch_server_version(
    endpoint: SonarEndpoint,
    *,
    session: requests.Session | None = None,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchOutcome:
    """
    Fetch the server version, retrying once on an empty result.

    Args:
        endpoint: Server URL and credentials
        session: Optional requests session
        policy: Retry policy (default: 2 attempts, fixed delay)
        sleep: Sleep function, replaced in tests

    Returns:
        FetchOutcome whose value is a version string such as "5.6.1", or None
        when the server never answered. Callers treat None as fatal.
    """
    return fetch_with_retry(
        lambda: fetch_version_once(endpoint, session),
        policy=policy,
        sleep=sleep,
        operation_name=f"fetch_server_version({endpoint.url})",
    )
