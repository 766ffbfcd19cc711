"""Data layer: server API access and the shared pipeline context."""

from sonar_prebuild.data.context import (
    ANALYSIS_MODE_KEY,
    BREAK_BUILD_KEY,
    HOST_URL_KEY,
    INCREMENTAL_MODE_KEY,
    PR_ANALYSIS_ENABLED_KEY,
    PipelineContext,
)
from sonar_prebuild.data.sonar_client import (
    FetchOutcome,
    RetryPolicy,
    VersionFetchFailure,
    basic_auth_header,
    fetch_server_version,
    fetch_with_retry,
)

__all__ = [
    # Context
    "ANALYSIS_MODE_KEY",
    "BREAK_BUILD_KEY",
    "HOST_URL_KEY",
    "INCREMENTAL_MODE_KEY",
    "PR_ANALYSIS_ENABLED_KEY",
    "PipelineContext",
    # Server API
    "FetchOutcome",
    "RetryPolicy",
    "VersionFetchFailure",
    "basic_auth_header",
    "fetch_server_version",
    "fetch_with_retry",
]
