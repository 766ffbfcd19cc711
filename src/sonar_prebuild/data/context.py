"""Pipeline context shared between otherwise independent build steps."""

import logging
import os
import re
from typing import Any

import diskcache

logger = logging.getLogger(__name__)

# Keys written by the pre-build step and read by the post-build step.
# Credentials are never stored here.
HOST_URL_KEY = "SonarQube.HostUrl"
BREAK_BUILD_KEY = "SonarQube.Internal.BreakBuild"
ANALYSIS_MODE_KEY = "SonarQube.Internal.AnalysisMode"
INCREMENTAL_MODE_KEY = "SonarQube.Internal.IncrementalMode"

# Set by the automation system when pull request analysis is turned on
PR_ANALYSIS_ENABLED_KEY = "PullRequestSonarQubeCodeAnalysisEnabled"


def env_name(key: str) -> str:
    """Environment variable name the pipeline agent uses for a context key."""
    return re.sub(r"[.\s]", "_", key).upper()


class PipelineContext:
    """
    String-keyed, string-valued store visible to every step of a pipeline run.

    Writes go to an on-disk cache so a later step running in another
    process can read them. Reads fall back to the process environment,
    where the automation system exposes its own variables.
    """

    def __init__(self, store_dir: str | None = None):
        if store_dir is None:
            store_dir = os.environ.get("PIPELINE_CONTEXT_DIR", ".pipeline/context")
        self.store_dir = store_dir
        self.cache: diskcache.Cache = diskcache.Cache(store_dir)

    def set(self, key: str, value: Any) -> None:
        """Store str(value) under key. Fire-and-forget."""
        self.cache.set(key, "" if value is None else str(value))
        logger.debug(f"context: set {key}")

    def get(self, key: str, default: str | None = None) -> str | None:
        """
        Get a context value.

        Args:
            key: Context key, e.g. "SonarQube.HostUrl"
            default: Returned when neither the store nor the environment has it

        Returns:
            Stored value, else the environment value, else default
        """
        value = self.cache.get(key)
        if value is not None:
            return value
        return os.environ.get(env_name(key), default)

    def get_bool(self, key: str) -> bool:
        """True only for a case-insensitive "true"."""
        return (self.get(key) or "").strip().lower() == "true"

    def exists(self, key: str) -> bool:
        """Check if key was written to the store."""
        return key in self.cache

    def clear(self) -> None:
        """Clear all stored values."""
        self.cache.clear()

    def close(self) -> None:
        self.cache.close()

    def __enter__(self) -> "PipelineContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
