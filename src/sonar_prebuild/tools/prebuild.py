"""Pre-build step: begin args, context variables and pull request analysis."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sonar_prebuild.data.context import (
    BREAK_BUILD_KEY,
    HOST_URL_KEY,
    PR_ANALYSIS_ENABLED_KEY,
    PipelineContext,
)
from sonar_prebuild.data.sonar_client import (
    SYSTEM_INFO_PATH,
    FetchOutcome,
    VersionFetchFailure,
    fetch_server_version,
)
from sonar_prebuild.tools.analysis_mode import AnalysisMode, check_mode_conflict, select_mode
from sonar_prebuild.tools.begin_command import build_begin_args
from sonar_prebuild.utils.report import build_meta, build_version_lookup
from sonar_prebuild.utils.sanitize import display_args
from sonar_prebuild.utils.validators import DatabaseParams, ProjectParams, SonarEndpoint
from sonar_prebuild.utils.versions import parse_version

logger = logging.getLogger(__name__)

VersionFetcher = Callable[[SonarEndpoint], FetchOutcome]


@dataclass(frozen=True)
class PrebuildSettings:
    """Inputs of the pre-build step."""

    endpoint: SonarEndpoint
    project: ProjectParams
    database: DatabaseParams = field(default_factory=DatabaseParams)
    additional_args: str = ""
    settings_file: str | None = None
    sources_dir: str | None = None
    break_build: bool = False
    pr_analysis: bool = False


@dataclass
class PrebuildPlan:
    """What the pre-build step decided; args hold unmasked secrets."""

    args: list[str]
    mode: AnalysisMode | None = None
    server_version: str | None = None
    fetch_attempts: int = 0
    checked_at: str | None = None


def store_parameters(settings: PrebuildSettings, context: PipelineContext) -> None:
    """Publish the server URL and the break-build flag for the post-build step."""
    context.set(HOST_URL_KEY, settings.endpoint.url)
    context.set(BREAK_BUILD_KEY, str(settings.break_build).lower())


def is_pr_analysis_enabled(settings: PrebuildSettings, context: PipelineContext) -> bool:
    """Enabled by the step input or by the automation system's variable."""
    return settings.pr_analysis or context.get_bool(PR_ANALYSIS_ENABLED_KEY)


def prepare_begin(
    settings: PrebuildSettings,
    context: PipelineContext,
    fetcher: VersionFetcher | None = None,
) -> PrebuildPlan:
    """
    Assemble the begin arguments and apply pull request analysis.

    Args:
        settings: Step inputs
        context: Pipeline context for cross-step variables
        fetcher: Version lookup returning a FetchOutcome (default: fetch_server_version)

    Returns:
        PrebuildPlan with the final argument list

    Raises:
        ConfigurationConflict: If the analysis mode is already set (before any network call)
        VersionFetchFailure: If the server version stays unknown after the retry
        FileNotFoundError: If the settings file does not exist
        ValueError: If additional arguments cannot be split
    """
    fetcher = fetcher or fetch_server_version

    logger.info("STEP_START: build_args")
    args = build_begin_args(
        settings.endpoint,
        settings.project,
        database=settings.database,
        additional_args=settings.additional_args,
        settings_file=settings.settings_file,
        sources_dir=settings.sources_dir,
    )
    logger.info("STEP_DONE: build_args")

    store_parameters(settings, context)
    plan = PrebuildPlan(args=args)

    if not is_pr_analysis_enabled(settings, context):
        return plan

    logger.info(
        "Pull request analysis is enabled for this build. The SonarQube analysis "
        "will not be stored and no quality gate will be enforced."
    )
    check_mode_conflict(args)

    logger.info("STEP_START: fetch_server_version")
    outcome = fetcher(settings.endpoint)
    plan.fetch_attempts = outcome.attempts
    plan.checked_at = datetime.utcnow().isoformat() + "Z"
    if not outcome.ok:
        logger.error("STEP_FAILED: fetch_server_version")
        raise VersionFetchFailure(settings.endpoint.url, attempts=outcome.attempts)
    logger.info("STEP_DONE: fetch_server_version")

    selection = select_mode(parse_version(outcome.value), True, context, existing_args=args)
    if selection is not None:
        plan.args = [*args, *selection.args]
        plan.mode = selection.mode
    plan.server_version = outcome.value
    return plan


def summarize(plan: PrebuildPlan, endpoint: SonarEndpoint, duration_ms: float | None = None) -> dict[str, Any]:
    """
    JSON-able report of a plan.

    Credentials in the command line are masked.
    """
    report: dict[str, Any] = {
        "meta": build_meta("prebuild", duration_ms),
        "server_url": endpoint.url,
        "command_line": display_args(plan.args),
        "pull_request_analysis": plan.mode is not None,
        "analysis_mode": plan.mode.value if plan.mode is not None else None,
        "server_version": plan.server_version,
    }
    if plan.fetch_attempts:
        report["version_lookup"] = build_version_lookup(
            endpoint.url,
            f"/{SYSTEM_INFO_PATH}",
            plan.fetch_attempts,
            plan.checked_at,
        )
    return report
