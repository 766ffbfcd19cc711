"""Pull request analysis mode selection."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sonar_prebuild.data.context import (
    ANALYSIS_MODE_KEY,
    INCREMENTAL_MODE_KEY,
    PipelineContext,
)
from sonar_prebuild.utils.versions import ServerVersion

logger = logging.getLogger(__name__)

ANALYSIS_MODE_PROPERTY = "sonar.analysis.mode"
REPORT_EXPORT_PATH = "sonar-report.json"


class ConfigurationConflict(Exception):
    """Raised when the command line already sets the analysis mode."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or f"Error: {ANALYSIS_MODE_PROPERTY} seems to be set already. "
            "Please check the properties of SonarQube build tasks and try again."
        )


class AnalysisMode(str, Enum):
    """Scanner analysis mode used for pull request builds."""

    ISSUES = "issues"  # 5.2+ servers
    INCREMENTAL = "incremental"  # older servers


@dataclass(frozen=True)
class ModeSelection:
    """Chosen mode and the scanner arguments that enable it."""

    mode: AnalysisMode
    args: list[str]


def mode_args(mode: AnalysisMode) -> list[str]:
    """Scanner arguments for a mode."""
    args = [f"/d:{ANALYSIS_MODE_PROPERTY}={mode.value}"]
    if mode is AnalysisMode.ISSUES:
        args.append(f"/d:sonar.report.export.path={REPORT_EXPORT_PATH}")
    return args


def check_mode_conflict(existing_args: Sequence[str] | str | None) -> None:
    """
    Fail if the analysis mode is already part of the command line.

    Must run before the server version lookup so a conflict aborts
    without any network call.

    Raises:
        ConfigurationConflict: If sonar.analysis.mode is present
    """
    if not existing_args:
        return
    if isinstance(existing_args, str):
        existing_args = [existing_args]
    if any(ANALYSIS_MODE_PROPERTY in arg for arg in existing_args):
        raise ConfigurationConflict()


def select_mode(
    version: ServerVersion,
    feature_enabled: bool,
    context: PipelineContext,
    existing_args: Sequence[str] = (),
) -> ModeSelection | None:
    """
    Pick the analysis mode for a pull request build.

    Args:
        version: Parsed server version
        feature_enabled: Whether pull request analysis is on
        context: Pipeline context; the chosen mode is recorded here
        existing_args: Scanner arguments built so far

    Returns:
        ModeSelection, or None when the feature is off (nothing appended, nothing recorded)

    Raises:
        ConfigurationConflict: If existing_args already sets the analysis mode
    """
    check_mode_conflict(existing_args)

    if not feature_enabled:
        return None

    if version.supports_issues_mode:
        mode = AnalysisMode.ISSUES
    else:
        mode = AnalysisMode.INCREMENTAL

    context.set(ANALYSIS_MODE_KEY, mode.value)
    context.set(INCREMENTAL_MODE_KEY, str(mode is AnalysisMode.INCREMENTAL).lower())
    logger.info(f"Server {version} -> {mode.value} analysis mode")

    return ModeSelection(mode=mode, args=mode_args(mode))


def recorded_mode(context: PipelineContext) -> AnalysisMode | None:
    """Mode recorded by an earlier step, or None when none was chosen."""
    value = context.get(ANALYSIS_MODE_KEY)
    if not value:
        return None
    try:
        return AnalysisMode(value.strip().lower())
    except ValueError:
        logger.warning(f"Ignoring unknown analysis mode in context: {value!r}")
        return None
