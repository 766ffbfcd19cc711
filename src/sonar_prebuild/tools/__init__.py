"""Pre-build step tools."""

from sonar_prebuild.tools.analysis_mode import (
    AnalysisMode,
    ConfigurationConflict,
    ModeSelection,
    check_mode_conflict,
    recorded_mode,
    select_mode,
)
from sonar_prebuild.tools.begin_command import build_begin_args
from sonar_prebuild.tools.prebuild import PrebuildPlan, PrebuildSettings, prepare_begin, summarize
from sonar_prebuild.tools.scanner import run_scanner

__all__ = [
    "AnalysisMode",
    "ConfigurationConflict",
    "ModeSelection",
    "check_mode_conflict",
    "recorded_mode",
    "select_mode",
    "build_begin_args",
    "PrebuildPlan",
    "PrebuildSettings",
    "prepare_begin",
    "summarize",
    "run_scanner",
]
