"""Command-line entry point for the SonarQube pre-build step."""

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from time import perf_counter

from sonar_prebuild import TOOL_VERSION
from sonar_prebuild.data.context import PipelineContext
from sonar_prebuild.data.sonar_client import VersionFetchFailure
from sonar_prebuild.tools.analysis_mode import ConfigurationConflict, recorded_mode
from sonar_prebuild.tools.prebuild import PrebuildSettings, prepare_begin, summarize
from sonar_prebuild.tools.scanner import run_scanner
from sonar_prebuild.utils.report import build_error_response
from sonar_prebuild.utils.sanitize import display_args
from sonar_prebuild.utils.validators import DatabaseParams, ProjectParams, SonarEndpoint

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the step."""
    level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def _flag_default(name: str) -> bool:
    return (_env(name) or "").strip().lower() == "true"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sonar-prebuild",
        description="Prepare and run the SonarQube scanner 'begin' step of a build pipeline.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {TOOL_VERSION}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log verbosity (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL or INFO.",
    )
    parser.add_argument(
        "--context-dir",
        default=None,
        help="Pipeline context directory. Defaults to PIPELINE_CONTEXT_DIR.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    begin = subparsers.add_parser("begin", help="Assemble the begin arguments and run the scanner.")
    begin.add_argument("--host-url", default=_env("SONAR_HOST_URL"), help="SonarQube server URL.")
    begin.add_argument("--login", default=_env("SONAR_LOGIN", ""), help="Server username or token.")
    begin.add_argument("--password", default=_env("SONAR_PASSWORD", ""), help="Server password.")
    begin.add_argument("--project-key", default=_env("SONAR_PROJECT_KEY"))
    begin.add_argument("--project-name", default=_env("SONAR_PROJECT_NAME"))
    begin.add_argument("--project-version", default=_env("SONAR_PROJECT_VERSION"))
    begin.add_argument("--db-url", default=_env("SONAR_DB_URL", ""), help="JDBC URL (pre-5.2 servers).")
    begin.add_argument("--db-username", default=_env("SONAR_DB_USERNAME", ""))
    begin.add_argument("--db-password", default=_env("SONAR_DB_PASSWORD", ""))
    begin.add_argument(
        "--additional-args",
        default=_env("SONAR_ADDITIONAL_ARGS", ""),
        help="Extra scanner arguments, split with shell quoting rules.",
    )
    begin.add_argument("--settings-file", default=_env("SONAR_SETTINGS_FILE"), help="SonarQube.Analysis.xml path.")
    begin.add_argument(
        "--sources-dir",
        default=_env("BUILD_SOURCESDIRECTORY"),
        help="Build sources root. A settings file equal to it counts as unset.",
    )
    begin.add_argument(
        "--break-build",
        action="store_true",
        default=_flag_default("SONAR_BREAK_BUILD"),
        help="Ask the post-build step to fail the build on a failed quality gate.",
    )
    begin.add_argument(
        "--pr-analysis",
        action="store_true",
        default=False,
        help="Force pull request analysis (also enabled by PullRequestSonarQubeCodeAnalysisEnabled).",
    )
    begin.add_argument("--scanner", default=_env("SONAR_SCANNER_PATH"), help="Scanner executable.")
    begin.add_argument("--dry-run", action="store_true", help="Print the command line, do not run the scanner.")
    begin.add_argument("--json", action="store_true", help="Print a JSON report instead of plain text.")

    subparsers.add_parser("mode", help="Print the analysis mode recorded by an earlier begin step.")
    return parser


def _settings_from_args(args: argparse.Namespace) -> PrebuildSettings:
    return PrebuildSettings(
        endpoint=SonarEndpoint(url=args.host_url, username=args.login, password=args.password),
        project=ProjectParams(
            key=args.project_key, name=args.project_name, version=args.project_version
        ),
        database=DatabaseParams(
            url=args.db_url, username=args.db_username, password=args.db_password
        ),
        additional_args=args.additional_args,
        settings_file=args.settings_file,
        sources_dir=args.sources_dir,
        break_build=args.break_build,
        pr_analysis=args.pr_analysis,
    )


def _fail(args: argparse.Namespace, error_type: str, message: str, server_url: str | None = None) -> int:
    print(message, file=sys.stderr)
    if getattr(args, "json", False):
        print(json.dumps(build_error_response(error_type, message, server_url), indent=2))
    return 1


def run_begin(args: argparse.Namespace, context: PipelineContext) -> int:
    start_time = perf_counter()
    logger.info("STEP_START: prebuild")

    try:
        settings = _settings_from_args(args)
        plan = prepare_begin(settings, context)
    except ConfigurationConflict as e:
        logger.error("STEP_FAILED: prebuild")
        return _fail(args, "configuration_conflict", str(e))
    except VersionFetchFailure as e:
        logger.error("STEP_FAILED: prebuild")
        return _fail(args, "version_unavailable", str(e), server_url=e.server_url)
    except (ValueError, FileNotFoundError) as e:
        logger.error("STEP_FAILED: prebuild")
        return _fail(args, "invalid_input", str(e))

    duration_ms = (perf_counter() - start_time) * 1000
    if args.json:
        print(json.dumps(summarize(plan, settings.endpoint, duration_ms), indent=2, default=str))
    else:
        print(display_args(plan.args))
    logger.info("STEP_DONE: prebuild")

    if args.dry_run:
        return 0

    logger.info("STEP_START: run_scanner")
    try:
        exit_code = run_scanner(args.scanner, plan.args)
    except FileNotFoundError as e:
        logger.error("STEP_FAILED: run_scanner")
        return _fail(args, "scanner_not_found", str(e))
    except OSError as e:
        logger.error("STEP_FAILED: run_scanner")
        return _fail(args, "scanner_failed", f"Could not start the scanner: {e}")
    logger.info("STEP_DONE: run_scanner")
    return exit_code


def run_mode(context: PipelineContext) -> int:
    mode = recorded_mode(context)
    print(mode.value if mode is not None else "none")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI as the process entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    with PipelineContext(args.context_dir) as context:
        if args.command == "mode":
            return run_mode(context)
        return run_begin(args, context)


if __name__ == "__main__":
    sys.exit(main())
