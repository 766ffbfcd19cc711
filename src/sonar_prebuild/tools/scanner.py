"""Scanner process invocation."""

import logging
import shutil
import subprocess
from collections.abc import Sequence

from sonar_prebuild.utils.sanitize import display_args

logger = logging.getLogger(__name__)

DEFAULT_SCANNER = "MSBuild.SonarQube.Runner.exe"


def resolve_scanner(executable: str | None) -> str:
    """
    Locate the scanner executable.

    Raises:
        FileNotFoundError: If it is neither a path nor on PATH
    """
    executable = (executable or DEFAULT_SCANNER).strip()
    found = shutil.which(executable)
    if found is None:
        raise FileNotFoundError(f"Scanner executable not found: {executable}")
    return found


def run_scanner(executable: str | None, args: Sequence[str]) -> int:
    """
    Run the scanner with the assembled arguments.

    Args:
        executable: Scanner path or name on PATH
        args: Arguments as built by build_begin_args, one element per argument

    Returns:
        Scanner exit code
    """
    scanner = resolve_scanner(executable)

    logger.info(f"Running: {scanner} {display_args(args)}")
    completed = subprocess.run([scanner, *args], check=False)
    if completed.returncode != 0:
        logger.error(f"Scanner exited with code {completed.returncode}")
    return completed.returncode
