"""SonarQube pre-build pipeline step."""

import os


def get_tool_version() -> str:
    """Get version with fallback for dev mode."""
    if version := os.environ.get("TOOL_VERSION"):
        return version
    try:
        from importlib.metadata import version as pkg_version

        return pkg_version("sonar-prebuild")
    except Exception:
        return "dev"


TOOL_VERSION = get_tool_version()
# Bump when the JSON summary printed by `sonar-prebuild begin --json` changes shape
# v1: Initial schema
REPORT_VERSION = "1"
