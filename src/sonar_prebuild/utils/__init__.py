"""Utility modules."""

from sonar_prebuild.utils.report import build_error_response, build_meta, build_version_lookup
from sonar_prebuild.utils.sanitize import display_args, mask_arg, mask_secrets, sanitize_text
from sonar_prebuild.utils.validators import (
    DatabaseParams,
    ProjectParams,
    SonarEndpoint,
    is_blank,
    is_file_path_specified,
)
from sonar_prebuild.utils.versions import ServerVersion, parse_version

__all__ = [
    "build_error_response",
    "build_meta",
    "build_version_lookup",
    "display_args",
    "mask_arg",
    "mask_secrets",
    "sanitize_text",
    "DatabaseParams",
    "ProjectParams",
    "SonarEndpoint",
    "is_blank",
    "is_file_path_specified",
    "ServerVersion",
    "parse_version",
]
