"""Validation utilities and parameter classes."""

import os
from dataclasses import dataclass

VALID_URL_SCHEMES = ("http://", "https://")


@dataclass(frozen=True)
class SonarEndpoint:
    """Immutable server connection details. Used for the begin args + version lookup."""

    url: str
    username: str = ""
    password: str = ""

    def __post_init__(self) -> None:
        # Normalize url: strip whitespace and trailing slashes
        url = (self.url or "").strip().rstrip("/")
        if not url:
            raise ValueError("Server URL is required")
        if not url.lower().startswith(VALID_URL_SCHEMES):
            raise ValueError(
                f"Invalid server URL '{self.url}'. Must start with one of: {VALID_URL_SCHEMES}"
            )

        object.__setattr__(self, "url", url)
        object.__setattr__(self, "username", self.username or "")
        object.__setattr__(self, "password", self.password or "")

    def api_url(self, path: str) -> str:
        """Absolute URL for a server API path."""
        return f"{self.url}/{path.lstrip('/')}"


@dataclass(frozen=True)
class ProjectParams:
    """Project identity passed to the scanner as /k: /n: /v:."""

    key: str
    name: str
    version: str

    def __post_init__(self) -> None:
        for field_name in ("key", "name", "version"):
            value = (getattr(self, field_name) or "").strip()
            if not value:
                raise ValueError(f"Project {field_name} is required")
            object.__setattr__(self, field_name, value)


@dataclass(frozen=True)
class DatabaseParams:
    """Optional JDBC settings, only used by servers older than 5.2."""

    url: str = ""
    username: str = ""
    password: str = ""


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def is_file_path_specified(path: str | None, sources_dir: str | None = None) -> bool:
    """
    Check whether an optional file input was actually filled in.

    Pipeline agents pass the sources root for an empty file input, so a
    path equal to the sources directory counts as "not specified".

    Args:
        path: File path from the step inputs (may be None)
        sources_dir: Sources root of the build (may be None)

    Returns:
        True if the path names a file the user chose
    """
    if is_blank(path):
        return False
    if is_blank(sources_dir):
        return True

    normalized_path = os.path.normcase(os.path.abspath(path.strip())).rstrip("\\/")
    normalized_sources = os.path.normcase(os.path.abspath(sources_dir.strip())).rstrip("\\/")
    return normalized_path != normalized_sources
