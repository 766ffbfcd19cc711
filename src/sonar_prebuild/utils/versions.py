"""Server version parsing."""

from dataclasses import dataclass

# First server release able to run the scanner in "issues" analysis mode
ISSUES_MODE_MIN_MAJOR = 5
ISSUES_MODE_MIN_MINOR = 2


@dataclass(frozen=True)
class ServerVersion:
    """Major/minor pair of a code-quality server version."""

    major: int = 0
    minor: int = 0

    @property
    def supports_issues_mode(self) -> bool:
        """True for 5.2 and above."""
        return self.major > ISSUES_MODE_MIN_MAJOR or (
            self.major >= ISSUES_MODE_MIN_MAJOR and self.minor >= ISSUES_MODE_MIN_MINOR
        )

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def _parse_token(token: str) -> int:
    """Integer value of a version token, 0 when not a plain number."""
    token = token.strip()
    if not token.isdigit():
        return 0
    try:
        return int(token)
    except ValueError:
        # isdigit() accepts some unicode digits that int() rejects
        return 0


def parse_version(raw: str | None) -> ServerVersion:
    """
    Parse a dotted version string into major/minor.

    Lenient: a missing or non-numeric token becomes 0, so malformed
    input such as "abc" parses as 0.0 rather than raising.

    Args:
        raw: Version string such as "5.6.1" (may be None or empty)

    Returns:
        ServerVersion with defaulted fields
    """
    if not raw:
        return ServerVersion()

    tokens = raw.split(".")
    major = _parse_token(tokens[0])
    minor = _parse_token(tokens[1]) if len(tokens) >= 2 else 0
    return ServerVersion(major=major, minor=minor)
