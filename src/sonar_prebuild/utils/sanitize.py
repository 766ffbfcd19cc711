"""Text sanitization utilities."""

import re
import shlex
from collections.abc import Sequence

MASK = "******"

# Arguments whose value after "=" is a credential
_SECRET_ARG_RE = re.compile(
    r"^(?P<prefix>/d:sonar\.(?:login|password|jdbc\.password)=)",
    re.IGNORECASE,
)


def sanitize_text(text: str | None, max_length: int | None = None) -> str | None:
    """
    Sanitize untrusted text before it reaches logs or stdout.

    Removes control characters and, when max_length is given, truncates.

    Args:
        text: Text to sanitize (may be None)
        max_length: Maximum length before truncation (None: never truncate)

    Returns:
        Sanitized text or None if input was None
    """
    if text is None:
        return None

    # Remove control characters (including \r, \x00-\x1f, \x7f-\x9f)
    text = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", text)

    if max_length is not None and len(text) > max_length:
        text = text[:max_length] + "..."

    return text.strip()


def mask_arg(arg: str) -> str:
    """Mask the value of a single credential argument; other arguments pass through."""
    match = _SECRET_ARG_RE.match(arg)
    if match:
        return match.group("prefix") + MASK
    return sanitize_text(arg)


def mask_secrets(args: Sequence[str]) -> list[str]:
    """
    Mask credential values in scanner arguments.

    Each argument is handled on its own, so quotes or spaces inside a
    secret cannot shift what gets masked.

    Args:
        args: Scanner arguments, one element per argument

    Returns:
        New list with login/password values replaced
    """
    return [mask_arg(arg) for arg in args]


def display_args(args: Sequence[str]) -> str:
    """Masked, shell-quoted command line for logs and stdout."""
    return shlex.join(mask_secrets(args))
