"""Account name rules shared by users and organizations."""

from __future__ import annotations

import re

from org_directory.exceptions import ValidationError

MAX_NAME_LENGTH = 255

RESERVED_NAMES = frozenset(
    {
        ".",
        "..",
        "-",
        "api",
        "assets",
        "css",
        "explore",
        "favicon.ico",
        "img",
        "install",
        "issues",
        "js",
        "less",
        "new",
        "org",
        "plugins",
        "pulls",
        "raw",
        "repo",
        "stars",
        "template",
        "user",
    }
)
RESERVED_SUFFIXES = (".keys",)

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")


def validate_account_name(name: str) -> str:
    """Validate an account name and return it stripped.

    Parameters
    ----------
    name : str
        Requested user or organization name.

    Returns
    -------
    str
        Name with surrounding whitespace removed.
    """
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Name must not be empty")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name must be at most {MAX_NAME_LENGTH} characters")

    lowered = cleaned.lower()
    if lowered in RESERVED_NAMES:
        raise ValidationError(f"Name is reserved: {cleaned!r}")
    if lowered.endswith(RESERVED_SUFFIXES):
        raise ValidationError(f"Name pattern is not allowed: {cleaned!r}")
    if not _NAME_PATTERN.match(cleaned):
        raise ValidationError(
            f"Name may only contain alphanumerics, '-', '_' and '.': {cleaned!r}"
        )
    return cleaned
