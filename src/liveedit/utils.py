"""Utility functions for liveedit"""

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .consts import OPTIONAL_MARKERS, PARAM_ACCESS_CODE

logger = logging.getLogger(__name__)


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize(sensitive: str | None, keep_chars: int = 2) -> str:
    """Mask sensitive information for logging.

    Args:
        sensitive: The sensitive string to mask (e.g., access code)
        keep_chars: Number of leading and trailing characters to keep

    Returns:
        Masked string with middle characters replaced by asterisks.

    Examples:
        >>> sanitize("ABC-1234-XYZ")
        'AB***YZ'
        >>> sanitize(None)
        '***'
    """
    if not sensitive:
        return "***"

    if len(sensitive) <= keep_chars * 2:
        return "***"

    return f"{sensitive[:keep_chars]}***{sensitive[-keep_chars:]}"


def mask_url(url: str) -> str:
    """Mask the access code query parameter of a service URL for logging."""
    parts = urlsplit(url)
    if not parts.query:
        return url

    query = [
        (k, sanitize(v) if k == PARAM_ACCESS_CODE else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*,")))


def is_optional(mandatory: Optional[str]) -> bool:
    """A component is optional when its mandatory flag is "false" or "no".

    An absent flag means the schema default, which is mandatory.
    """
    return mandatory in OPTIONAL_MARKERS


def fill_missing(values: dict[str, Any]) -> dict[str, Any]:
    """Replace every None value with an empty string.

    Used to build undo baselines: an empty string is sent to the service and
    clears a value, while None is never sent.
    """
    return {k: "" if v is None else v for k, v in values.items()}


def full_form_component_id(form_component_id: str, atl_iteration_index: Optional[int]) -> str:
    if atl_iteration_index is None:
        return form_component_id
    return f"{atl_iteration_index}_{form_component_id}"


def parse_non_negative(raw: str) -> str:
    """Parse a leading integer the way a number input does, "" when invalid."""
    digits = ""
    for i, ch in enumerate(raw.strip()):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break

    try:
        value = int(digits)
    except ValueError:
        return ""
    return str(value) if value >= 0 else ""
