"""Clean-up of bot labels reported by user-agent signature matching."""

from __future__ import annotations

import re
from typing import Final

GENERIC_LABEL: Final[str] = "GoodBot"
_MIN_SIGNAL_CHARS: Final[int] = 2
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

# user-agent substring -> canonical label, for signatures the matcher truncates
_SUBSTRING_OVERRIDES: Final[tuple[tuple[str, str], ...]] = (
    ("LinkCheck by Siteimprove.com", "LinkCheck by Siteimprove.com"),
    ("Sogou web spider", "Sogou web spider"),
    ("Archive-It", "Archive-It"),
)
_PREFIX_OVERRIDES: Final[tuple[str, ...]] = ("PTST",)


def has_minimal_signal(label: str) -> bool:
    return len(_NON_ALNUM.sub("", label)) >= _MIN_SIGNAL_CHARS


def normalize_label(label: str | None, user_agent: str) -> str | None:
    """Return a trustworthy bot name for ``label`` matched in ``user_agent``."""

    if label is None or not has_minimal_signal(label):
        return None

    cleaned = label.strip()
    for needle, replacement in _SUBSTRING_OVERRIDES:
        if needle in user_agent:
            cleaned = replacement
    for prefix in _PREFIX_OVERRIDES:
        if cleaned.startswith(prefix):
            cleaned = prefix
    if cleaned == "Url" and "LarkUrl" in user_agent:
        cleaned = "LarkUrl"

    return None if cleaned == GENERIC_LABEL else cleaned
