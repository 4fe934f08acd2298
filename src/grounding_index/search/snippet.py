"""Display snippets stored alongside each indexed document."""

from __future__ import annotations

import re


WHITESPACE_PATTERN = re.compile(r"\s+")
ELLIPSIS = "..."
DEFAULT_SNIPPET_LENGTH = 200


def build_summary_snippet(content: str, max_length: int = DEFAULT_SNIPPET_LENGTH) -> str:
    """Return the first ``max_length`` characters with whitespace collapsed.

    The prefix is cut before collapsing, so the result never exceeds
    ``max_length`` plus the ellipsis. The ellipsis is always appended, even
    for short or empty content.
    """

    prefix = content[:max_length]
    return WHITESPACE_PATTERN.sub(" ", prefix) + ELLIPSIS
