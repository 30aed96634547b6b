"""Translation of SQL LIKE patterns into regular expressions."""

from __future__ import annotations

import functools
import re


@functools.lru_cache(maxsize=None)
def like_regexp(pattern: str) -> re.Pattern:
    """Compile a LIKE pattern: ``%`` is any run, ``_`` is any one character.

    Other characters are used as they are; the whole text must match.
    """
    body = "".join(
        ".*" if ch == "%" else "." if ch == "_" else ch for ch in pattern
    )
    return re.compile(f"^{body}\\Z")