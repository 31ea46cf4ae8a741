from __future__ import annotations

import re

_INT_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def parse_task_id(raw: str | None) -> int | None:
    """Parse a task id typed at the console.

    Accepts optional surrounding whitespace and a sign followed by ASCII digits;
    rejects anything else (including `int()` extras such as `1_000` or non-ASCII
    digits) and values outside the signed 32-bit range. Returns None when invalid.
    """
    if raw is None or not _INT_RE.match(raw):
        return None
    value = int(raw.strip())
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def parse_completed(raw: str | None) -> bool | None:
    """Parse `true`/`false` (any case, surrounding whitespace ignored)."""
    value = (raw or "").strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


__all__ = ["INT32_MAX", "INT32_MIN", "parse_completed", "parse_task_id"]
