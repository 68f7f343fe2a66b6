"""
Sheet Name Sanitizing

Makes arbitrary result names acceptable as xlsx sheet names.
"""
from __future__ import annotations

import re
from typing import Iterable


MAX_SHEET_NAME = 31
MAX_SUFFIX = 1000
DEFAULT_SHEET_NAME = "DEFAULT"
RESERVED_SHEET_NAMES = {"history"}

_INVALID_CHARS_RE = re.compile(r"[/\\?*:\[\]]")


def sanitize_sheet_name(name: str, existing: Iterable[str] = ()) -> str:
    """
    Return a valid sheet name for ``name`` that is not in ``existing``.

    Removes ``/ \\ ? * : [ ]``, strips surrounding apostrophes, avoids the
    reserved name "History" and truncates to 31 characters. Collisions get a
    numeric suffix ("Name 1", "Name 2", ...), truncating the base to fit.
    """
    taken = set(existing)
    base = _INVALID_CHARS_RE.sub("", name or "").strip().strip("'").strip()
    if not base:
        base = DEFAULT_SHEET_NAME
    if base.lower() in RESERVED_SHEET_NAMES:
        base = f"{base}_"
    base = base[:MAX_SHEET_NAME].rstrip("'")

    if base not in taken:
        return base
    for i in range(1, MAX_SUFFIX):
        suffix = f" {i}"
        candidate = base[: MAX_SHEET_NAME - len(suffix)].rstrip("'") + suffix
        if candidate not in taken:
            return candidate
    raise ValueError(f"Failed to find a unique sheet name for {name!r}")
