"""Wildcard filter on grant names: `*` any run of characters, `?` one character."""

import re


def compile_name_filter(pattern: str | None) -> re.Pattern[str]:
    if not pattern:
        pattern = "*"
    parts = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("^" + "".join(parts) + "$")
