"""Include/exclude path filtering for repository scans."""

import re
from collections.abc import Iterable


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Compile an include glob such as "*.ts" into an end-anchored regex.

    Only "*" is special; every other character matches literally, so
    "*.ts" does not match "src/types.tsx".
    """
    return re.compile(re.escape(pattern).replace(r"\*", ".*") + "$")


def is_excluded(path: str, exclude_patterns: Iterable[str]) -> bool:
    """Substring test with "*" removed ("node_modules/" excludes any path under it)."""
    for pattern in exclude_patterns:
        needle = pattern.replace("*", "")
        if needle and needle in path:
            return True
    return False


def is_included(path: str, include_patterns: Iterable[str]) -> bool:
    return any(glob_to_regex(pattern).search(path) for pattern in include_patterns)


def filter_paths(
    paths: Iterable[str],
    include_patterns: list[str],
    exclude_patterns: list[str],
) -> list[str]:
    """Keep paths that match an include pattern and no exclude pattern, in input order."""
    return [
        path
        for path in paths
        if not is_excluded(path, exclude_patterns) and is_included(path, include_patterns)
    ]
