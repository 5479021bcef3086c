"""Default owners: people always notified when certain paths change."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Sequence

from blamewho.config import WhitelistUser
from blamewho.github.diff_parser import FileChange


def path_matches(path: str, pattern: str) -> bool:
    """Shell-glob match of a repository path.

    `*`, `?` and `[...]` match within one path segment; a `**` segment
    matches any number of segments, including none.
    """
    return _match_parts(path.strip("/").split("/"), pattern.strip("/").split("/"))


def _match_parts(parts: list[str], pattern: list[str]) -> bool:
    if not pattern:
        return not parts
    head = pattern[0]
    if head == "**":
        return any(_match_parts(parts[i:], pattern[1:]) for i in range(len(parts) + 1))
    if not parts or not fnmatch.fnmatchcase(parts[0], head):
        return False
    return _match_parts(parts[1:], pattern[1:])


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    return any(path_matches(path, pattern) for pattern in patterns)


def match_default_owners(
    files: Sequence[FileChange],
    whitelist: Sequence[WhitelistUser],
) -> list[str]:
    """Names of whitelist users owning at least one changed path, in config order."""
    owners: list[str] = []
    for user in whitelist or ():
        if user.name in owners:
            continue
        if any(matches_any(f.path, user.files) for f in files):
            owners.append(user.name)
    return owners
