"""Blame-based reviewer scoring.

Finding reviewers with context on a change can't be exact; this is a best
effort. The most precise signal is a deleted (or modified) line: whoever
last touched it probably knows that code. Changes that only add lines carry
no such signal, so every touched file also credits whoever is blamed for the
most lines in it.

Two pools are built:

  - deleted pool: one point to the blamed author of every deleted line
  - all pool: one point to the blamed author of every line of every file

Each pool is sorted by points, authors already in the deleted pool are
dropped from the all pool, and the two are concatenated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from blamewho.config import RepoConfig
from blamewho.github.blame_parser import author_at
from blamewho.github.diff_parser import FileChange

BlameTable = Sequence[str | None]

NO_AUTHOR = "none"


def score_deleted_lines(
    files: Sequence[FileChange],
    blames: Mapping[str, BlameTable],
) -> dict[str, int]:
    """Count deleted lines per blamed author."""
    owners: dict[str, int] = {}
    for change in files:
        table = blames.get(change.path)
        if not table:
            continue
        for line in change.deleted_lines:
            # The blame may be for another revision or truncated
            name = author_at(table, line)
            if not name:
                continue
            owners[name] = owners.get(name, 0) + 1
    return owners


def score_all_lines(
    files: Sequence[FileChange],
    blames: Mapping[str, BlameTable],
) -> dict[str, int]:
    """Count every blamed line of every touched file per author."""
    owners: dict[str, int] = {}
    for change in files:
        for name in blames.get(change.path) or ():
            if not name:
                continue
            owners[name] = owners.get(name, 0) + 1
    return owners


def sort_pool(pool: Mapping[str, int]) -> list[str]:
    """Authors by descending count; ties keep first-encountered order."""
    return sorted(pool, key=lambda name: -pool[name])


def rank_candidates(
    files: Sequence[FileChange],
    blames: Mapping[str, BlameTable],
    creator: str,
    repo_config: RepoConfig,
) -> list[str]:
    """Rank candidate reviewers before any organization/identity policy."""
    deleted_owners = sort_pool(score_deleted_lines(files, blames))
    all_owners = sort_pool(score_all_lines(files, blames))

    deleted_set = set(deleted_owners)
    all_owners = [name for name in all_owners if name not in deleted_set]

    blacklist = set(repo_config.user_blacklist)
    return [
        name
        for name in deleted_owners + all_owners
        if name != NO_AUTHOR and name != creator and name not in blacklist
    ]
