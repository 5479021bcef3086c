"""Reviewer inference pipeline for a single pull request.

Usage:
    async with GitHubClient(bot_config) as client:
        reviewers = await guess_reviewers(
            "octo/repo", 23, "author-login", repo_config,
            fetch_diff=client.fetch_diff,
            fetch_blame=make_blame_fetcher("/path/to/checkout"),
            identity=GitHubIdentityServices(client, bot_config),
        )
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from blamewho.config import RepoConfig
from blamewho.github.blame_parser import parse_blame
from blamewho.github.diff_parser import FileChange, parse_diff
from blamewho.github.identity import IdentityServices
from blamewho.reviewers.default_owners import match_default_owners, matches_any
from blamewho.reviewers.policy import apply_policy, drop_excluded
from blamewho.reviewers.ranker import rank_candidates

logger = logging.getLogger("blamewho.pipeline")

DiffFetcher = Callable[[str, int], Awaitable[str]]
BlameFetcher = Callable[[str], Awaitable[str]]


def select_files(files: Sequence[FileChange], repo_config: RepoConfig) -> list[FileChange]:
    """Pick the files worth blaming.

    Huge changes can touch hundreds of files; blaming the few with the most
    deleted lines is enough to find people with context.
    """
    ranked = sorted(files, key=lambda f: -len(f.deleted_lines))
    ranked = [f for f in ranked if not matches_any(f.path, repo_config.file_blacklist)]
    return ranked[: repo_config.num_files_to_check]


async def fetch_blames(
    files: Sequence[FileChange],
    fetch_blame: BlameFetcher,
) -> dict[str, list[str | None]]:
    """Blame all files concurrently; a failed file just has no entry."""
    results = await asyncio.gather(
        *(fetch_blame(f.path) for f in files), return_exceptions=True
    )

    blames: dict[str, list[str | None]] = {}
    for change, result in zip(files, results):
        if isinstance(result, BaseException):
            logger.warning(f"Could not blame {change.path}: {result}")
            continue
        blames[change.path] = parse_blame(result)
    return blames


async def guess_reviewers(
    repo: str,
    number: int,
    creator: str,
    repo_config: RepoConfig,
    fetch_diff: DiffFetcher,
    fetch_blame: BlameFetcher,
    identity: IdentityServices,
) -> list[str]:
    """Suggest reviewers for pull request `number` of `repo`.

    Raises:
        DiffParseError: if the fetched diff is malformed.
    """
    diff_text = await fetch_diff(repo, number)
    files = parse_diff(diff_text)
    default_owners = match_default_owners(files, repo_config.always_notify_for_paths)

    if not repo_config.find_potential_reviewers:
        return drop_excluded(default_owners, [*repo_config.user_blacklist, creator])

    selected = select_files(files, repo_config)
    logger.info(f"Blaming {len(selected)} of {len(files)} changed file(s) in {repo}#{number}")
    blames = await fetch_blames(selected, fetch_blame)

    candidates = rank_candidates(selected, blames, creator, repo_config)
    return await apply_policy(
        candidates, repo_config, identity, default_owners, creator=creator
    )
