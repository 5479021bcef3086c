#!/usr/bin/env python3
"""Demo: Using blamewho as a Python library.

Suggests reviewers for the last commit of the repository in the current
directory, without talking to GitHub: the diff comes from `git diff` and
identities are left as the emails git blame reports.
"""

import asyncio
import subprocess
from pathlib import Path

from blamewho.config import RepoConfig
from blamewho.github.blame import make_blame_fetcher
from blamewho.github.diff_parser import parse_diff
from blamewho.github.identity import IdentityServices
from blamewho.reviewers import guess_reviewers


class LocalIdentityServices(IdentityServices):
    """No organizations, no aliases, nobody suspended."""

    async def orgs_of(self, identity: str) -> set[str]:
        return set()

    async def resolve_to_canonical(self, identity: str) -> str:
        return identity

    async def is_deactivated(self, identity: str) -> bool:
        return False


async def main():
    # Point at any git checkout
    repo = Path(".").resolve()

    async def fetch_diff(_repo: str, _number: int) -> str:
        result = subprocess.run(
            ["git", "diff", "HEAD~1", "HEAD"],
            cwd=repo, capture_output=True, text=True,
        )
        return result.stdout

    # 1. What does the change delete?
    diff_text = await fetch_diff("", 0)
    print("--- Changed files ---")
    for change in parse_diff(diff_text):
        print(f"  {change.path}: {len(change.deleted_lines)} deleted line(s)")

    # 2. Who should review it? Blame the parent commit, where the deleted lines live.
    reviewers = await guess_reviewers(
        repo.name,
        0,
        creator="",
        repo_config=RepoConfig(max_reviewers=3),
        fetch_diff=fetch_diff,
        fetch_blame=make_blame_fetcher(str(repo), rev="HEAD~1"),
        identity=LocalIdentityServices(),
    )

    print("\n--- Suggested reviewers ---")
    for i, name in enumerate(reviewers, 1):
        print(f"  {i}. {name}")


if __name__ == "__main__":
    asyncio.run(main())
