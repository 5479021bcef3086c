"""Run `git blame` on a local checkout of the repository under review."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from blamewho.exceptions import BlameError

logger = logging.getLogger("blamewho.blame")

DEFAULT_MAX_BYTES = 50_000 * 1024


async def get_blame(
    path: str,
    git_dir: str,
    rev: str | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> str:
    """Porcelain blame of `path`, truncated to `max_bytes` of output.

    Raises:
        BlameError: if git can't be started or exits with an error.
    """
    args = ["git", "blame", "--porcelain"]
    if rev:
        args.append(rev)
    args += ["--", path]

    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=git_dir,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise BlameError(f"Could not run git blame for {path}: {e}") from e

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        message = stderr.decode("utf-8", errors="replace").strip()
        raise BlameError(f"git blame failed for {path}: {message}")

    if len(stdout) > max_bytes:
        logger.debug(f"Blame for {path} truncated to {max_bytes} bytes")
        stdout = stdout[:max_bytes]
    return stdout.decode("utf-8", errors="replace")


def make_blame_fetcher(
    git_dir: str,
    rev: str | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> Callable[[str], Awaitable[str]]:
    """Bind `get_blame` to a checkout so it can be called with just a path."""
    async def fetch(path: str) -> str:
        return await get_blame(path, git_dir, rev=rev, max_bytes=max_bytes)

    return fetch
