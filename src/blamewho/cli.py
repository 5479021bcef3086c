"""Command-line interface for blamewho."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TextIO

import click
import httpx
from rich.console import Console as RichConsole
from rich.logging import RichHandler

from blamewho import __version__
from blamewho.config import (
    REPO_CONFIG_FILE,
    BotConfig,
    RepoConfig,
    load_bot_config,
    load_repo_config,
    parse_repo_config,
    with_required_org,
)
from blamewho.exceptions import BlamewhoError, ConfigError, GitHubError
from blamewho.github.blame import make_blame_fetcher
from blamewho.github.client import GitHubClient
from blamewho.github.diff_parser import parse_diff
from blamewho.github.identity import GitHubIdentityServices
from blamewho.github.renderer import render_reviewer_comment
from blamewho.reviewers.pipeline import guess_reviewers
from blamewho.ui.console import Console

console = Console()
logger = logging.getLogger("blamewho.cli")


def _load_bot_config(path: Path | None) -> BotConfig:
    try:
        return load_bot_config(path)
    except ConfigError as e:
        console.error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="blamewho")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr.")
def main(verbose: bool):
    """blamewho - find the right reviewers for a pull request with git blame."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=RichConsole(stderr=True), show_path=False)],
    )


# =========================================================================
# Reviewer suggestions
# =========================================================================

@main.command()
@click.argument("repo")
@click.argument("number", type=int)
@click.option("--creator", "-c", required=True, help="Login of the pull request author.")
@click.option("--git-dir", "-g", default=None, help="Local checkout to run git blame in.")
@click.option("--rev", default=None, help="Revision to blame (defaults to the checkout's HEAD).")
@click.option(
    "--config", "config_path", type=click.Path(path_type=Path), default=None,
    help="Bot config file (default: ./blamewho.json).",
)
@click.option(
    "--repo-config", "repo_config_path", type=click.Path(path_type=Path), default=None,
    help=f"Repository policy file (default: {REPO_CONFIG_FILE} fetched from the repo).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "comment"]),
    default="text",
    help="Output format.",
)
@click.option("--post", is_flag=True, help="Post the comment on the pull request.")
def suggest(
    repo: str,
    number: int,
    creator: str,
    git_dir: str | None,
    rev: str | None,
    config_path: Path | None,
    repo_config_path: Path | None,
    output_format: str,
    post: bool,
):
    """Suggest reviewers for pull request NUMBER of REPO (owner/name).

    Example:

        blamewho suggest octo/widgets 23 --creator octocat --git-dir ./widgets
    """
    bot_config = _load_bot_config(config_path)
    git_dir = git_dir or bot_config.effective_git_dir
    if not git_dir:
        console.error("No git checkout given. Use --git-dir or set GITHUB_DIR.")
        sys.exit(1)

    try:
        reviewers = asyncio.run(
            _suggest(repo, number, creator, git_dir, rev, bot_config, repo_config_path, post)
        )
    except BlamewhoError as e:
        console.error(str(e))
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps({"repo": repo, "number": number, "reviewers": reviewers}, indent=2))
    elif output_format == "comment":
        if reviewers:
            click.echo(render_reviewer_comment(reviewers))
    else:
        console.show_reviewers(reviewers)
        if post and reviewers:
            console.success(f"Posted reviewer comment on {repo}#{number}")


async def _suggest(
    repo: str,
    number: int,
    creator: str,
    git_dir: str,
    rev: str | None,
    bot_config: BotConfig,
    repo_config_path: Path | None,
    post: bool,
) -> list[str]:
    async with GitHubClient(bot_config) as client:
        if repo_config_path:
            repo_config = load_repo_config(repo_config_path)
        else:
            repo_config = await _fetch_repo_config(client, repo)
        repo_config = with_required_org(repo_config, bot_config.effective_required_org)

        if creator in repo_config.user_blacklist_for_pr:
            logger.info(f"Skipping because {creator} is blacklisted for pull requests")
            return []

        reviewers = await guess_reviewers(
            repo,
            number,
            creator,
            repo_config,
            fetch_diff=client.fetch_diff,
            fetch_blame=make_blame_fetcher(git_dir, rev, bot_config.blame_max_bytes),
            identity=GitHubIdentityServices(client, bot_config),
        )

        if post and reviewers:
            await client.create_comment(repo, number, render_reviewer_comment(reviewers))
            logger.info(f"Posted reviewer comment on {repo}#{number}")
        return reviewers


async def _fetch_repo_config(client: GitHubClient, repo: str) -> RepoConfig:
    try:
        text = await client.get_file_content(repo, REPO_CONFIG_FILE)
    except (httpx.HTTPError, GitHubError) as e:
        logger.info(f"Could not locate {REPO_CONFIG_FILE} in {repo}: {e}")
        return RepoConfig()
    return parse_repo_config(text)


# =========================================================================
# Diff inspection
# =========================================================================

@main.command()
@click.argument("diff_file", type=click.File("r"))
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
def files(diff_file: TextIO, as_json: bool):
    """Show the deleted lines of every file in DIFF_FILE ('-' for stdin)."""
    try:
        changes = parse_diff(diff_file.read())
    except BlamewhoError as e:
        console.error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(
            [{"path": c.path, "deleted_lines": list(c.deleted_lines)} for c in changes],
            indent=2,
        ))
    elif not changes:
        console.warning("No files found in diff")
    else:
        console.show_file_changes(changes)


# =========================================================================
# Config
# =========================================================================

@main.command("show-config")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None)
@click.option("--repo-config", "repo_config_path", type=click.Path(path_type=Path), default=None)
def show_config(config_path: Path | None, repo_config_path: Path | None):
    """Print the effective bot and repository configuration."""
    bot_config = _load_bot_config(config_path)
    try:
        repo_config = load_repo_config(repo_config_path) if repo_config_path else RepoConfig()
    except ConfigError as e:
        console.error(str(e))
        sys.exit(1)
    repo_config = with_required_org(repo_config, bot_config.effective_required_org)

    console.console.print_json(json.dumps({
        "bot": bot_config.model_dump(),
        "repo": repo_config.model_dump(by_alias=True),
    }))


if __name__ == "__main__":
    main()
