"""Tests for running git blame against a real repository."""

from __future__ import annotations

import asyncio
import shutil
import subprocess
from pathlib import Path

import pytest

from blamewho.exceptions import BlameError
from blamewho.github.blame import get_blame, make_blame_fetcher
from blamewho.github.blame_parser import parse_blame

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo: Path, *args: str, email: str = "alice@x.com") -> None:
    subprocess.run(
        ["git", "-c", f"user.name={email.split('@')[0]}", "-c", f"user.email={email}",
         "-c", "commit.gpgsign=false", *args],
        cwd=repo, check=True, capture_output=True,
    )


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository where alice wrote lines 1-2 and 4 and bob wrote line 3."""
    _git(tmp_path, "init", "-q")
    (tmp_path / "a.js").write_text("one\ntwo\nthree\nfour\n")
    _git(tmp_path, "add", "a.js")
    _git(tmp_path, "commit", "-q", "-m", "first")
    (tmp_path / "a.js").write_text("one\ntwo\nTHREE\nfour\n")
    _git(tmp_path, "commit", "-q", "-am", "second", email="bob@x.com")
    return tmp_path


class TestGetBlame:
    def test_porcelain_conformance(self, git_repo: Path):
        output = asyncio.run(get_blame("a.js", str(git_repo)))
        assert parse_blame(output) == ["alice@x.com", "alice@x.com", "bob@x.com", "alice@x.com"]

    def test_uncommitted_lines(self, git_repo: Path):
        (git_repo / "a.js").write_text("one\ntwo\nthree\nfour\nfive\n")
        output = asyncio.run(get_blame("a.js", str(git_repo)))
        table = parse_blame(output)
        assert len(table) == 5
        assert table[4] is None

    def test_revision(self, git_repo: Path):
        output = asyncio.run(get_blame("a.js", str(git_repo), rev="HEAD~1"))
        assert parse_blame(output) == ["alice@x.com"] * 4

    def test_truncated(self, git_repo: Path):
        output = asyncio.run(get_blame("a.js", str(git_repo), max_bytes=100))
        assert len(output.encode()) <= 100

    def test_missing_file(self, git_repo: Path):
        with pytest.raises(BlameError):
            asyncio.run(get_blame("missing.js", str(git_repo)))

    def test_fetcher(self, git_repo: Path):
        fetch = make_blame_fetcher(str(git_repo))
        assert parse_blame(asyncio.run(fetch("a.js")))[2] == "bob@x.com"
