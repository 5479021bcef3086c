"""Parser for `git blame --porcelain` output.

Turns the porcelain stream for one file into a per-line author table:
``table[0]`` is the author email of line 1. Lines without an attributable
author (local changes that are not committed yet, or a ``<none>`` mail)
are ``None``.

Porcelain prints a commit's details (``author-mail`` and friends) only the
first time that commit shows up, right *after* its header line, so authors
are remembered per commit hash and back-filled into the line that
introduced them.
"""

from __future__ import annotations

import re

_COMMIT_RE = re.compile(r"^[0-9a-f]{40} ")
_NO_AUTHOR = "none"
_UNCOMMITTED = "0" * 40


def parse_blame(blame_text: str) -> list[str | None]:
    """Parse porcelain blame output into one author entry per line record.

    Never raises: a truncated stream just produces a shorter table.
    """
    authors: list[str | None] = []
    by_commit: dict[str, str | None] = {}
    commit: str | None = None
    pending: int | None = None  # index waiting for its commit's author-mail
    claimed = False  # details arrived before the first commit header

    for line in blame_text.splitlines():
        if _COMMIT_RE.match(line):
            commit = line[:40]
            if claimed:
                claimed = False
                by_commit[commit] = authors[-1]
                continue
            if commit in by_commit:
                authors.append(by_commit[commit])
                pending = None
            else:
                pending = len(authors)
                authors.append(None)
        elif line.startswith("author-mail"):
            author = _parse_mail(line[len("author-mail"):])
            if commit == _UNCOMMITTED:
                author = None
            if commit is None:
                if not authors:
                    authors.append(author)
                    claimed = True
                continue
            by_commit[commit] = author
            if pending is not None:
                authors[pending] = author
                pending = None

    return authors


def author_at(table: list[str | None] | None, line: int) -> str | None:
    """Author of 1-based `line`, or None when there is no data for it."""
    if not table or line < 1 or line > len(table):
        return None
    return table[line - 1]


def _parse_mail(value: str) -> str | None:
    email = value.strip().replace("<", "").replace(">", "")
    if not email or email == _NO_AUTHOR:
        return None
    return email
