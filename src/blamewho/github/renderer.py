"""Markdown rendering of the reviewer mention comment."""

from __future__ import annotations

from collections.abc import Sequence


def build_mention_sentence(reviewers: Sequence[str]) -> str:
    """Join mentions as "@a", "@a and @b" or "@a, @b and @c"."""
    mentions = [f"@{name}" for name in reviewers]
    if len(mentions) <= 1:
        return "".join(mentions)
    return ", ".join(mentions[:-1]) + " and " + mentions[-1]


def render_reviewer_comment(reviewers: Sequence[str]) -> str:
    """Render the comment posted on the pull request."""
    plural = len(reviewers) > 1
    return (
        f"Using `git blame`, identified {build_mention_sentence(reviewers)} "
        f"to be{'' if plural else ' a'} potential reviewer{'s' if plural else ''}"
    )
