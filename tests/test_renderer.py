"""Tests for the reviewer comment renderer."""

from __future__ import annotations

from blamewho.github.renderer import build_mention_sentence, render_reviewer_comment


class TestMentionSentence:
    def test_one(self):
        assert build_mention_sentence(["alice"]) == "@alice"

    def test_two(self):
        assert build_mention_sentence(["alice", "bob"]) == "@alice and @bob"

    def test_three(self):
        assert build_mention_sentence(["a", "b", "c"]) == "@a, @b and @c"


class TestRenderComment:
    def test_single_reviewer(self):
        assert render_reviewer_comment(["alice"]) == (
            "Using `git blame`, identified @alice to be a potential reviewer"
        )

    def test_multiple_reviewers(self):
        assert render_reviewer_comment(["alice", "bob"]) == (
            "Using `git blame`, identified @alice and @bob to be potential reviewers"
        )
