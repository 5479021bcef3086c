"""Tests for the porcelain blame parser."""

from __future__ import annotations

from blamewho.github.blame_parser import author_at, parse_blame
from tests.conftest import make_blame

# Output of `git blame --porcelain` on a three line file: lines 1 and 3
# by alice, line 2 by bob.
REAL_PORCELAIN = """\
3f786850e387550fdab836ed7e6dc881de23001b 1 1 1
author Alice
author-mail <alice@x.com>
author-time 1700000000
author-tz +0000
committer Alice
committer-mail <alice@x.com>
committer-time 1700000000
committer-tz +0000
summary first
boundary
filename a.js
\tconst a = 1;
89e6c98d92887913cadf06b2adb97f26cde4849b 2 2 1
author Bob
author-mail <bob@x.com>
author-time 1700000100
author-tz +0000
committer Bob
committer-mail <bob@x.com>
committer-time 1700000100
committer-tz +0000
summary second
previous 3f786850e387550fdab836ed7e6dc881de23001b a.js
filename a.js
\tconst b = 2;
3f786850e387550fdab836ed7e6dc881de23001b 3 3 1
\tconst c = 3;
"""


class TestParseBlame:
    def test_real_porcelain_output(self):
        assert parse_blame(REAL_PORCELAIN) == ["alice@x.com", "bob@x.com", "alice@x.com"]

    def test_one_entry_per_line_record(self):
        authors = ["a@x.com", "b@x.com", "a@x.com", "c@x.com", "b@x.com", "b@x.com"]
        table = parse_blame(make_blame(authors))
        assert len(table) == len(authors)
        assert table == authors

    def test_single_author_file(self):
        table = parse_blame(make_blame(["alice@x.com"] * 5))
        assert table == ["alice@x.com"] * 5

    def test_uncommitted_lines_have_no_author(self):
        table = parse_blame(make_blame(["alice@x.com", None, "alice@x.com"]))
        assert table == ["alice@x.com", None, "alice@x.com"]

    def test_none_mail_has_no_author(self):
        blame = (
            "1111111111111111111111111111111111111111 1 1 1\n"
            "author-mail <none>\n"
            "\tx\n"
        )
        assert parse_blame(blame) == [None]

    def test_details_before_first_commit_line(self):
        blame = (
            "author-mail <alice@x.com>\n"
            "1111111111111111111111111111111111111111 1 1 2\n"
            "\tone\n"
            "1111111111111111111111111111111111111111 2 2\n"
            "\ttwo\n"
        )
        assert parse_blame(blame) == ["alice@x.com", "alice@x.com"]

    def test_empty(self):
        assert parse_blame("") == []

    def test_garbage_is_ignored(self):
        assert parse_blame("fatal: no such path 'a.js' in HEAD\n") == []

    def test_truncated_stream(self):
        blame = make_blame(["a@x.com"] * 10)
        truncated = blame[: len(blame) // 2]
        table = parse_blame(truncated)
        assert 0 < len(table) < 10
        assert all(name == "a@x.com" for name in table)

    def test_truncated_before_details(self):
        # Commit header arrived, its author-mail did not
        blame = "1111111111111111111111111111111111111111 1 1 1\nauthor Ali"
        assert parse_blame(blame) == [None]

    def test_content_lines_are_not_records(self):
        blame = make_blame(["a@x.com"]).replace(
            "\tline 1", "\t1111111111111111111111111111111111111111 fake"
        )
        assert parse_blame(blame) == ["a@x.com"]


class TestAuthorAt:
    def test_in_range(self):
        assert author_at(["a", "b"], 2) == "b"

    def test_out_of_range(self):
        assert author_at(["a", "b"], 3) is None
        assert author_at(["a", "b"], 0) is None

    def test_missing_table(self):
        assert author_at(None, 1) is None
        assert author_at([], 1) is None
