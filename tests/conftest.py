"""Shared test fixtures for blamewho."""

from __future__ import annotations

import httpx
import pytest

from blamewho.github.identity import IdentityServices


def make_blame(authors: list[str | None], filename: str = "file.js") -> str:
    """Build `git blame --porcelain` output attributing line i to authors[i].

    Each distinct author gets its own commit; like real porcelain output, a
    commit's details follow its header line the first time it appears only.
    ``None`` entries become not-yet-committed lines.
    """
    commits: dict[str | None, str] = {}
    out: list[str] = []
    for lineno, author in enumerate(authors, 1):
        first = author not in commits
        if first:
            commits[author] = "0" * 40 if author is None else f"{len(commits) + 1:040x}"
        sha = commits[author]
        out.append(f"{sha} {lineno} {lineno}" + (" 1" if first else ""))
        if first:
            name = "Not Committed Yet" if author is None else author.split("@")[0].title()
            mail = "not.committed.yet" if author is None else author
            out += [
                f"author {name}",
                f"author-mail <{mail}>",
                "author-time 1700000000",
                "author-tz +0000",
                f"committer {name}",
                f"committer-mail <{mail}>",
                "committer-time 1700000000",
                "committer-tz +0000",
                f"summary change by {name}",
                f"filename {filename}",
            ]
        out.append(f"\tline {lineno}")
    return "\n".join(out) + "\n"


class FakeIdentityServices(IdentityServices):
    """In-memory identity services; unknown identities pass through."""

    def __init__(
        self,
        orgs: dict[str, set[str]] | None = None,
        aliases: dict[str, str] | None = None,
        deactivated: set[str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.orgs = orgs or {}
        self.aliases = aliases or {}
        self.deactivated = deactivated or set()
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []

    async def orgs_of(self, identity: str) -> set[str]:
        self.calls.append(("orgs_of", identity))
        if identity in self.failing:
            raise RuntimeError(f"lookup failed for {identity}")
        return self.orgs.get(identity, set())

    async def resolve_to_canonical(self, identity: str) -> str:
        self.calls.append(("resolve", identity))
        if identity in self.failing:
            raise RuntimeError(f"lookup failed for {identity}")
        return self.aliases.get(identity, identity)

    async def is_deactivated(self, identity: str) -> bool:
        self.calls.append(("is_deactivated", identity))
        if identity in self.failing:
            raise RuntimeError(f"lookup failed for {identity}")
        return identity in self.deactivated


class FakeGitHub:
    """Route table for httpx.MockTransport; records every request."""

    def __init__(self, routes: dict[str, tuple[int, object]]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, {"message": "Not Found"}))
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


@pytest.fixture
def identity() -> FakeIdentityServices:
    return FakeIdentityServices()


SAMPLE_DIFF = """\
diff --git a/utils.py b/utils.py
index abc1234..def5678 100644
--- a/utils.py
+++ b/utils.py
@@ -10,3 +10,2 @@ def helper_function(value):
     \"\"\"Apply formatting to a value.\"\"\"
-    return f"${value:.2f}"
     return value
@@ -20,4 +19,5 @@ def calculate_total(items):
     tax = subtotal * TAX_RATE
-    total = subtotal + tax
-    return total
+    return subtotal + tax
+
+def new_function():
     pass
"""

SAMPLE_DIFF_NEW_FILE = """\
diff --git a/new_module.py b/new_module.py
new file mode 100644
index 0000000..abc1234
--- /dev/null
+++ b/new_module.py
@@ -0,0 +1,3 @@
+\"\"\"A new module.\"\"\"
+def brand_new():
+    return True
"""

SAMPLE_DIFF_DELETED = """\
diff --git a/old_module.py b/old_module.py
deleted file mode 100644
index abc1234..0000000
--- a/old_module.py
+++ /dev/null
@@ -1,3 +0,0 @@
-\"\"\"Old module.\"\"\"
-def obsolete():
-    pass
"""

SAMPLE_DIFF_BINARY = """\
diff --git a/img.png b/img.png
index 1111111..2222222 100644
Binary files a/img.png and b/img.png differ
"""


@pytest.fixture
def sample_diff() -> str:
    return SAMPLE_DIFF
