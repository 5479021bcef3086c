"""Git diff parser - extract deleted line numbers from unified diffs.

Parses the output of `git diff` (or the GitHub `.diff` media type) into one
``FileChange`` per file section. Only the pre-change side matters here: for
every removed line we record its line number in the original file, which is
what `git blame` on the base revision can attribute.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from blamewho.exceptions import DiffParseError

_HEADER_RE = re.compile(r"^diff --git \"?a/(.+) \"?b/.+$")
_HUNK_RE = re.compile(r"^@@ -(\d+),?(\d+)? \+(\d+),?(\d+)? @@")

# Extended header lines that may sit between `diff --git` and `---`.
_EXTENDED_HEADERS = (
    "old mode",
    "new mode",
    "deleted file mode",
    "new file mode",
    "copy from",
    "copy to",
    "rename from",
    "rename to",
    "similarity index",
    "dissimilarity index",
    "index ",
)


@dataclass(frozen=True)
class FileChange:
    """Changes to a single file, in pre-change line numbering."""
    path: str
    deleted_lines: tuple[int, ...] = field(default_factory=tuple)


def parse_diff(diff_text: str) -> list[FileChange]:
    """Parse unified diff text into FileChange records, in file order.

    Empty or non-diff input yields an empty list: an upstream fetch that
    failed should not take the whole run down with it.

    Raises:
        DiffParseError: on a malformed `diff --git` header or a `---` line
            that is not followed by `+++`.
    """
    if not diff_text or not diff_text.startswith("diff"):
        return []

    lines = diff_text.strip().splitlines()
    files: list[FileChange] = []
    pos = 0
    while pos < len(lines):
        change, pos = _parse_file_section(lines, pos)
        files.append(change)
    return files


def _parse_file_section(lines: list[str], pos: int) -> tuple[FileChange, int]:
    """Parse one file section starting at `pos`; return it and the next position."""
    header = lines[pos]
    match = _HEADER_RE.match(header)
    if not match:
        raise DiffParseError(
            f"Invalid line, should start with `diff --git a/`, instead got: {header!r}"
        )
    path = match.group(1).rstrip('"')
    pos += 1

    while pos < len(lines) and lines[pos].startswith(_EXTENDED_HEADERS):
        pos += 1

    # Header-only section (pure rename or mode change)
    if pos >= len(lines) or lines[pos].startswith("diff --git"):
        return FileChange(path=path), pos

    line = lines[pos]
    if line.startswith("Binary files") or not line.startswith("--- "):
        # "Binary files ... differ", "GIT binary patch" or any other body that
        # is not a text hunk: the file changed but has no deletable lines
        return FileChange(path=path), _skip_to_next_file(lines, pos + 1)

    pos += 1
    if pos >= len(lines) or not lines[pos].startswith("+++ "):
        got = lines[pos] if pos < len(lines) else "<end of diff>"
        raise DiffParseError(
            f"Invalid line, should start with `+++`, instead got: {got!r}"
        )
    pos += 1

    deleted: list[int] = []
    current_line = 0
    in_hunk = False
    while pos < len(lines):
        line = lines[pos]
        if line.startswith("diff --git"):
            break
        pos += 1

        if line.startswith("@@"):
            # @@ -from_line,from_count +to_line,to_count @@ first line
            hunk = _HUNK_RE.match(line)
            if hunk:
                current_line = int(hunk.group(1))
                in_hunk = True
            continue

        if not in_hunk or line.startswith("\\"):
            continue
        if line.startswith("-"):
            deleted.append(current_line)
        if not line.startswith("+"):
            current_line += 1

    return FileChange(path=path, deleted_lines=tuple(deleted)), pos


def _skip_to_next_file(lines: list[str], pos: int) -> int:
    while pos < len(lines) and not lines[pos].startswith("diff --git"):
        pos += 1
    return pos
