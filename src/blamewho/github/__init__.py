"""GitHub-facing layer: diff and blame parsing, API access, comment rendering.

  - Parse unified diffs into per-file deleted lines
  - Parse `git blame --porcelain` output into per-line authors
  - Talk to the GitHub REST API (diffs, orgs, users, comments)
  - Render the reviewer mention comment
"""
