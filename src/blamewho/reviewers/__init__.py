"""Reviewer inference: default owners, blame scoring, and policy filtering."""

from blamewho.reviewers.default_owners import match_default_owners, path_matches
from blamewho.reviewers.pipeline import guess_reviewers, select_files
from blamewho.reviewers.policy import apply_policy
from blamewho.reviewers.ranker import rank_candidates

__all__ = [
    "apply_policy",
    "guess_reviewers",
    "match_default_owners",
    "path_matches",
    "rank_candidates",
    "select_files",
]
