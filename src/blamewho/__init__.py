"""blamewho - suggest reviewers for a change using git blame."""

__version__ = "0.1.0"
