"""repostress — randomized concurrent action stress harness for a content repository."""

__version__ = "0.3.0"
