"""Data models for the commit log."""

from .commit import DEFAULT_TIMESTAMP_FORMAT, Commit

__all__ = ["Commit", "DEFAULT_TIMESTAMP_FORMAT"]
