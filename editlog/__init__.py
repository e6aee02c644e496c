"""Tracks line-level edits to workspace files and appends them to a remote log."""

__version__ = "0.1.0"
