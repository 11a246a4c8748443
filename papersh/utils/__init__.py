"""Utility functions."""

from papersh.utils.text import as_filename, clean_title, expand_path, split_authors

__all__ = ["as_filename", "clean_title", "expand_path", "split_authors"]
