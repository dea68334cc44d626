"""Textual user interface for filepane."""
