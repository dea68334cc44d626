"""Utility helpers for filepane."""
