"""Utility helpers for flowchart2html."""
