"""Logging setup and rejected-row log."""
