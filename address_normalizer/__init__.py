"""Batch address normalizer for Russian postal addresses."""

__version__ = "0.1.0"
