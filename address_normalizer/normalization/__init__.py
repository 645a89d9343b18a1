"""Address normalization core: pure functions over a row's text and a shared,
read-only NormalizationContext."""

from .pipeline import NormalizationContext, build_context, normalize_address, process_address

__all__ = [
    "NormalizationContext",
    "build_context",
    "normalize_address",
    "process_address",
]
