"""Domain models for the batch address normalizer.

This package contains the record, result and configuration models used
throughout the application.
"""

from .address_record import AccuracyLevel, AddressComponents, AddressRecord, RecordStatus
from .config_models import NormalizerConfig, ValidationMode
from .error_record import ErrorRecord
from .processing_result import ProcessingResult, RunStatus

__all__ = [
    # Record models
    "AccuracyLevel",
    "AddressComponents",
    "AddressRecord",
    "RecordStatus",
    # Result models
    "ProcessingResult",
    "RunStatus",
    "ErrorRecord",
    # Configuration models
    "NormalizerConfig",
    "ValidationMode",
]
