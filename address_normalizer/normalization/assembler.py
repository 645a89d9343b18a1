from __future__ import annotations

import random
import uuid

from ..models.address_record import (
    COMPONENT_NAMES,
    AccuracyLevel,
    AddressComponents,
    AddressRecord,
    RecordStatus,
)
from ..models.config_models import ComponentDefaults
from .validator import ValidationResult

"""Record assembly: defaults for missing components, pseudo GUID, confidence.

Unresolved components are filled from ComponentDefaults so the output never
has empty cells; which ones were filled is kept in AddressRecord.defaulted.
"""

__all__ = [
    "STRICT_COMPONENTS",
    "pseudo_guid",
    "assemble_record",
]

# Components whose defaulting downgrades a record to WARNING in strict mode
STRICT_COMPONENTS = ("settlement", "street", "house")

_rng = random.Random()


def pseudo_guid(rng: random.Random | None = None) -> str:
    """Display-only identifier in 8-4-4-4-12 hex grouping (not a registry key)."""
    source = rng or _rng
    return str(uuid.UUID(int=source.getrandbits(128)))


def assemble_record(
    *,
    record_id: int,
    original: str,
    normalized: str,
    components: AddressComponents,
    accuracy: AccuracyLevel,
    validation: ValidationResult,
    defaults: ComponentDefaults,
    confidence_sentinel: int = 200,
    correction_confidence: int = 100,
    strict: bool = False,
    rng: random.Random | None = None,
) -> AddressRecord:
    values: dict[str, str] = {}
    defaulted: set[str] = set()
    for name in COMPONENT_NAMES:
        value = getattr(components, name)
        if value:
            values[name] = value
        else:
            values[name] = getattr(defaults, name)
            defaulted.add(name)

    if not validation.is_valid:
        status = RecordStatus.ERROR
        error_message = validation.message
    elif strict and defaulted.intersection(STRICT_COMPONENTS):
        status = RecordStatus.WARNING
        missing = ", ".join(name for name in STRICT_COMPONENTS if name in defaulted)
        error_message = f"Подставлены значения по умолчанию: {missing}"
    else:
        status = RecordStatus.SUCCESS
        error_message = None

    return AddressRecord(
        id=record_id,
        original=original,
        normalized=normalized,
        pseudo_guid=pseudo_guid(rng),
        accuracy_level=accuracy,
        status=status,
        confidence=confidence_sentinel if validation.is_valid else 0,
        error_message=error_message,
        error_code=validation.code,
        correction_confidence=max(0, correction_confidence),
        defaulted=frozenset(defaulted),
        **values,
    )
