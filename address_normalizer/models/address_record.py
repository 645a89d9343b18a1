from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Address record models for the batch address normalizer.

AddressComponents is the per-row scratch result of the component classifier;
AddressRecord is the immutable output row placed into a ProcessingResult.
"""

__all__ = [
    "AccuracyLevel",
    "RecordStatus",
    "AddressComponents",
    "AddressRecord",
    "COMPONENT_NAMES",
]

COMPONENT_NAMES = (
    "region",
    "municipal_district",
    "settlement",
    "street",
    "house",
    "apartment",
)


class AccuracyLevel(Enum):
    """Coarse precision tier of a normalized address.

    Ordering: apartment > house > street. STREET is also the fallback tier.
    """
    STREET = "street"
    HOUSE = "house"
    APARTMENT = "apartment"


class RecordStatus(Enum):
    """Outcome of a single row.

    - SUCCESS: validation passed
    - WARNING: validation passed but strict mode flagged defaulted components
    - ERROR: validator rejected the normalized string
    """
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class AddressComponents:
    """Components extracted by the classifier. None means "not found"."""
    region: str | None = None
    municipal_district: str | None = None
    settlement: str | None = None
    street: str | None = None
    house: str | None = None
    apartment: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in COMPONENT_NAMES}


@dataclass(frozen=True)
class AddressRecord:
    """One assembled output row.

    Attributes:
        id: 1-based row index in the source table (blank rows keep their index)
        original: non-empty trimmed cells joined with ", "
        normalized: cleaned address string
        region .. apartment: components, defaults substituted when absent
        pseudo_guid: display-only identifier shaped like 8-4-4-4-12 hex
        accuracy_level: precision tier of the normalized string
        status: success / warning / error
        error_message: human readable reason, only when status != success
        confidence: sentinel for validated records, 0 for rejected ones
        error_code: validator code (too-short, missing-name, not-in-dictionary)
        correction_confidence: lowest confidence of applied fuzzy corrections
        defaulted: component names filled from defaults instead of inferred
    """
    id: int
    original: str
    normalized: str
    region: str
    municipal_district: str
    settlement: str
    street: str
    house: str
    apartment: str
    pseudo_guid: str
    accuracy_level: AccuracyLevel
    status: RecordStatus
    confidence: int
    error_message: str | None = None
    error_code: str | None = None
    correction_confidence: int = 100
    defaulted: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.id < 1:
            raise ValueError(f"record id must be positive, got {self.id}")
        if self.confidence < 0:
            raise ValueError(f"confidence must not be negative, got {self.confidence}")

    @property
    def is_success(self) -> bool:
        return self.status is not RecordStatus.ERROR

    def was_defaulted(self, component: str) -> bool:
        """True when the component value is a placeholder, not extracted text."""
        return component in self.defaulted

    def to_dict(self) -> dict[str, Any]:
        """Export row with camelCase keys (display / writer contract)."""
        return {
            "id": self.id,
            "original": self.original,
            "normalized": self.normalized,
            "region": self.region,
            "municipalDistrict": self.municipal_district,
            "settlement": self.settlement,
            "street": self.street,
            "house": self.house,
            "apartment": self.apartment,
            "pseudoGuid": self.pseudo_guid,
            "accuracyLevel": self.accuracy_level.value,
            "status": self.status.value,
            "errorMessage": self.error_message,
            "confidence": self.confidence,
        }
