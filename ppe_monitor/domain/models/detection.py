"""Structured detection records produced from a vision model answer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from .equipment import CATALOG_ORDER, EquipmentId, sort_equipment


def clamp_unit(value: float) -> float:
    """Clamp a confidence value into [0, 1]."""
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class DetectionItem:
    """A single equipment type attributed to a person, with its confidence."""

    type: EquipmentId
    confidence: float

    def __post_init__(self) -> None:
        if not isinstance(self.type, EquipmentId):
            raise ValueError(f"Unknown equipment type: {self.type!r}")
        object.__setattr__(self, "confidence", clamp_unit(self.confidence))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "confidence": self.confidence}


@dataclass(frozen=True)
class PersonDetection:
    """One person found in a frame and the equipment they wear."""

    id: int
    items: FrozenSet[DetectionItem] = field(default_factory=frozenset)
    notes: str = ""

    @property
    def equipment(self) -> FrozenSet[EquipmentId]:
        return frozenset(item.type for item in self.items)

    def sorted_items(self) -> List[DetectionItem]:
        return sorted(self.items, key=lambda item: CATALOG_ORDER.index(item.type))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.sorted_items()],
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Normalized result of analyzing one frame.

    Immutable once created; consumed by the API, the alert builder and the
    capture persistence path.
    """

    persons: Tuple[PersonDetection, ...]
    person_count: int
    overall_confidence: float
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "persons", tuple(self.persons))
        object.__setattr__(self, "overall_confidence", clamp_unit(self.overall_confidence))
        if self.person_count < len(self.persons):
            object.__setattr__(self, "person_count", len(self.persons))

    @property
    def has_person(self) -> bool:
        return self.person_count > 0

    def detected_equipment(self) -> FrozenSet[EquipmentId]:
        """Union of the equipment worn by every person in the frame."""
        detected = set()
        for person in self.persons:
            detected.update(person.equipment)
        return frozenset(detected)

    def missing_equipment(self, required: Iterable[EquipmentId]) -> List[EquipmentId]:
        """Required items nobody in the frame wears, in catalog order."""
        return sort_equipment(set(required) - self.detected_equipment())

    def to_dict(self) -> Dict[str, Any]:
        """Canonical JSON shape; normalizing it again yields an equal result."""
        return {
            "persons": [person.to_dict() for person in self.persons],
            "personCount": self.person_count,
            "overallConfidence": self.overall_confidence,
            "description": self.description,
        }


@dataclass(frozen=True)
class MalformedResponse:
    """Returned by the normalizer when the model answer cannot be parsed."""

    reason: str
    raw_text: str = ""


class ResponseFormat(str, Enum):
    """Answer layout requested from the vision model."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    TEXT = "text"
