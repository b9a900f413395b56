"""Fallback confidence derived from equipment coverage."""

from __future__ import annotations

from typing import Iterable

from ..domain.models.equipment import EquipmentId

# Lower bound when required items are missing; product heuristic, not a
# principled minimum.
CONFIDENCE_FLOOR = 0.3


def estimate_confidence(
    detected: Iterable[EquipmentId],
    required: Iterable[EquipmentId],
    floor: float = CONFIDENCE_FLOOR,
) -> float:
    """
    Score how completely the required equipment is covered.

    Returns exactly 1.0 when every required item was detected, otherwise the
    covered fraction of the required set, never below ``floor``.
    """
    detected_set = frozenset(detected)
    required_set = frozenset(required)
    if required_set <= detected_set:
        return 1.0
    covered = len(detected_set & required_set) / len(required_set)
    return max(0.0, min(1.0, max(floor, covered)))
