"""
Unit tests for the coverage-based confidence estimator.
"""
import pytest

from ppe_monitor.detection.confidence import CONFIDENCE_FLOOR, estimate_confidence
from ppe_monitor.domain.models.equipment import DEFAULT_REQUIRED_EQUIPMENT, EquipmentId


class TestEstimateConfidence:
    """Tests for estimate_confidence"""

    def test_full_coverage_is_exactly_one(self):
        assert estimate_confidence(DEFAULT_REQUIRED_EQUIPMENT, DEFAULT_REQUIRED_EQUIPMENT) == 1.0

    def test_superset_is_exactly_one(self):
        detected = set(DEFAULT_REQUIRED_EQUIPMENT) | {EquipmentId.EAR_PROTECTION}
        assert estimate_confidence(detected, DEFAULT_REQUIRED_EQUIPMENT) == 1.0

    def test_nothing_detected_returns_floor(self):
        assert estimate_confidence([], DEFAULT_REQUIRED_EQUIPMENT) == CONFIDENCE_FLOOR

    def test_helmet_and_vest_of_six_is_just_above_floor(self):
        # 2/6 is 0.333..., just above the floor
        result = estimate_confidence([EquipmentId.HELMET, EquipmentId.VEST], DEFAULT_REQUIRED_EQUIPMENT)
        assert result == pytest.approx(2 / 6)

    def test_partial_coverage(self):
        detected = [EquipmentId.HELMET, EquipmentId.VEST, EquipmentId.GLOVES, EquipmentId.BOOTS]
        assert estimate_confidence(detected, DEFAULT_REQUIRED_EQUIPMENT) == pytest.approx(4 / 6)

    def test_items_outside_required_set_do_not_count(self):
        required = {EquipmentId.HELMET, EquipmentId.VEST}
        result = estimate_confidence([EquipmentId.EAR_PROTECTION, EquipmentId.HELMET], required)
        assert result == pytest.approx(0.5)

    def test_empty_required_set_is_fully_covered(self):
        assert estimate_confidence([], []) == 1.0

    def test_custom_floor(self):
        result = estimate_confidence([], DEFAULT_REQUIRED_EQUIPMENT, floor=0.1)
        assert result == pytest.approx(0.1)

    def test_result_stays_in_unit_interval(self):
        for count in range(len(DEFAULT_REQUIRED_EQUIPMENT) + 1):
            detected = sorted(DEFAULT_REQUIRED_EQUIPMENT)[:count]
            value = estimate_confidence(detected, DEFAULT_REQUIRED_EQUIPMENT)
            assert CONFIDENCE_FLOOR <= value <= 1.0
