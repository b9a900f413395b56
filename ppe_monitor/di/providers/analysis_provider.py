from typing import TYPE_CHECKING, FrozenSet
from ...core.config import get_settings
from ...domain.models.equipment import DEFAULT_REQUIRED_EQUIPMENT, EquipmentId, parse_equipment_set
from ...application.use_cases.analysis.analyze_frame import AnalyzeFrameUseCase
from ...infrastructure.external.vision_gateway_client import VisionGatewayClient

if TYPE_CHECKING:
    from ..base_container import BaseContainer


def configured_required_equipment() -> FrozenSet[EquipmentId]:
    """REQUIRED_EQUIPMENT parsed against the catalog; unknown tokens are ignored"""
    required = parse_equipment_set(get_settings().required_equipment)
    return required or DEFAULT_REQUIRED_EQUIPMENT


class AnalysisProvider:
    """Frame analysis provider - vision gateway client and the analyze use case"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()

        if not container.is_registered(VisionGatewayClient):
            container.register_singleton(VisionGatewayClient, VisionGatewayClient())

        container.register_factory(
            AnalyzeFrameUseCase,
            lambda: AnalyzeFrameUseCase(
                vision_client=container.get(VisionGatewayClient),
                required_equipment=configured_required_equipment(),
                confidence_floor=settings.confidence_floor,
                max_upload_bytes=settings.max_upload_mb * 1024 * 1024,
            )
        )
