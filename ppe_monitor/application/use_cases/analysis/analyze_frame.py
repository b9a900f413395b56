# Standard library imports
import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, TYPE_CHECKING

# Local application imports
from ....detection.alerts import DetectionAlert, build_alert
from ....detection.confidence import CONFIDENCE_FLOOR, estimate_confidence
from ....detection.normalizer import normalize
from ....domain.models.detection import AnalysisResult, MalformedResponse, ResponseFormat
from ....domain.models.equipment import DEFAULT_REQUIRED_EQUIPMENT, EquipmentId, sort_equipment
from ....exceptions import MalformedResponseError
from ....infrastructure.media.image_utils import decode_image_input, to_data_uri, validate_image
from ...dto.analysis_dto import AnalysisResponse

if TYPE_CHECKING:
    from ....infrastructure.external.vision_gateway_client import VisionGatewayClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameAnalysis:
    """A normalized result plus the values derived from it for display."""
    result: AnalysisResult
    detected: List[EquipmentId]
    missing: List[EquipmentId]
    coverage_confidence: float
    alert: Optional[DetectionAlert]

    def to_response(self) -> AnalysisResponse:
        return AnalysisResponse.from_result(
            self.result,
            detected=[item.value for item in self.detected],
            missing=[item.value for item in self.missing],
            coverage_confidence=self.coverage_confidence,
            alert=self.alert,
        )


class AnalyzeFrameUseCase:
    """Use case for sending one image to the vision model and normalizing the answer"""

    def __init__(
        self,
        vision_client: "VisionGatewayClient",
        required_equipment: FrozenSet[EquipmentId] = DEFAULT_REQUIRED_EQUIPMENT,
        confidence_floor: float = CONFIDENCE_FLOOR,
        max_upload_bytes: int = 10 * 1024 * 1024,
    ) -> None:
        self.vision_client = vision_client
        self.required_equipment = frozenset(required_equipment)
        self.confidence_floor = confidence_floor
        self.max_upload_bytes = max_upload_bytes

    async def execute(
        self,
        image_data_uri: str,
        prompt: Optional[str] = None,
        response_format: ResponseFormat = ResponseFormat.SIMPLE,
    ) -> FrameAnalysis:
        """
        Analyze an image sent as a data URI

        Raises:
            ValidationFailure: If the image is not a readable image or too large
            MalformedResponseError: If the model answer cannot be normalized
            RateLimitedError, QuotaExceededError, VisionGatewayError: From the gateway
        """
        data, content_type = decode_image_input(image_data_uri, self.max_upload_bytes)
        return await self._analyze(to_data_uri(data, content_type), prompt, response_format)

    async def analyze_bytes(
        self,
        data: bytes,
        prompt: Optional[str] = None,
        response_format: ResponseFormat = ResponseFormat.SIMPLE,
    ) -> FrameAnalysis:
        """Analyze raw image bytes (camera frames, uploaded files)"""
        content_type = validate_image(data, self.max_upload_bytes)
        return await self._analyze(to_data_uri(data, content_type), prompt, response_format)

    async def _analyze(
        self,
        image_data_uri: str,
        prompt: Optional[str],
        response_format: ResponseFormat,
    ) -> FrameAnalysis:
        raw_text = await self.vision_client.analyze(
            image_data_uri,
            prompt=prompt,
            response_format=response_format,
        )
        outcome = normalize(raw_text, allow_text=response_format is ResponseFormat.TEXT)
        if isinstance(outcome, MalformedResponse):
            logger.warning(f"Malformed vision response: {outcome.reason}")
            raise MalformedResponseError(outcome.reason, details={"raw_text": outcome.raw_text[:500]})
        return self.describe(outcome)

    def describe(self, result: AnalysisResult) -> FrameAnalysis:
        """Derive coverage, missing items and the alert for a normalized result"""
        detected = sort_equipment(result.detected_equipment())
        return FrameAnalysis(
            result=result,
            detected=detected,
            missing=result.missing_equipment(self.required_equipment),
            coverage_confidence=estimate_confidence(detected, self.required_equipment, self.confidence_floor),
            alert=build_alert(result, self.required_equipment),
        )
