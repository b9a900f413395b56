from typing import List, Optional

from pydantic import BaseModel, Field

from ...domain.models.detection import AnalysisResult, ResponseFormat
from ...detection.alerts import DetectionAlert
from .capture_dto import PersistOutcomeResponse


class AnalyzeFrameRequest(BaseModel):
    """DTO for a frame analysis request"""
    image: str = Field(min_length=16, description="Image as a base64 data URI")
    prompt: Optional[str] = Field(default=None, max_length=4000)
    format: ResponseFormat = ResponseFormat.SIMPLE


class DetectionItemResponse(BaseModel):
    type: str
    confidence: float


class PersonDetectionResponse(BaseModel):
    id: int
    items: List[DetectionItemResponse] = Field(default_factory=list)
    notes: str = ""


class AlertResponse(BaseModel):
    level: str
    title: str
    message: str
    detected: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)

    @classmethod
    def from_alert(cls, alert: Optional[DetectionAlert]) -> Optional["AlertResponse"]:
        if alert is None:
            return None
        return cls(
            level=alert.level.value,
            title=alert.title,
            message=alert.message,
            detected=list(alert.detected),
            missing=list(alert.missing),
        )


class AnalysisResponse(BaseModel):
    """DTO for a normalized analysis with its derived values"""
    persons: List[PersonDetectionResponse] = Field(default_factory=list)
    person_count: int = 0
    overall_confidence: float = 0.0
    description: str = ""
    detected: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    coverage_confidence: float = 0.0
    alert: Optional[AlertResponse] = None

    @classmethod
    def from_result(
        cls,
        result: AnalysisResult,
        detected: List[str],
        missing: List[str],
        coverage_confidence: float,
        alert: Optional[DetectionAlert],
    ) -> "AnalysisResponse":
        return cls(
            persons=[
                PersonDetectionResponse(
                    id=person.id,
                    items=[
                        DetectionItemResponse(type=item.type.value, confidence=item.confidence)
                        for item in person.sorted_items()
                    ],
                    notes=person.notes,
                )
                for person in result.persons
            ],
            person_count=result.person_count,
            overall_confidence=result.overall_confidence,
            description=result.description,
            detected=detected,
            missing=missing,
            coverage_confidence=coverage_confidence,
            alert=AlertResponse.from_alert(alert),
        )


class UploadAnalysisResponse(BaseModel):
    """DTO for an uploaded image: its analysis and, when it was kept, the capture outcome"""
    analysis: AnalysisResponse
    capture: Optional[PersistOutcomeResponse] = None
