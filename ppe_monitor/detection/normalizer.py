"""
Response Normalizer
-------------------

Turns the raw text a vision model answers with into an AnalysisResult.
This is the only place that interprets model-specific output formats.

Three JSON shapes are understood:

- canonical: ``{"persons": [...], "personCount", "overallConfidence", "description"}``
  (the shape AnalysisResult.to_dict() produces, so normalization is idempotent)
- simple: ``{"persona_detectada", "epp_detectado", "confianza", "descripcion"}``
- detailed: ``{"equipos_detectados": {token: {"detectado", "confianza"}},
  "confianza_general", "observaciones"}``

Equipment tokens outside the catalog are dropped without being reported.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..domain.models.detection import (
    AnalysisResult,
    DetectionItem,
    MalformedResponse,
    PersonDetection,
    clamp_unit,
)
from ..domain.models.equipment import EquipmentId, known_tokens, lookup_equipment

logger = logging.getLogger(__name__)

DEFAULT_MODEL_CONFIDENCE = 0.8

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_PERCENT = re.compile(r"(?<!\d)(\d{1,4})%")

# Free-text reports: keywords that only make sense inside prose
_TEXT_KEYWORDS: Dict[str, EquipmentId] = {
    "auditiva": EquipmentId.EAR_PROTECTION,
    "máscara": EquipmentId.MASK,
    "mascara": EquipmentId.MASK,
}
_MISSING_SECTION = re.compile(r"(epp faltantes|missing ppe|missing equipment|missing:)", re.IGNORECASE)

NormalizationOutcome = Union[AnalysisResult, MalformedResponse]


# ============================================================================
# TEXT HELPERS
# ============================================================================

def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` fences a model wraps its JSON in."""
    return _FENCE.sub("", _JSON_FENCE.sub("", text)).strip()


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse the JSON object in text.

    Tries the whole (unfenced) text first, then the greedy ``{...}`` span.
    Returns None when neither parses to an object.
    """
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError):
        match = _JSON_OBJECT.search(cleaned)
        if not match:
            return None
        try:
            parsed = json.loads(match.group(0))
        except (ValueError, RecursionError):
            return None
    return parsed if isinstance(parsed, dict) else None


def percent_from_text(text: str) -> Optional[float]:
    """First integer (at most four digits) immediately followed by '%', as a fraction."""
    if not text:
        return None
    match = _PERCENT.search(text)
    if not match:
        return None
    return clamp_unit(int(match.group(1)) / 100)


# ============================================================================
# VALUE COERCION
# ============================================================================

def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _as_number(value)
    if number is None:
        return None
    return max(0, int(number))


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "si", "sí", "1")
    return bool(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _resolve_confidence(fraction: Any, percent: Any, description: str) -> float:
    """Fraction field, else percentage field, else '<n>%' in text, else the default."""
    value = _as_number(fraction)
    if value is not None:
        return clamp_unit(value)
    value = _as_number(percent)
    if value is not None:
        return clamp_unit(value / 100)
    value = percent_from_text(description)
    if value is not None:
        return value
    return DEFAULT_MODEL_CONFIDENCE


def _merge_items(pairs: Iterable[Tuple[EquipmentId, float]]) -> frozenset:
    """One item per type, keeping the highest confidence."""
    best: Dict[EquipmentId, float] = {}
    for equipment, confidence in pairs:
        confidence = clamp_unit(confidence)
        if equipment not in best or confidence > best[equipment]:
            best[equipment] = confidence
    return frozenset(DetectionItem(type=equipment, confidence=value) for equipment, value in best.items())


def _item_pairs(raw_items: Any, default_confidence: float) -> Iterable[Tuple[EquipmentId, float]]:
    if not isinstance(raw_items, list):
        return
    for raw in raw_items:
        if isinstance(raw, Mapping):
            equipment = lookup_equipment(raw.get("type"))
            confidence = _as_number(raw.get("confidence"))
        else:
            equipment = lookup_equipment(raw)
            confidence = None
        if equipment is None:
            continue
        yield equipment, default_confidence if confidence is None else confidence


def _build_result(
    persons: Tuple[PersonDetection, ...],
    person_count: Optional[int],
    overall: float,
    description: str,
) -> AnalysisResult:
    count = person_count if person_count is not None else len(persons)
    # Items without a person: the model contradicted itself, trust the items
    if count == 0 and any(person.items for person in persons):
        count = 1
    return AnalysisResult(
        persons=persons,
        person_count=count,
        overall_confidence=overall,
        description=description,
    )


# ============================================================================
# SHAPES
# ============================================================================

def _normalize_canonical(payload: Mapping[str, Any]) -> AnalysisResult:
    description = _text(payload.get("description"))
    overall = _resolve_confidence(
        _first(payload, "overallConfidence", "overall_confidence"),
        None,
        description,
    )
    persons = []
    for index, raw_person in enumerate(payload.get("persons") or [], start=1):
        if not isinstance(raw_person, Mapping):
            continue
        person_id = _as_int(raw_person.get("id"))
        persons.append(PersonDetection(
            id=index if person_id is None else person_id,
            items=_merge_items(_item_pairs(raw_person.get("items"), overall)),
            notes=_text(raw_person.get("notes")),
        ))
    return _build_result(
        tuple(persons),
        _as_int(_first(payload, "personCount", "person_count")),
        overall,
        description,
    )


def _normalize_simple(payload: Mapping[str, Any]) -> AnalysisResult:
    description = _text(_first(payload, "descripcion", "description", "observaciones"))
    overall = _resolve_confidence(
        _first(payload, "confianza", "confidence"),
        payload.get("confianza_general"),
        description,
    )
    items = _merge_items(_item_pairs(
        _first(payload, "epp_detectado", "ppe_detected", "equipment", "items"),
        overall,
    ))
    person_count = _as_int(_first(payload, "personCount", "person_count"))
    has_person = _as_bool(_first(payload, "persona_detectada", "person_detected")) or bool(person_count)
    if not has_person and items:
        has_person = True
    persons = (PersonDetection(id=1, items=items, notes=description),) if has_person else ()
    if has_person:
        person_count = max(person_count or 0, 1)
    return _build_result(persons, person_count, overall, description)


def _normalize_detailed(payload: Mapping[str, Any]) -> AnalysisResult:
    description = _text(_first(payload, "observaciones", "descripcion", "description"))
    overall = _resolve_confidence(
        payload.get("confianza"),
        payload.get("confianza_general"),
        description,
    )
    pairs = []
    for token, entry in (payload.get("equipos_detectados") or {}).items():
        equipment = lookup_equipment(token)
        if equipment is None:
            continue
        if isinstance(entry, Mapping):
            detected = _as_bool(_first(entry, "detectado", "detected"))
            percent = _as_number(entry.get("confianza"))
        else:
            detected = _as_bool(entry)
            percent = None
        if not detected:
            continue
        pairs.append((equipment, overall if percent is None else percent / 100))
    items = _merge_items(pairs)
    has_person = _as_bool(payload.get("persona_detectada")) or bool(items)
    persons = (PersonDetection(id=1, items=items, notes=description),) if has_person else ()
    return _build_result(persons, None, overall, description)


def _normalize_payload(payload: Mapping[str, Any]) -> AnalysisResult:
    if isinstance(payload.get("persons"), list):
        return _normalize_canonical(payload)
    if isinstance(payload.get("equipos_detectados"), Mapping):
        return _normalize_detailed(payload)
    return _normalize_simple(payload)


def normalize_text_report(raw_text: str) -> AnalysisResult:
    """
    Keyword scan of a prose answer.

    Catalog tokens mentioned before any "missing" section count as detected;
    the confidence is the first percentage in the text.
    """
    text = raw_text.strip()
    lowered = text.lower()
    section = _MISSING_SECTION.search(lowered)
    scanned = lowered[:section.start()] if section else lowered

    keywords = dict(known_tokens())
    keywords.update(_TEXT_KEYWORDS)
    found = {
        equipment
        for token, equipment in keywords.items()
        if re.search(rf"(?<!\w){re.escape(token)}(?!\w)", scanned)
    }
    overall = _resolve_confidence(None, None, text)
    items = _merge_items((equipment, overall) for equipment in found)
    persons = (PersonDetection(id=1, items=items, notes=""),) if items else ()
    return _build_result(persons, None, overall, text)


def normalize(raw_text: Any, allow_text: bool = False) -> NormalizationOutcome:
    """
    Normalize a raw model answer.

    Never raises: anything that cannot be understood comes back as a
    MalformedResponse. With allow_text, a non-JSON answer is read as a
    free-text report instead.
    """
    if not isinstance(raw_text, str):
        return MalformedResponse(reason="Response is not text")
    if not raw_text.strip():
        return MalformedResponse(reason="Empty response", raw_text=raw_text)

    payload = extract_json_object(raw_text)
    if payload is None and not allow_text:
        logger.debug("No JSON object in model response")
        return MalformedResponse(reason="No JSON object found in response", raw_text=raw_text)

    try:
        if payload is None:
            return normalize_text_report(raw_text)
        return _normalize_payload(payload)
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Unusable model payload: {e}")
        return MalformedResponse(reason=f"Unusable payload: {e}", raw_text=raw_text)
