"""Required-equipment catalog."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional


class EquipmentId(str, Enum):
    """Personal protective equipment items the monitor recognizes."""

    HELMET = "helmet"
    VEST = "vest"
    BOOTS = "boots"
    EAR_PROTECTION = "ear-protection"
    MASK = "mask"
    GOGGLES = "goggles"
    GLOVES = "gloves"


# Catalog order, used whenever items are listed
CATALOG_ORDER = tuple(EquipmentId)

# Tokens the hosted model is prompted with, plus common English synonyms
_ALIASES: Dict[str, EquipmentId] = {
    "casco": EquipmentId.HELMET,
    "hard hat": EquipmentId.HELMET,
    "hardhat": EquipmentId.HELMET,
    "chaleco": EquipmentId.VEST,
    "safety vest": EquipmentId.VEST,
    "botas": EquipmentId.BOOTS,
    "safety boots": EquipmentId.BOOTS,
    "orejeras": EquipmentId.EAR_PROTECTION,
    "ear protection": EquipmentId.EAR_PROTECTION,
    "ear_protection": EquipmentId.EAR_PROTECTION,
    "earmuffs": EquipmentId.EAR_PROTECTION,
    "mascarilla": EquipmentId.MASK,
    "gafas": EquipmentId.GOGGLES,
    "safety glasses": EquipmentId.GOGGLES,
    "guantes": EquipmentId.GLOVES,
}

_LOOKUP: Dict[str, EquipmentId] = {item.value: item for item in EquipmentId}
_LOOKUP.update(_ALIASES)

DEFAULT_REQUIRED_EQUIPMENT: FrozenSet[EquipmentId] = frozenset({
    EquipmentId.HELMET,
    EquipmentId.VEST,
    EquipmentId.GOGGLES,
    EquipmentId.GLOVES,
    EquipmentId.MASK,
    EquipmentId.BOOTS,
})


def lookup_equipment(token: object) -> Optional[EquipmentId]:
    """Return the catalog item for a token, or None when it is not recognized."""
    if isinstance(token, EquipmentId):
        return token
    if not isinstance(token, str):
        return None
    return _LOOKUP.get(token.strip().lower())


def known_tokens() -> Dict[str, EquipmentId]:
    """All recognized tokens mapped to their catalog item."""
    return dict(_LOOKUP)


def parse_equipment_set(tokens: Iterable[object]) -> FrozenSet[EquipmentId]:
    """Map tokens through the catalog, silently dropping unrecognized ones."""
    items = set()
    for token in tokens:
        equipment = lookup_equipment(token)
        if equipment is not None:
            items.add(equipment)
    return frozenset(items)


def sort_equipment(items: Iterable[EquipmentId]) -> list:
    """Order items by catalog position."""
    return sorted(set(items), key=CATALOG_ORDER.index)
