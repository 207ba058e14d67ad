"""Sample card definitions built only from the ability DSL."""

import re
from typing import Dict, List, Optional

from ..models.cards.card_definition import CardDefinition
from .botk import FORMAL_INVITATION, SHIOTOME_ENCAMPMENT

CARD_DEFINITIONS: Dict[str, CardDefinition] = {
    definition.id: definition for definition in (FORMAL_INVITATION, SHIOTOME_ENCAMPMENT)
}


def _normalize_name(name: str) -> str:
    """Lowercase a name and drop punctuation so lookups ignore formatting."""
    return re.sub(r"[^\w\s\-]", "", name).lower().strip()


def get_definition(card_id_or_name: str) -> Optional[CardDefinition]:
    """Find a definition by id or by (case-insensitive) name."""
    if card_id_or_name in CARD_DEFINITIONS:
        return CARD_DEFINITIONS[card_id_or_name]
    wanted = _normalize_name(card_id_or_name)
    for definition in CARD_DEFINITIONS.values():
        if _normalize_name(definition.name) == wanted:
            return definition
    return None


def all_definitions() -> List[CardDefinition]:
    return list(CARD_DEFINITIONS.values())


__all__ = ['CARD_DEFINITIONS', 'FORMAL_INVITATION', 'SHIOTOME_ENCAMPMENT', 'all_definitions', 'get_definition']
