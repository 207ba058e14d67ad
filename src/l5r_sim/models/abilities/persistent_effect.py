"""Persistent effects: modifiers active while their source is in a zone."""

from typing import Optional

from ..constants import (
    ALLOWED_EFFECT_LOCATIONS, CardType, Duration, EFFECT_SCOPE_LOCATIONS, Location
)
from .descriptors import PersistentEffectSpec
from ...errors import CardConfigurationError

DEFAULT_EFFECT_LOCATIONS = {
    CardType.PROVINCE: Location.PROVINCES,
    CardType.HOLDING: Location.PROVINCES,
    CardType.STRONGHOLD: Location.PROVINCES,
}


def resolve_effect_location(card_type: CardType, location: Optional[Location]) -> Location:
    """Pick the declared scope or the default for the card type, and validate it."""
    location = location or DEFAULT_EFFECT_LOCATIONS.get(card_type, Location.PLAY_AREA)
    if location not in ALLOWED_EFFECT_LOCATIONS:
        value = getattr(location, 'value', location)
        raise CardConfigurationError(f"'{value}' is not a supported effect location.")
    return location


class PersistentEffect:
    """A card's persistent effect together with its engine handle.

    ``ref`` is set while the effect is applied and cleared when it is
    removed, so applying or removing twice never touches the engine twice.
    """

    def __init__(self, card, spec: PersistentEffectSpec):
        self.card = card
        self.spec = spec
        self.location = resolve_effect_location(card.type, spec.location)
        self.duration = spec.duration
        self.ref: Optional[int] = None

    @property
    def is_applied(self) -> bool:
        return self.ref is not None

    def is_in_scope(self, location: Optional[Location]) -> bool:
        """Check if the effect should be active with its source in ``location``."""
        if self.location is Location.ANY:
            return True
        return location in EFFECT_SCOPE_LOCATIONS[self.location]

    def build_effect(self):
        """Create the engine-level effect. Match and condition read the card's current context."""
        from ...engine.effect_engine import Effect

        card = self.card
        payload = self.spec.effect
        target = None
        match = None
        if payload.match is not None:
            match = lambda candidate: payload.match(candidate, card.create_context())
        elif payload.target_controller:
            match = lambda candidate: candidate is card.controller
        else:
            target = card

        condition = None
        if self.spec.condition is not None:
            condition = lambda: self.spec.condition(card.create_context())

        return Effect(
            name=payload.name,
            value=payload.value,
            source=card,
            duration=Duration.PERSISTENT,
            target=target,
            match=match,
            condition=condition,
        )

    def apply(self, effect_engine) -> bool:
        """Apply to the engine unless already applied."""
        if self.is_applied:
            return False
        self.ref = effect_engine.apply(self.build_effect())
        return True

    def remove(self, effect_engine) -> bool:
        """Remove from the engine using the held handle."""
        if not self.is_applied:
            return False
        effect_engine.remove(self.ref)
        self.ref = None
        return True

    def __repr__(self) -> str:
        return f"PersistentEffect({self.spec.effect.name.value}, location={self.location.value}, ref={self.ref})"
