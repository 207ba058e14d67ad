"""Player model: card piles, honor, fate and selection state."""

from typing import Any, Dict, List, Optional

from ..constants import (
    CardType, DECK_LOCATIONS, DYNASTY_PROVINCES, EffectName, EventName, Location, PLAYER_PILES,
    PROVINCE_LOCATIONS
)
from ...utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class Player:
    """A player in an L5R game with complete state tracking."""

    def __init__(self, name: str, game):
        if not name:
            raise ValueError("Player name cannot be empty")
        self.name = name
        self.game = game

        # Card Zones
        self.zones: Dict[Location, List[Any]] = {location: [] for location in PLAYER_PILES}

        # Resources
        self.honor = game.settings.starting_honor
        self.fate = game.settings.starting_fate

        # Round state
        self.first_player = False
        self.passed_dynasty = False
        self.honor_bid = 0

        # Selection state shown to this player's client while a prompt is open
        self.selectable_cards: List[Any] = []
        self.selected_cards: List[Any] = []

    def card_pile(self, location: Location) -> List[Any]:
        """The list of cards this player keeps in a location."""
        return self.zones[location]

    @property
    def hand(self) -> List[Any]:
        return self.zones[Location.HAND]

    @property
    def cards_in_play(self) -> List[Any]:
        return self.zones[Location.PLAY_AREA]

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def all_cards(self) -> List[Any]:
        """Every card in this player's piles, in pile order."""
        return [card for location in PLAYER_PILES for card in self.zones[location]]

    def stronghold(self) -> Optional[Any]:
        for card in self.zones[Location.STRONGHOLD_PROVINCE]:
            if card.type is CardType.STRONGHOLD:
                return card
        return None

    def move_card(self, card, target_location: Location) -> None:
        """Move a card between piles.

        Leaving the play area discards its attachments and resets its round
        state before the card changes zone.
        """
        if card.location is target_location:
            return

        if card.location is Location.PLAY_AREA:
            for attachment in list(card.attachments):
                attachment.controller.move_card(attachment, attachment.discard_location)
            if card.parent is not None:
                card.parent.attachments.remove(card)
                card.parent = None
            origin = card.controller
            card.leaves_play()
        else:
            origin = card.owner

        if card.location is not None and card in origin.zones[card.location]:
            origin.zones[card.location].remove(card)

        destination = self if target_location is Location.PLAY_AREA else card.owner
        if target_location is Location.PLAY_AREA:
            card.controller = self
        destination.zones[target_location].append(card)
        card.move_to(target_location)

    def take_control(self, card) -> bool:
        """Take control of a card in play."""
        if card.location is not Location.PLAY_AREA or card.controller is self:
            return False
        card.controller.zones[Location.PLAY_AREA].remove(card)
        self.zones[Location.PLAY_AREA].append(card)
        card.controller = self
        logger.info("%s takes control of %s", self.name, card)
        return True

    def draw_cards(self, count: int = 1) -> List[Any]:
        """Draw cards from the top of the conflict deck."""
        drawn = []
        deck = self.zones[Location.CONFLICT_DECK]
        for _ in range(count):
            if not deck:
                break
            card = deck[0]
            self.move_card(card, Location.HAND)
            drawn.append(card)
        if drawn:
            logger.debug("%s draws %d card(s)", self.name, len(drawn))
        return drawn

    def replace_dynasty_card(self, location: Location) -> Optional[Any]:
        """Refill an empty dynasty province face down from the dynasty deck."""
        if location not in DYNASTY_PROVINCES:
            return None
        if any(card.type is not CardType.PROVINCE for card in self.zones[location]):
            return None
        deck = self.zones[Location.DYNASTY_DECK]
        if not deck:
            return None
        card = deck[0]
        self.move_card(card, location)
        card.facedown = True
        return card

    def attach(self, attachment, target, context=None) -> bool:
        """Attach a card to a character in play."""
        if not attachment.can_attach(target, context):
            logger.warning("%s cannot be attached to %s", attachment, target)
            return False
        self.move_card(attachment, Location.PLAY_AREA)
        attachment.parent = target
        target.attachments.append(attachment)
        self.game.emit_event(EventName.ON_CARD_ATTACHED, card=attachment, parent=target)
        return True

    def has_composure(self) -> bool:
        """A player has composure while an opponent has more honor."""
        return any(other.honor > self.honor for other in self.game.players if other is not self)

    def check_restrictions(self, action_type: str, context=None) -> bool:
        for restriction in self.game.effect_engine.get_effects(EffectName.RESTRICT, self):
            if restriction.is_match(action_type, context):
                return False
        return True

    def modify_honor(self, amount: int) -> None:
        self.honor = max(0, self.honor + amount)

    def begin_dynasty(self) -> List[Any]:
        """Reveal facedown cards in provinces and collect fate from the stronghold."""
        self.passed_dynasty = False
        revealed = []
        for location in DYNASTY_PROVINCES:
            for card in self.zones[location]:
                if card.facedown and card.type is not CardType.PROVINCE:
                    card.facedown = False
                    revealed.append(card)
                    self.game.emit_event(EventName.ON_CARD_REVEALED, card=card)

        stronghold = self.stronghold()
        if stronghold is not None:
            self.fate += stronghold.definition.fate
        return revealed

    # Selection

    def set_selectable_cards(self, cards: List[Any]) -> None:
        self.selectable_cards = list(cards)

    def clear_selectable_cards(self) -> None:
        self.selectable_cards = []
        self.selected_cards = []

    def get_card_selection_state(self, card) -> Dict[str, bool]:
        state = {}
        if card in self.selectable_cards:
            state['selectable'] = True
        if card in self.selected_cards:
            state['selected'] = True
        return state

    def get_state(self, active_player) -> Dict[str, Any]:
        """Project this player's state as seen by ``active_player``."""
        is_self = active_player is self
        piles = {}
        for location in (Location.HAND, Location.PLAY_AREA,
                         Location.CONFLICT_DISCARD_PILE, Location.DYNASTY_DISCARD_PILE,
                         Location.REMOVED_FROM_GAME) + tuple(sorted(PROVINCE_LOCATIONS, key=lambda l: l.value)):
            hide = location is Location.HAND and not is_self
            piles[location.value] = [card.get_summary(active_player, hide) for card in self.zones[location]]

        state = {
            'name': self.name,
            'honor': self.honor,
            'fate': self.fate,
            'firstPlayer': self.first_player,
            'passedDynasty': self.passed_dynasty,
            'cardPiles': piles,
        }
        for location in DECK_LOCATIONS:
            state[f"{location.value} size"] = len(self.zones[location])
        return state

    def __str__(self) -> str:
        return self.name
