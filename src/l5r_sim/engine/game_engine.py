"""Game engine: owns game state and drives the round pipeline."""

import itertools
import uuid
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..config import GameSettings
from ..errors import GameSetupError
from ..models.cards.base_card import BaseCard
from ..models.cards.card_definition import CardDefinition
from ..models.constants import (
    ConflictType, DYNASTY_PROVINCES, Duration, Element, EventName, Location, PhaseName
)
from ..models.game.conflict import Conflict, Ring
from ..models.game.player import Player
from ..utils.logging_config import get_game_logger
from .effect_engine import EffectEngine
from .event_system import Event, GameEventManager
from .menu_commands import MenuCommands
from .phases import ROUND_PHASES
from .step_system import BaseStep, GamePipeline, SimpleStep
from .trigger_window import AbilityResolver, EventWindow

logger = get_game_logger(__name__)


class GameEngine:
    """Runs one game.

    All progress happens inside :meth:`continue_execution`, which runs the
    pipeline until a step waits for input. Collaborators feed decisions back
    through :meth:`handle_command` and read state through :meth:`get_state`.
    """

    def __init__(self, player_names: Sequence[str], settings: Optional[GameSettings] = None):
        if len(player_names) < 2:
            raise GameSetupError(f"A game needs at least two players, got {len(player_names)}")
        if len(set(player_names)) != len(player_names):
            raise GameSetupError(f"Player names must be unique: {list(player_names)}")

        self.settings = settings or GameSettings()
        self.effect_engine = EffectEngine()
        self.event_manager = GameEventManager()
        self.pipeline = GamePipeline()
        self.menu_commands = MenuCommands(self)
        self._uuid_counter = itertools.count()

        self.players: List[Player] = [Player(name, self) for name in player_names]
        self.players[0].first_player = True
        self.rings: Dict[Element, Ring] = {element: Ring(element) for element in Element}

        self.current_conflict: Optional[Conflict] = None
        self.current_phase: Optional[PhaseName] = None
        self.round_number = 0
        self.event_log: List[Dict[str, Any]] = []
        self.started = False
        self.finished = False

    @property
    def manual_mode(self) -> bool:
        return self.settings.manual_mode

    def next_uuid(self) -> str:
        """Deterministic identifier for cards and prompts."""
        return str(uuid.uuid5(uuid.NAMESPACE_OID, f"{self.settings.seed}:{next(self._uuid_counter)}"))

    # Setup

    def create_card(self, player: Player, definition: CardDefinition) -> BaseCard:
        """Instantiate a card for a player. Raises CardConfigurationError for bad declarations."""
        card = BaseCard(player, definition)
        card.apply_any_location_persistent_effects()
        return card

    def setup_player_cards(self, player: Player, stronghold: Optional[CardDefinition] = None,
                           provinces: Iterable[CardDefinition] = (),
                           dynasty_deck: Iterable[CardDefinition] = (),
                           conflict_deck: Iterable[CardDefinition] = (),
                           hand: Iterable[CardDefinition] = ()) -> List[BaseCard]:
        """Create a player's cards and put them in their starting locations.

        Up to four provinces fill the dynasty provinces; a fifth goes under
        the stronghold. Provinces and decks start face down.
        """
        if self.started:
            raise GameSetupError("Cards must be set up before the game starts")

        created = []

        def place(definition: CardDefinition, location: Location, facedown: bool) -> BaseCard:
            card = self.create_card(player, definition)
            player.move_card(card, location)
            card.facedown = facedown
            created.append(card)
            return card

        if stronghold is not None:
            place(stronghold, Location.STRONGHOLD_PROVINCE, False)

        province_locations = DYNASTY_PROVINCES + (Location.STRONGHOLD_PROVINCE,)
        provinces = list(provinces)
        if len(provinces) > len(province_locations):
            raise GameSetupError(f"{player} has {len(provinces)} provinces, at most 5 are allowed")
        for definition, location in zip(provinces, province_locations):
            place(definition, location, True)

        for definition in dynasty_deck:
            place(definition, Location.DYNASTY_DECK, True)
        for definition in conflict_deck:
            place(definition, Location.CONFLICT_DECK, True)
        for definition in hand:
            place(definition, Location.HAND, False)
        return created

    def start(self) -> bool:
        """Begin the game and run until the first decision."""
        if self.started:
            raise GameSetupError("The game has already started")
        self.started = True
        self.pipeline.initialise([
            SimpleStep(self, self.setup_game, description="setup game"),
            SimpleStep(self, self.begin_round, description="begin round"),
        ])
        return self.continue_execution()

    def setup_game(self) -> None:
        for player in self.players:
            for location in DYNASTY_PROVINCES:
                player.replace_dynasty_card(location)
        logger.info("Game set up for %s", ", ".join(player.name for player in self.players))

    # Rounds

    def begin_round(self) -> None:
        self.round_number += 1
        logger.info("Round %d begins", self.round_number)
        for phase_class in ROUND_PHASES:
            self.queue_step(phase_class(self))
        self.queue_step(SimpleStep(self, self.end_round, description="end round"))

    def end_round(self) -> None:
        self.effect_engine.end_duration(Duration.UNTIL_END_OF_ROUND)
        for card in self.all_cards():
            card.abilities.reset_limits()
        for ring in self.rings.values():
            ring.reset()
        self.emit_event(EventName.ON_ROUND_ENDED, round=self.round_number)
        self.current_phase = None
        self.rotate_first_player()

        if self.settings.max_rounds and self.round_number >= self.settings.max_rounds:
            self.finished = True
            logger.info("Game finished after %d round(s)", self.round_number)
            return
        self.queue_step(SimpleStep(self, self.begin_round, description="begin round"))

    def rotate_first_player(self) -> None:
        first = self.get_first_player()
        next_first = self.players[(self.players.index(first) + 1) % len(self.players)]
        first.first_player = False
        next_first.first_player = True

    # Pipeline

    def continue_execution(self) -> bool:
        """Run the pipeline. Returns True when no step is waiting for input."""
        return self.pipeline.execute()

    def queue_step(self, step: BaseStep) -> None:
        self.pipeline.queue_step(step)

    def open_event_window(self, events: List[Event]) -> None:
        self.queue_step(EventWindow(self, events))

    def raise_event(self, name: EventName, handler=None, **params) -> Event:
        """Raise an event through a window so interrupts and reactions can respond."""
        event = Event(name, params, handler=handler)
        self.open_event_window([event])
        return event

    def emit_event(self, name: EventName, **params) -> Event:
        """Publish a notification event to callbacks and the log, without a window."""
        event = Event(name, params)
        event.resolved = True
        self.record_event(event)
        self.event_manager.publish(event)
        return event

    def record_event(self, event: Event) -> None:
        entry = {
            'round': self.round_number,
            'phase': self.current_phase.value if self.current_phase else None,
        }
        entry.update(event.to_dict())
        self.event_log.append(entry)

    def initiate_ability(self, ability, player) -> None:
        self.queue_step(AbilityResolver(self, ability, ability.create_context(player)))

    # Queries

    def get_first_player(self) -> Player:
        for player in self.players:
            if player.first_player:
                return player
        return self.players[0]

    def get_players_in_first_player_order(self) -> List[Player]:
        index = self.players.index(self.get_first_player())
        return self.players[index:] + self.players[:index]

    def get_other_player(self, player: Player) -> Optional[Player]:
        for other in self.players:
            if other is not player:
                return other
        return None

    def get_player_by_name(self, name: str) -> Optional[Player]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def all_cards(self) -> List[BaseCard]:
        return [card for player in self.players for card in player.all_cards()]

    def find_card(self, card_uuid: str) -> Optional[BaseCard]:
        for card in self.all_cards():
            if card.uuid == card_uuid:
                return card
        return None

    # Conflicts

    def is_during_conflict(self, conflict_type=None) -> bool:
        if self.current_conflict is None:
            return False
        if conflict_type is None:
            return True
        conflict_type = ConflictType(conflict_type) if isinstance(conflict_type, str) else conflict_type
        return self.current_conflict.conflict_type is conflict_type

    def start_conflict(self, attacking_player: Player, conflict_type: ConflictType,
                       ring: Optional[Ring] = None) -> Optional[Conflict]:
        if self.current_conflict is not None:
            logger.warning("Cannot start a conflict while another is in progress")
            return None
        conflict = Conflict(attacking_player, self.get_other_player(attacking_player), conflict_type, ring)
        self.current_conflict = conflict
        logger.info("%s declares a %s conflict", attacking_player, conflict_type.value)
        self.emit_event(EventName.ON_CONFLICT_STARTED, player=attacking_player, conflict_type=conflict_type)
        return conflict

    def end_conflict(self) -> None:
        conflict = self.current_conflict
        if conflict is None:
            return
        self.effect_engine.end_duration(Duration.UNTIL_END_OF_CONFLICT)
        conflict.end()
        self.current_conflict = None
        self.emit_event(EventName.ON_CONFLICT_FINISHED, conflict_type=conflict.conflict_type)

    # Commands

    def handle_command(self, player_name: str, target_uuid: str, command: str, arg: Optional[str] = None) -> bool:
        """Accept a player's command, or reject it without changing anything.

        ``menuButton`` answers the prompt with uuid ``target_uuid``; ``click``
        selects a card for the current step; any other command must be on the
        card's current menu.
        """
        player = self.get_player_by_name(player_name)
        if player is None:
            logger.warning("Rejected %s: unknown player %r", command, player_name)
            return False

        if command == 'menuButton':
            accepted = self.pipeline.handle_menu_command(player, arg, target_uuid)
        else:
            card = self.find_card(target_uuid)
            if card is None:
                logger.warning("Rejected %s from %s: unknown card %s", command, player, target_uuid)
                return False
            if command == 'click':
                accepted = self.pipeline.handle_card_clicked(player, card)
            else:
                accepted = self._handle_menu_item(player, card, command, arg)

        if not accepted:
            logger.warning("Rejected %s from %s on %s", command, player, target_uuid)
            return False
        self.continue_execution()
        return True

    def _handle_menu_item(self, player: Player, card: BaseCard, command: str, arg: Optional[str]) -> bool:
        menu = card.get_menu() or []
        if command not in [item['command'] for item in menu] or command == 'click':
            return False
        if player is not card.controller:
            return False
        return self.menu_commands.execute(player, card, command, arg)

    def get_pending_input(self, player_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Serializable records of the decisions the engine is waiting for."""
        return [
            awaiting.to_dict() for awaiting in self.pipeline.get_awaiting_input()
            if player_name is None or awaiting.player == player_name
        ]

    def get_state(self, player_name: str) -> Dict[str, Any]:
        """Project the game as seen by one player."""
        active_player = self.get_player_by_name(player_name)
        if active_player is None:
            raise KeyError(f"Unknown player: {player_name}")
        conflict = self.current_conflict
        return {
            'round': self.round_number,
            'phase': self.current_phase.value if self.current_phase else None,
            'players': {player.name: player.get_state(active_player) for player in self.players},
            'rings': {
                element.value: {
                    'conflictType': ring.conflict_type.value,
                    'claimedBy': ring.claimed_by.name if ring.claimed_by else None,
                }
                for element, ring in self.rings.items()
            },
            'conflict': None if conflict is None else {
                'type': conflict.conflict_type.value,
                'attackingPlayer': conflict.attacking_player.name,
                'attackers': [card.uuid for card in conflict.attackers],
                'defenders': [card.uuid for card in conflict.defenders],
            },
            'pendingInput': self.get_pending_input(player_name),
        }
