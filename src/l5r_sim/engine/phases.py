"""The four phases of a round, each a fixed list of steps."""

from typing import Any, Dict, List

from ..models.abilities.ability_context import AbilityContext
from ..models.abilities.game_actions import DiscardFromPlayAction, RemoveFateAction
from ..models.constants import CardType, Duration, EventName, PhaseName, Token
from ..utils.logging_config import get_game_logger
from .prompts import ActionWindow, DynastyActionWindow, HonorBidPrompt
from .step_system import BaseStep, PipelineStep, SimpleStep

logger = get_game_logger(__name__)


class Phase(PipelineStep):
    """A phase: start, the phase's own steps, end."""

    name: PhaseName

    def __init__(self, game):
        super().__init__(game)
        self.initialise(
            [SimpleStep(game, self.start_phase, description=f"start {self.name.value} phase")]
            + self.create_steps()
            + [SimpleStep(game, self.end_phase, description=f"end {self.name.value} phase"),
               SimpleStep(game, self.expire_phase_effects, description="expire phase effects")]
        )

    def create_steps(self) -> List[BaseStep]:
        return []

    def start_phase(self) -> None:
        self.game.current_phase = self.name
        logger.info("Round %d: %s phase begins", self.game.round_number, self.name.value)
        self.game.raise_event(EventName.ON_PHASE_STARTED, phase=self.name)

    def end_phase(self) -> None:
        logger.info("Round %d: %s phase ends", self.game.round_number, self.name.value)
        self.game.raise_event(EventName.ON_PHASE_ENDED, phase=self.name)

    def expire_phase_effects(self) -> None:
        # Runs after the phase-ended window has resolved
        self.game.effect_engine.end_duration(Duration.UNTIL_END_OF_PHASE)

    def __str__(self) -> str:
        return f"{self.name.value.capitalize()}Phase"


class DynastyPhase(Phase):
    """Reveal provinces, collect fate, then play cards from provinces until everyone passes."""

    name = PhaseName.DYNASTY

    def create_steps(self) -> List[BaseStep]:
        return [
            SimpleStep(self.game, self.begin_dynasty, description="reveal and collect fate"),
            SimpleStep(self.game, self.open_action_window, description="dynasty action window"),
        ]

    def begin_dynasty(self) -> None:
        for player in self.game.get_players_in_first_player_order():
            revealed = player.begin_dynasty()
            logger.debug("%s reveals %d card(s) and has %d fate", player, len(revealed), player.fate)

    def open_action_window(self) -> None:
        self.queue_step(DynastyActionWindow(self.game))


class DrawPhase(Phase):
    """Secret honor bids, honor exchange, then each player draws their bid."""

    name = PhaseName.DRAW

    def create_steps(self) -> List[BaseStep]:
        return [
            HonorBidPrompt(self.game, self.reveal_bids),
            SimpleStep(self.game, self.draw_cards, description="draw cards"),
        ]

    def reveal_bids(self, bids: Dict[Any, int]) -> None:
        for player, bid in bids.items():
            player.honor_bid = bid
        logger.info("Honor bids: %s", ", ".join(f"{player}={bid}" for player, bid in bids.items()))
        self.game.emit_event(EventName.ON_HONOR_DIALS_REVEALED, bids={p.name: b for p, b in bids.items()})
        self.transfer_honor()

    def transfer_honor(self) -> None:
        """The higher bidder gives the difference in honor to the lower bidder."""
        players = self.game.get_players_in_first_player_order()
        if len(players) != 2:
            return
        high, low = sorted(players, key=lambda player: player.honor_bid, reverse=True)
        difference = high.honor_bid - low.honor_bid
        if difference:
            amount = min(difference, high.honor)
            high.modify_honor(-amount)
            low.modify_honor(amount)
            logger.info("%s gives %d honor to %s", high, amount, low)

    def draw_cards(self) -> None:
        for player in self.game.get_players_in_first_player_order():
            player.draw_cards(player.honor_bid)


class ConflictPhase(Phase):
    """An action window; conflicts themselves are declared through the game's conflict API."""

    name = PhaseName.CONFLICT

    def create_steps(self) -> List[BaseStep]:
        return [
            SimpleStep(self.game, self.open_action_window, description="conflict action window"),
            SimpleStep(self.game, self.game.end_conflict, condition=self.game.is_during_conflict,
                       description="close open conflict"),
        ]

    def open_action_window(self) -> None:
        self.queue_step(ActionWindow(self.game, "Conflict Action Window"))


class FatePhase(Phase):
    """Discard characters without fate, remove one fate from the rest, then ready cards."""

    name = PhaseName.FATE

    def create_steps(self) -> List[BaseStep]:
        return [
            SimpleStep(self.game, self.discard_characters_without_fate, description="discard characters"),
            SimpleStep(self.game, self.remove_fate_from_characters, description="remove fate"),
            SimpleStep(self.game, self.ready_cards, description="ready cards"),
        ]

    def _characters(self, player) -> List[Any]:
        return [card for card in player.cards_in_play if card.type is CardType.CHARACTER]

    def discard_characters_without_fate(self) -> None:
        for player in self.game.get_players_in_first_player_order():
            cards = [card for card in self._characters(player) if not card.has_token(Token.FATE)]
            if cards:
                context = AbilityContext(game=self.game, source=None, player=player)
                DiscardFromPlayAction(target=cards).resolve(context)

    def remove_fate_from_characters(self) -> None:
        for player in self.game.get_players_in_first_player_order():
            cards = [card for card in self._characters(player) if card.has_token(Token.FATE)]
            if cards:
                context = AbilityContext(game=self.game, source=None, player=player)
                RemoveFateAction(1, target=cards).resolve(context)

    def ready_cards(self) -> None:
        for player in self.game.get_players_in_first_player_order():
            cards = list(player.cards_in_play)
            stronghold = player.stronghold()
            if stronghold is not None:
                cards.append(stronghold)
            for card in cards:
                if card.bowed and card.readies_during_ready_phase():
                    card.ready()
                    self.game.emit_event(EventName.ON_CARD_READIED, card=card)


ROUND_PHASES = (DynastyPhase, DrawPhase, ConflictPhase, FatePhase)
