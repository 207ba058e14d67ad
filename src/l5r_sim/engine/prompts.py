"""Prompts: steps that suspend the pipeline until a player decides.

A prompt records the decision in its ``handle_*`` method and acts on it the
next time the pipeline executes it, so all game mutation happens inside
step execution.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..models.constants import EventName
from ..utils.logging_config import get_game_logger
from .step_system import AwaitingInput, BaseStep, ChoiceType, StepStatus

logger = get_game_logger(__name__)

PASS = 'pass'


class BasePrompt(BaseStep):
    """A step waiting on one player."""

    choice_type = ChoiceType.MENU
    title = "Choose"

    def __init__(self, game, player):
        super().__init__(game)
        self.player = player
        self.uuid = game.next_uuid()
        self._announced = False

    def suspend(self) -> bool:
        """Mark the prompt as waiting and yield control."""
        if not self._announced:
            logger.info("Waiting for %s: %s", self.player, self.title)
            self._announced = True
        self.status = StepStatus.WAITING_FOR_INPUT
        return False

    def finish(self) -> bool:
        self.status = StepStatus.COMPLETED
        return True

    def buttons(self) -> List[Dict[str, str]]:
        return []

    def selectable(self) -> List[str]:
        return []

    def get_awaiting_input(self) -> List[AwaitingInput]:
        if self.status is StepStatus.COMPLETED:
            return []
        return [AwaitingInput(
            prompt_uuid=self.uuid,
            player=self.player.name,
            title=self.title,
            choice_type=self.choice_type,
            buttons=self.buttons(),
            selectable=self.selectable(),
        )]

    def _is_for(self, player, uuid: Optional[str]) -> bool:
        return player is self.player and uuid == self.uuid

    def _button(self, text: str, arg: str) -> Dict[str, str]:
        return {'text': text, 'arg': arg, 'uuid': self.uuid}


class MenuPrompt(BasePrompt):
    """Offer a player a list of buttons."""

    def __init__(self, game, player, title: str, choices: Sequence[Tuple[str, str]],
                 on_select: Callable[[str], Any]):
        super().__init__(game, player)
        self.title = title
        self.choices = list(choices)
        self.on_select = on_select
        self.choice: Optional[str] = None

    def buttons(self) -> List[Dict[str, str]]:
        return [self._button(text, arg) for text, arg in self.choices]

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        if not self._is_for(player, uuid) or arg not in {arg for _, arg in self.choices}:
            return False
        self.choice = arg
        return True

    def execute(self) -> bool:
        if self.choice is None:
            return self.suspend()
        self.on_select(self.choice)
        return self.finish()


class SelectCardPrompt(BasePrompt):
    """Ask a player to click one of a set of cards."""

    choice_type = ChoiceType.SELECT_CARD

    def __init__(self, game, player, title: str, cards: Sequence[Any], on_select: Callable[[Any], Any],
                 optional: bool = False, on_cancel: Optional[Callable[[], Any]] = None):
        super().__init__(game, player)
        self.title = title
        self.cards = list(cards)
        self.on_select = on_select
        self.optional = optional
        self.on_cancel = on_cancel
        self.selected = None
        self.cancelled = False

    def buttons(self) -> List[Dict[str, str]]:
        return [self._button('Done', 'done')] if self.optional else []

    def selectable(self) -> List[str]:
        return [card.uuid for card in self.cards]

    def handle_card_clicked(self, player, card) -> bool:
        if player is not self.player or card not in self.cards:
            return False
        self.selected = card
        return True

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        if not self.optional or not self._is_for(player, uuid) or arg != 'done':
            return False
        self.cancelled = True
        return True

    def execute(self) -> bool:
        if self.selected is None and not self.cancelled:
            self.player.set_selectable_cards(self.cards)
            return self.suspend()

        self.player.clear_selectable_cards()
        if self.selected is not None:
            self.on_select(self.selected)
        elif self.on_cancel is not None:
            self.on_cancel()
        return self.finish()


class HonorBidPrompt(BaseStep):
    """Every player secretly picks an honor bid; the bids are acted on together."""

    title = "Choose your bid"
    BIDS = ('1', '2', '3', '4', '5')

    def __init__(self, game, on_complete: Callable[[Dict[Any, int]], Any]):
        super().__init__(game)
        self.uuid = game.next_uuid()
        self.on_complete = on_complete
        self.bids: Dict[Any, int] = {}

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        if uuid != self.uuid or player in self.bids or arg not in self.BIDS:
            return False
        self.bids[player] = int(arg)
        logger.info("%s has chosen a bid", player)
        return True

    def get_awaiting_input(self) -> List[AwaitingInput]:
        if self.status is StepStatus.COMPLETED:
            return []
        buttons = [{'text': bid, 'arg': bid, 'uuid': self.uuid} for bid in self.BIDS]
        return [
            AwaitingInput(self.uuid, player.name, self.title, ChoiceType.HONOR_BID, list(buttons))
            for player in self.game.get_players_in_first_player_order() if player not in self.bids
        ]

    def execute(self) -> bool:
        if len(self.bids) < len(self.game.players):
            self.status = StepStatus.WAITING_FOR_INPUT
            return False
        self.on_complete(dict(self.bids))
        self.status = StepStatus.COMPLETED
        return True


class ActionWindow(BaseStep):
    """Players alternate taking an action or passing until all pass in a row."""

    title = "Action Window"

    def __init__(self, game, title: Optional[str] = None):
        super().__init__(game)
        self.uuid = game.next_uuid()
        if title:
            self.title = title
        self.players = game.get_players_in_first_player_order()
        self.current_index = 0
        self.consecutive_passes = 0
        self._pending_pass = False
        self._pending_abilities: Optional[List[Any]] = None

    @property
    def current_player(self):
        return self.players[self.current_index % len(self.players)]

    def playable_cards(self, player) -> List[Any]:
        return [card for card in self.game.all_cards() if card.get_playable_abilities(player)]

    def handle_menu_command(self, player, arg: Optional[str], uuid: str) -> bool:
        if player is not self.current_player or uuid != self.uuid or arg != PASS:
            return False
        self._pending_pass = True
        return True

    def handle_card_clicked(self, player, card) -> bool:
        if player is not self.current_player:
            return False
        abilities = card.get_playable_abilities(player)
        if not abilities:
            return False
        self._pending_abilities = abilities
        return True

    def get_awaiting_input(self) -> List[AwaitingInput]:
        if self.status is StepStatus.COMPLETED:
            return []
        player = self.current_player
        return [AwaitingInput(
            prompt_uuid=self.uuid,
            player=player.name,
            title=self.title,
            choice_type=ChoiceType.ACTION_OR_PASS,
            buttons=[{'text': 'Pass', 'arg': PASS, 'uuid': self.uuid}],
            selectable=[card.uuid for card in self.playable_cards(player)],
        )]

    def on_pass(self, player) -> None:
        logger.info("%s passes", player)
        self.consecutive_passes += 1
        self.advance()

    def on_action(self, player, abilities: List[Any]) -> None:
        self.consecutive_passes = 0
        if len(abilities) == 1:
            self.game.initiate_ability(abilities[0], player)
        else:
            choices = [(str(ability), str(index)) for index, ability in enumerate(abilities)]
            self.game.queue_step(MenuPrompt(
                self.game, player, "Choose an ability", choices,
                lambda arg: self.game.initiate_ability(abilities[int(arg)], player)))
        self.advance()

    def advance(self) -> None:
        self.current_index += 1

    def is_complete(self) -> bool:
        return self.consecutive_passes >= len(self.players)

    def execute(self) -> bool:
        player = self.current_player
        if self._pending_pass:
            self._pending_pass = False
            self.on_pass(player)
        elif self._pending_abilities is not None:
            abilities, self._pending_abilities = self._pending_abilities, None
            self.on_action(player, abilities)
            return False

        if self.is_complete():
            self.status = StepStatus.COMPLETED
            return True
        self.status = StepStatus.WAITING_FOR_INPUT
        return False


class DynastyActionWindow(ActionWindow):
    """Dynasty action window: passing is final, and the first player to pass gains one fate."""

    title = "Play cards from provinces"

    def __init__(self, game):
        super().__init__(game)
        self.skip_passed()

    def on_pass(self, player) -> None:
        if not any(other.passed_dynasty for other in self.players):
            player.fate += 1
            logger.info("%s is the first to pass and gains 1 fate", player)
        player.passed_dynasty = True
        self.game.emit_event(EventName.ON_PASS_DYNASTY, player=player)
        self.advance()

    def on_action(self, player, abilities: List[Any]) -> None:
        super().on_action(player, abilities)
        self.skip_passed()

    def advance(self) -> None:
        super().advance()
        self.skip_passed()

    def skip_passed(self) -> None:
        if self.is_complete():
            return
        while self.current_player.passed_dynasty:
            self.current_index += 1

    def is_complete(self) -> bool:
        return all(player.passed_dynasty for player in self.players)
