"""Manual-mode card menu commands."""

from typing import Callable, Dict, Optional

from ..models.constants import EventName, Token
from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class MenuCommands:
    """Applies a manual-mode command a player picked from a card's menu.

    Commands change state directly, without event windows, as a player
    correcting the board by hand would.
    """

    def __init__(self, game):
        self.game = game
        self._handlers: Dict[str, Callable] = {
            'reveal': self.reveal,
            'bow': self.bow,
            'addfate': self.add_fate,
            'remfate': self.remove_fate,
            'move': self.move,
            'control': self.give_control,
            'break': self.toggle_broken,
        }

    def execute(self, player, card, command: str, arg: Optional[str] = None) -> bool:
        handler = self._handlers.get(command)
        if handler is None:
            # Extra menu items declared by a card only announce themselves
            logger.info("%s uses '%s' on %s", player, command, card)
            return True
        return handler(player, card)

    def reveal(self, player, card) -> bool:
        card.facedown = False
        logger.info("%s reveals %s", player, card)
        self.game.emit_event(EventName.ON_CARD_REVEALED, card=card)
        return True

    def bow(self, player, card) -> bool:
        if card.bowed:
            card.ready()
            logger.info("%s readies %s", player, card)
        else:
            card.bow()
            logger.info("%s bows %s", player, card)
        return True

    def add_fate(self, player, card) -> bool:
        card.add_token(Token.FATE, 1)
        logger.info("%s adds a fate to %s", player, card)
        return True

    def remove_fate(self, player, card) -> bool:
        card.remove_token(Token.FATE, 1)
        logger.info("%s removes a fate from %s", player, card)
        return True

    def move(self, player, card) -> bool:
        conflict = self.game.current_conflict
        if conflict is None:
            logger.warning("%s cannot move %s: no conflict in progress", player, card)
            return False
        if card.in_conflict:
            conflict.remove_from_conflict(card)
            logger.info("%s moves %s home", player, card)
        else:
            conflict.add_participant(card)
            logger.info("%s moves %s into the conflict", player, card)
        return True

    def give_control(self, player, card) -> bool:
        other = self.game.get_other_player(card.controller)
        if other is None:
            return False
        return other.take_control(card)

    def toggle_broken(self, player, card) -> bool:
        card.broken = not card.broken
        logger.info("%s %s %s", player, "breaks" if card.broken else "restores", card)
        return True
