"""Tests for command acceptance and manual-mode menu commands."""

from l5r_sim.config import GameSettings
from l5r_sim.models.cards import MenuItem
from l5r_sim.models.constants import CardType, ConflictType, EventName, Location, Token
from tests.helpers import create_card_in, create_test_game, make_definition, put_into_play


def province_view(game, observer, owner_name, location='province 1'):
    return game.get_state(observer)['players'][owner_name]['cardPiles'][location][0]


class TestReveal:
    """Revealing a facedown province through its menu."""

    def test_reveal_changes_what_the_opponent_sees(self, game, alice):
        province = create_card_in(game, alice, make_definition("Pilgrimage", CardType.PROVINCE),
                                  Location.PROVINCE_ONE, facedown=True)
        revealed = []
        game.event_manager.subscribe(EventName.ON_CARD_REVEALED, revealed.append)

        before = province_view(game, 'Bob', 'Alice')
        assert before == {'controller': 'Alice', 'facedown': True, 'inConflict': False, 'location': 'province 1'}

        assert game.handle_command('Alice', province.uuid, 'reveal')

        after = province_view(game, 'Bob', 'Alice')
        assert after['facedown'] is False
        assert after['name'] == "Pilgrimage"
        assert after['uuid'] == province.uuid
        assert after['menu'] == [
            {'command': 'click', 'text': 'Select Card'},
            {'command': 'break', 'text': 'Break/unbreak this province'},
        ]
        assert [event.card for event in revealed] == [province]

    def test_hand_is_hidden_from_opponent(self, game, alice):
        create_card_in(game, alice, make_definition("Banzai", CardType.EVENT), Location.HAND)

        assert game.get_state('Alice')['players']['Alice']['cardPiles']['hand'][0]['name'] == "Banzai"
        assert game.get_state('Bob')['players']['Alice']['cardPiles']['hand'][0]['facedown'] is True


class TestRejectedCommands:
    """Commands that are not currently offered change nothing."""

    def test_command_not_in_menu(self, game, alice):
        province = create_card_in(game, alice, make_definition("Pilgrimage", CardType.PROVINCE),
                                  Location.PROVINCE_ONE, facedown=True)
        state = game.get_state('Alice')

        assert game.handle_command('Alice', province.uuid, 'break') is False

        assert not province.broken
        assert game.get_state('Alice') == state

    def test_unknown_player_and_card(self, game, alice):
        card = put_into_play(game, alice, make_definition())

        assert game.handle_command('Carol', card.uuid, 'bow') is False
        assert game.handle_command('Alice', 'no-such-card', 'bow') is False
        assert not card.bowed

    def test_only_the_controller_may_use_the_menu(self, game, alice):
        card = put_into_play(game, alice, make_definition())

        assert game.handle_command('Bob', card.uuid, 'bow') is False
        assert not card.bowed

    def test_menu_disabled_outside_manual_mode(self):
        game = create_test_game(GameSettings(manual_mode=False))
        card = put_into_play(game, game.players[0], make_definition())

        assert game.handle_command('Alice', card.uuid, 'bow') is False
        assert not card.bowed

    def test_click_without_prompt(self, game, alice):
        card = put_into_play(game, alice, make_definition())

        assert game.handle_command('Alice', card.uuid, 'click') is False

    def test_button_for_unknown_prompt(self, game):
        assert game.handle_command('Alice', 'stale-prompt', 'menuButton', 'pass') is False


class TestMenuCommands:
    """Manual corrections applied directly to cards."""

    def test_bow_toggles(self, game, alice):
        card = put_into_play(game, alice, make_definition())

        game.handle_command('Alice', card.uuid, 'bow')
        assert card.bowed
        game.handle_command('Alice', card.uuid, 'bow')
        assert not card.bowed

    def test_fate_commands_clamp_at_zero(self, game, alice):
        card = put_into_play(game, alice, make_definition())

        game.handle_command('Alice', card.uuid, 'addfate')
        assert card.get_token_count(Token.FATE) == 1
        game.handle_command('Alice', card.uuid, 'remfate')
        game.handle_command('Alice', card.uuid, 'remfate')

        assert card.tokens == {}

    def test_give_control(self, game, alice, bob):
        card = put_into_play(game, alice, make_definition())

        assert game.handle_command('Alice', card.uuid, 'control')

        assert card.controller is bob
        assert card in bob.cards_in_play
        assert game.get_state('Bob')['players']['Bob']['cardPiles']['play area'][0]['controlled'] is True

    def test_move_needs_a_conflict(self, game, alice, bob):
        card = put_into_play(game, alice, make_definition())

        assert game.handle_command('Alice', card.uuid, 'move') is False

        game.start_conflict(alice, ConflictType.MILITARY)
        assert game.handle_command('Alice', card.uuid, 'move')
        assert card.is_attacking()
        assert game.get_state('Bob')['conflict']['attackers'] == [card.uuid]

        game.handle_command('Alice', card.uuid, 'move')
        assert not card.in_conflict

    def test_break_toggles_province(self, game, alice):
        province = create_card_in(game, alice, make_definition("Pilgrimage", CardType.PROVINCE),
                                  Location.PROVINCE_ONE)

        game.handle_command('Alice', province.uuid, 'break')
        assert province.broken
        game.handle_command('Alice', province.uuid, 'break')
        assert not province.broken

    def test_extra_menu_items_are_accepted(self, game, alice):
        card = put_into_play(game, alice, make_definition(menu=(MenuItem('duel', 'Initiate a duel'),)))

        assert game.handle_command('Alice', card.uuid, 'duel')
