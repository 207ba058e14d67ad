"""Tests for event windows and triggered-ability resolution order."""

from l5r_sim.config import GameSettings, TriggerOrderPolicy
from l5r_sim.models.constants import AbilityType, EventName
from tests.helpers import choose_button, create_test_game, make_definition, press_pass, put_into_play


def always(event, context):
    return True


def add_reactor(game, player, name, kind, log, condition=None, handler=None, limit=1):
    """Put a character into play with one triggered ability on ON_CARD_BOWED."""
    def setup(ability):
        ability.triggered_ability(kind, name, when={EventName.ON_CARD_BOWED: always},
                                  condition=condition,
                                  handler=handler or (lambda context: log.append(name)),
                                  limit=limit)

    return put_into_play(game, player, make_definition(f"{name} card", setup=setup))


def raise_bow(game, log):
    event = game.raise_event(EventName.ON_CARD_BOWED, handler=lambda event: log.append('primary'))
    game.continue_execution()
    return event


class TestWindowOrder:
    """Interrupts, primary effect and reactions resolve in a fixed order."""

    def test_full_resolution_order(self, game, alice):
        log = []
        add_reactor(game, alice, 'reaction', AbilityType.REACTION, log)
        add_reactor(game, alice, 'forced reaction', AbilityType.FORCED_REACTION, log)
        add_reactor(game, alice, 'interrupt', AbilityType.INTERRUPT, log)
        add_reactor(game, alice, 'forced interrupt', AbilityType.FORCED_INTERRUPT, log)

        raise_bow(game, log)
        assert log == ['forced interrupt']

        choose_button(game, 'Alice', 'interrupt')
        assert log == ['forced interrupt', 'interrupt', 'primary', 'forced reaction']

        choose_button(game, 'Alice', 'reaction')
        assert log == ['forced interrupt', 'interrupt', 'primary', 'forced reaction', 'reaction']
        assert game.get_pending_input() == []

    def test_would_interrupt_resolves_before_forced_interrupt(self, game, alice):
        log = []
        add_reactor(game, alice, 'forced interrupt', AbilityType.FORCED_INTERRUPT, log)
        add_reactor(game, alice, 'would interrupt', AbilityType.WOULD_INTERRUPT, log)

        raise_bow(game, log)
        choose_button(game, 'Alice', 'would interrupt')

        assert log == ['would interrupt', 'forced interrupt', 'primary']

    def test_ability_whose_condition_fails_is_skipped(self, game, alice):
        log = []
        add_reactor(game, alice, 'reaction', AbilityType.REACTION, log, condition=lambda context: False)

        raise_bow(game, log)

        assert log == ['primary']
        assert game.get_pending_input() == []

    def test_interrupt_can_cancel_the_event(self, game, alice):
        """A cancelled event skips its primary effect and gets no reactions."""
        log = []
        add_reactor(game, alice, 'cancel', AbilityType.FORCED_INTERRUPT, log,
                    handler=lambda context: context.event.cancel())
        add_reactor(game, alice, 'reaction', AbilityType.FORCED_REACTION, log)

        event = raise_bow(game, log)

        assert event.cancelled
        assert log == []
        assert game.get_pending_input() == []

    def test_passing_declines_optional_ability(self, game, alice):
        log = []
        add_reactor(game, alice, 'reaction', AbilityType.REACTION, log)

        raise_bow(game, log)
        press_pass(game, 'Alice')

        assert log == ['primary']
        assert game.get_pending_input() == []

    def test_limit_is_consumed_on_use(self, game, alice):
        log = []
        card = add_reactor(game, alice, 'forced reaction', AbilityType.FORCED_REACTION, log)

        raise_bow(game, log)
        raise_bow(game, log)

        assert log == ['primary', 'forced reaction', 'primary']
        assert card.abilities.reactions[0].limit.use_count == 1


class TestForcedWindow:
    """Several forced abilities at once."""

    def test_first_player_orders_simultaneous_forced_abilities(self, game, alice, bob):
        log = []
        add_reactor(game, alice, 'first', AbilityType.FORCED_REACTION, log)
        add_reactor(game, bob, 'second', AbilityType.FORCED_REACTION, log)

        raise_bow(game, log)
        pending = game.get_pending_input()
        assert [entry['player'] for entry in pending] == ['Alice']
        assert 'Pass' not in [button['text'] for button in pending[0]['buttons']]

        choose_button(game, 'Alice', 'second')

        assert log == ['primary', 'second', 'first']


class TestTriggerOrderPolicy:
    """Who chooses next when several players have optional abilities."""

    def _setup(self, policy):
        game = create_test_game(GameSettings(trigger_order_policy=policy))
        alice = game.get_player_by_name('Alice')
        bob = game.get_player_by_name('Bob')
        log = []
        add_reactor(game, alice, 'A1', AbilityType.REACTION, log)
        add_reactor(game, alice, 'A2', AbilityType.REACTION, log)
        add_reactor(game, bob, 'B1', AbilityType.REACTION, log)
        raise_bow(game, log)
        log.remove('primary')
        return game, log

    def test_turn_order_alternates_players(self):
        game, log = self._setup(TriggerOrderPolicy.TURN_ORDER)

        choose_button(game, 'Alice', 'A1')
        assert game.get_pending_input()[0]['player'] == 'Bob'
        choose_button(game, 'Bob', 'B1')
        choose_button(game, 'Alice', 'A2')

        assert log == ['A1', 'B1', 'A2']
        assert game.get_pending_input() == []

    def test_active_player_first_finishes_before_opponent(self):
        game, log = self._setup(TriggerOrderPolicy.ACTIVE_PLAYER_FIRST)

        choose_button(game, 'Alice', 'A1')
        assert game.get_pending_input()[0]['player'] == 'Alice'
        choose_button(game, 'Alice', 'A2')
        choose_button(game, 'Bob', 'B1')

        assert log == ['A1', 'A2', 'B1']

    def test_a_resolved_ability_reopens_the_window_for_passed_players(self):
        game, log = self._setup(TriggerOrderPolicy.TURN_ORDER)

        press_pass(game, 'Alice')
        choose_button(game, 'Bob', 'B1')

        assert game.get_pending_input()[0]['player'] == 'Alice'
        press_pass(game, 'Alice')
        assert log == ['B1']
        assert game.get_pending_input() == []

    def test_buttons_only_offer_the_choosing_players_abilities(self):
        game, _ = self._setup(TriggerOrderPolicy.TURN_ORDER)

        texts = [button['text'] for button in game.get_pending_input('Alice')[0]['buttons']]

        assert texts == ['A1 card: A1', 'A2 card: A2', 'Pass']
        assert game.get_pending_input('Bob') == []

    def test_rejects_answers_from_the_wrong_player(self):
        game, log = self._setup(TriggerOrderPolicy.TURN_ORDER)
        prompt_uuid = game.get_pending_input('Alice')[0]['prompt_uuid']

        assert game.handle_command('Bob', prompt_uuid, 'menuButton', '0') is False
        assert log == []
