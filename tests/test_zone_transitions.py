"""End-to-end zone transitions and the effects they apply or remove."""

from l5r_sim.engine.effect_engine import Effect
from l5r_sim.models.constants import CardType, Duration, EffectName, EventName, Location
from tests.helpers import create_card_in, make_definition, put_into_play


def spy_on_effect_engine(game, monkeypatch):
    """Record every apply and remove the engine receives."""
    calls = []
    engine = game.effect_engine
    original_apply = engine.apply
    original_remove = engine.remove

    def apply(effect):
        calls.append(('apply', effect.name))
        return original_apply(effect)

    def remove(ref):
        calls.append(('remove', ref))
        return original_remove(ref)

    monkeypatch.setattr(engine, 'apply', apply)
    monkeypatch.setattr(engine, 'remove', remove)
    return calls


def cavalry_leader_setup(ability):
    ability.persistent_effect(ability.effects.modify_military_skill(
        1, match=lambda card, context: card is not context.source and card.has_trait('cavalry')))


class TestPersistentEffectLifecycle:
    """A persistent effect is applied exactly once per stay in its zone."""

    def test_hand_play_discard_play(self, game, alice, monkeypatch):
        leader = create_card_in(game, alice, make_definition("Battle Maiden", setup=cavalry_leader_setup),
                                Location.HAND)
        rider = put_into_play(game, alice, make_definition("Rider", traits=("cavalry",), military=2))
        calls = spy_on_effect_engine(game, monkeypatch)

        alice.move_card(leader, Location.PLAY_AREA)
        assert calls == [('apply', EffectName.MODIFY_MILITARY_SKILL)]
        assert rider.get_military_skill() == 3
        ref = leader.abilities.persistent_effects[0].ref

        alice.move_card(leader, Location.DYNASTY_DISCARD_PILE)
        assert calls[1:] == [('remove', ref)]
        assert rider.get_military_skill() == 2

        alice.move_card(leader, Location.HAND)
        assert len(calls) == 2

        alice.move_card(leader, Location.PLAY_AREA)
        assert calls[2:] == [('apply', EffectName.MODIFY_MILITARY_SKILL)]
        assert rider.get_military_skill() == 3
        assert leader.get_military_skill() == 2

    def test_blanked_source_stops_contributing(self, game, alice):
        leader = put_into_play(game, alice, make_definition("Battle Maiden", setup=cavalry_leader_setup))
        rider = put_into_play(game, alice, make_definition("Rider", traits=("cavalry",), military=2))

        ref = game.effect_engine.apply(Effect(EffectName.BLANK, target=leader,
                                              duration=Duration.UNTIL_END_OF_CONFLICT))

        assert rider.get_military_skill() == 2
        game.effect_engine.remove(ref)
        assert rider.get_military_skill() == 3

    def test_conditional_effect_follows_composure(self, game, alice, bob):
        def setup(ability):
            ability.composure(ability.effects.modify_glory(2))

        card = put_into_play(game, alice, make_definition("Composed", glory=1, setup=setup))

        assert card.get_glory() == 1
        bob.modify_honor(5)
        assert card.get_glory() == 3


class TestLeavingPlay:
    """Leaving play removes lasting effects and resets control."""

    def test_lasting_effects_are_removed_when_card_leaves_play(self, game, alice):
        card = put_into_play(game, alice, make_definition(glory=1))
        game.effect_engine.apply(Effect(EffectName.MODIFY_GLORY, 2, target=card,
                                        duration=Duration.UNTIL_END_OF_ROUND))
        assert card.get_glory() == 3

        alice.move_card(card, Location.DYNASTY_DISCARD_PILE)
        alice.move_card(card, Location.PLAY_AREA)

        assert card.get_glory() == 1
        assert len(game.effect_engine) == 0

    def test_borrowed_card_returns_to_owner_pile(self, game, alice, bob):
        card = put_into_play(game, alice, make_definition())
        assert bob.take_control(card)
        assert card in bob.cards_in_play

        bob.move_card(card, Location.HAND)

        assert card.controller is alice
        assert card in alice.hand
        assert card not in bob.cards_in_play

    def test_move_publishes_card_moved(self, game, alice):
        moves = []
        game.event_manager.subscribe(EventName.ON_CARD_MOVED, moves.append)
        card = create_card_in(game, alice, make_definition(), Location.HAND)

        alice.move_card(card, Location.PLAY_AREA)

        assert moves[-1].get('original_location') is Location.HAND
        assert moves[-1].get('new_location') is Location.PLAY_AREA
        assert game.event_log[-1]['event'] == 'onCardMoved'


class TestHoldings:
    """Holdings work while they are in a province."""

    def test_holding_leaving_province_removes_its_effects(self, game, alice):
        def setup(ability):
            ability.persistent_effect(ability.effects.modify_province_strength(
                1, match=lambda card, context: card.is_province and card.controller is context.player))

        province = create_card_in(game, alice, make_definition("Rally", CardType.PROVINCE, province_strength=3),
                                  Location.PROVINCE_ONE)
        holding = create_card_in(game, alice, make_definition("Watchtower", CardType.HOLDING, setup=setup),
                                 Location.PROVINCE_ONE)
        game.effect_engine.apply(Effect(EffectName.ADD_TRAIT, 'fortified', target=holding,
                                        duration=Duration.UNTIL_END_OF_ROUND))
        assert province.get_strength() == 4

        alice.move_card(holding, Location.DYNASTY_DISCARD_PILE)

        assert province.get_strength() == 3
        assert not holding.has_trait('fortified')
        assert len(game.effect_engine) == 0
