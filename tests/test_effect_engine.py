"""Tests for the effect engine."""

from l5r_sim.engine.effect_engine import Effect, EffectEngine
from l5r_sim.models.constants import CardType, Duration, EffectName
from tests.helpers import make_definition, put_into_play


class Target:
    """Stand-in for a card or player."""

    def __init__(self, name):
        self.name = name


class TestApplyAndRemove:
    """Applying and removing effects."""

    def test_applied_effect_is_visible_to_queries(self):
        """An applied effect contributes to sum, any and get queries."""
        engine = EffectEngine()
        card = Target("card")

        ref = engine.apply(Effect(EffectName.MODIFY_GLORY, 2, target=card))

        assert engine.is_applied(ref)
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 2
        assert engine.any_effect(EffectName.MODIFY_GLORY, card)
        assert engine.get_effects(EffectName.MODIFY_GLORY, card) == [2]

    def test_removal_clears_contribution(self):
        """After removal no query sees the effect."""
        engine = EffectEngine()
        card = Target("card")
        ref = engine.apply(Effect(EffectName.MODIFY_GLORY, 2, target=card))

        assert engine.remove(ref) is True

        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 0
        assert not engine.any_effect(EffectName.MODIFY_GLORY, card)
        assert engine.get_effects(EffectName.MODIFY_GLORY, card) == []
        assert len(engine) == 0

    def test_removing_twice_is_a_no_op(self):
        """Removing an already removed or unknown handle does nothing."""
        engine = EffectEngine()
        ref = engine.apply(Effect(EffectName.BLANK, target=Target("card")))

        engine.remove(ref)

        assert engine.remove(ref) is False
        assert engine.remove(None) is False
        assert engine.remove(9999) is False

    def test_applying_same_effect_twice_keeps_one_modifier(self):
        """Re-applying a live effect returns its existing handle."""
        engine = EffectEngine()
        card = Target("card")
        effect = Effect(EffectName.MODIFY_GLORY, 1, target=card)

        first = engine.apply(effect)
        second = engine.apply(effect)

        assert first == second
        assert len(engine) == 1
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 1

    def test_effects_are_returned_in_apply_order(self):
        engine = EffectEngine()
        card = Target("card")
        engine.apply(Effect(EffectName.ADD_TRAIT, 'cavalry', target=card))
        engine.apply(Effect(EffectName.ADD_TRAIT, 'samurai', target=card))

        assert engine.get_effects(EffectName.ADD_TRAIT, card) == ['cavalry', 'samurai']


class TestMatchingAndConditions:
    """Effects that pick targets and depend on conditions."""

    def test_match_selects_targets(self):
        engine = EffectEngine()
        cavalry = Target("cavalry")
        infantry = Target("infantry")
        engine.apply(Effect(EffectName.MODIFY_MILITARY_SKILL, 1, match=lambda target: target.name == "cavalry"))

        assert engine.sum_effects(EffectName.MODIFY_MILITARY_SKILL, cavalry) == 1
        assert engine.sum_effects(EffectName.MODIFY_MILITARY_SKILL, infantry) == 0

    def test_condition_is_evaluated_on_every_query(self):
        """A conditional effect follows its condition without being reapplied."""
        engine = EffectEngine()
        card = Target("card")
        state = {'active': False}
        engine.apply(Effect(EffectName.MODIFY_GLORY, 3, target=card, condition=lambda: state['active']))

        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 0
        state['active'] = True
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 3
        state['active'] = False
        assert not engine.any_effect(EffectName.MODIFY_GLORY, card)

    def test_blank_source_suppresses_its_persistent_effects(self):
        """Persistent effects stop working while their source is blank."""
        engine = EffectEngine()
        source = Target("source")
        card = Target("card")
        engine.apply(Effect(EffectName.MODIFY_GLORY, 2, source=source, target=card))

        blank_ref = engine.apply(Effect(EffectName.BLANK, source=Target("blanker"), target=source))
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 0

        engine.remove(blank_ref)
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 2


class TestDurations:
    """Lasting effects and their expiry."""

    def test_end_duration_removes_only_that_duration(self):
        engine = EffectEngine()
        card = Target("card")
        engine.apply(Effect(EffectName.MODIFY_GLORY, 1, target=card, duration=Duration.UNTIL_END_OF_PHASE))
        engine.apply(Effect(EffectName.MODIFY_GLORY, 2, target=card, duration=Duration.UNTIL_END_OF_ROUND))

        assert engine.end_duration(Duration.UNTIL_END_OF_PHASE) == 1
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 2

    def test_remove_lasting_effects_keeps_persistent_ones(self):
        engine = EffectEngine()
        card = Target("card")
        engine.apply(Effect(EffectName.MODIFY_GLORY, 1, target=card))
        engine.apply(Effect(EffectName.MODIFY_GLORY, 5, target=card, duration=Duration.UNTIL_END_OF_CONFLICT))

        assert engine.remove_lasting_effects(card) == 1
        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 1


class TestSelfReferentialEffects:
    """Effects whose match or condition reads the stat they modify."""

    def test_condition_reading_its_own_stat(self):
        """An effect does not count towards the query made by its own condition."""
        engine = EffectEngine()
        card = Target("card")
        engine.apply(Effect(EffectName.MODIFY_GLORY, 1, target=card,
                            condition=lambda: engine.sum_effects(EffectName.MODIFY_GLORY, card) == 0))

        assert engine.sum_effects(EffectName.MODIFY_GLORY, card) == 1

    def test_blank_matching_on_modified_glory(self, game, alice):
        """Blanking characters by their glory still answers glory queries."""
        def blanker_setup(ability):
            ability.persistent_effect(ability.effects.blank(
                match=lambda card, context: card.type is CardType.CHARACTER and card.get_glory() == 0))

        def boost_setup(ability):
            ability.persistent_effect(ability.effects.modify_glory(1))

        put_into_play(game, alice, make_definition("Blanker", setup=blanker_setup))
        boosted = put_into_play(game, alice, make_definition("Boosted", setup=boost_setup))
        humble = put_into_play(game, alice, make_definition("Humble", glory=0))

        assert boosted.get_glory() == 2
        assert not boosted.is_blank()
        assert humble.get_glory() == 0
        assert humble.is_blank()
