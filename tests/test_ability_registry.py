"""Tests for ability declaration and per-card registration bookkeeping."""

import pytest

from l5r_sim.errors import CardConfigurationError
from l5r_sim.models.abilities import AbilityBuilder
from l5r_sim.models.abilities.card_ability import default_ability_locations
from l5r_sim.models.constants import CardType, EventName, Location, PROVINCE_LOCATIONS
from tests.helpers import create_card_in, make_definition


def always(event, context):
    return True


def reaction_setup(ability):
    ability.reaction("Gain honor", when={EventName.ON_CARD_BOWED: always},
                     handler=lambda context: context.player.modify_honor(1))
    ability.persistent_effect(ability.effects.modify_glory(1))


class TestRegistrationConsistency:
    """Handles held by a card always match its zone."""

    def test_abilities_follow_the_card_through_zones(self, game, alice):
        """Hand to play to discard to play leaves exactly one live subscription."""
        card = create_card_in(game, alice, make_definition("Reactor", setup=reaction_setup), Location.HAND)
        reaction = card.abilities.reactions[0]
        effect = card.abilities.persistent_effects[0]

        assert not reaction.is_registered
        assert not effect.is_applied

        alice.move_card(card, Location.PLAY_AREA)
        assert game.event_manager.subscription_count(reaction) == 1
        assert game.effect_engine.is_applied(effect.ref)
        assert card.get_glory() == 2

        alice.move_card(card, Location.DYNASTY_DISCARD_PILE)
        assert game.event_manager.subscription_count(reaction) == 0
        assert card.abilities.subscription_handles == frozenset()
        assert card.abilities.applied_refs == frozenset()
        assert len(game.effect_engine) == 0

        alice.move_card(card, Location.PLAY_AREA)
        assert game.event_manager.subscription_count(reaction) == 1
        assert len(card.abilities.applied_refs) == 1
        assert len(game.effect_engine) == 1

    def test_moving_to_the_same_zone_changes_nothing(self, game, alice):
        card = create_card_in(game, alice, make_definition("Reactor", setup=reaction_setup), Location.PLAY_AREA)
        handles = card.abilities.subscription_handles
        refs = card.abilities.applied_refs

        alice.move_card(card, Location.PLAY_AREA)

        assert card.abilities.subscription_handles == handles
        assert card.abilities.applied_refs == refs

    def test_event_cards_do_not_register_in_decks(self, game, alice):
        """An event back in a deck must not react to anything."""
        def setup(ability):
            ability.reaction("Respond", when={EventName.ON_CARD_MOVED: always},
                             handler=lambda context: None,
                             location=(Location.HAND, Location.CONFLICT_DECK))

        card = create_card_in(game, alice, make_definition("Banzai", CardType.EVENT, setup=setup),
                              Location.CONFLICT_DECK)
        assert not card.abilities.reactions[0].is_registered

        alice.move_card(card, Location.HAND)
        assert card.abilities.reactions[0].is_registered

        alice.move_card(card, Location.CONFLICT_DECK)
        assert not card.abilities.reactions[0].is_registered

    def test_any_location_effect_applies_from_creation(self, game, alice):
        def setup(ability):
            ability.persistent_effect(ability.effects.add_trait('shugenja'), location=Location.ANY)

        card = game.create_card(alice, make_definition("Seeker", setup=setup))
        assert card.has_trait('shugenja')

        alice.move_card(card, Location.HAND)
        alice.move_card(card, Location.PLAY_AREA)
        alice.move_card(card, Location.DYNASTY_DISCARD_PILE)

        assert card.has_trait('shugenja')
        assert len(game.effect_engine) == 1

    def test_reset_limits_clears_uses(self, game, alice):
        def setup(ability):
            ability.action("Bow", game_action=ability.actions.bow())

        card = create_card_in(game, alice, make_definition("Bower", setup=setup), Location.PLAY_AREA)
        action = card.abilities.actions[0]
        action.limit.increment()
        assert not action.is_playable_by(alice)

        card.abilities.reset_limits()
        assert action.is_playable_by(alice)


class TestDeclarationErrors:
    """Invalid declarations fail while the card is built."""

    def test_unsupported_effect_location(self, game, alice):
        def setup(ability):
            ability.persistent_effect(ability.effects.modify_glory(1), location=Location.HAND)

        with pytest.raises(CardConfigurationError, match="'hand' is not a supported effect location."):
            game.create_card(alice, make_definition("Broken", setup=setup))

    def test_ability_needs_a_resolution(self):
        builder = AbilityBuilder()

        with pytest.raises(CardConfigurationError):
            builder.action("Nothing")

    def test_triggered_ability_needs_events(self):
        builder = AbilityBuilder()

        with pytest.raises(CardConfigurationError):
            builder.reaction("Nothing", when={}, handler=lambda context: None)

    def test_persistent_effect_needs_effect_spec(self):
        builder = AbilityBuilder()

        with pytest.raises(CardConfigurationError):
            builder.persistent_effect("modifyGlory")

    def test_build_returns_declarations_in_order(self):
        builder = AbilityBuilder()
        first = builder.action("Bow", game_action=builder.actions.bow())
        second = builder.forced_reaction("Ready", when={EventName.ON_CARD_BOWED: always},
                                         game_action=builder.actions.ready())

        assert builder.build() == (first, second)


class TestDefaultLocations:
    """Where abilities work when a card does not say."""

    def test_defaults_by_card_type(self, game, alice):
        event = game.create_card(alice, make_definition("Banzai", CardType.EVENT))
        holding = game.create_card(alice, make_definition("Manor", CardType.HOLDING))
        character = game.create_card(alice, make_definition("Samurai"))

        assert default_ability_locations(event) == frozenset({Location.HAND})
        assert default_ability_locations(holding) == PROVINCE_LOCATIONS
        assert default_ability_locations(character) == frozenset({Location.PLAY_AREA})

    def test_holding_effects_default_to_provinces(self, game, alice):
        def setup(ability):
            ability.persistent_effect(ability.effects.add_trait('fortified'))

        holding = create_card_in(game, alice, make_definition("Manor", CardType.HOLDING, setup=setup),
                                 Location.PROVINCE_ONE)

        assert holding.abilities.persistent_effects[0].location is Location.PROVINCES
        assert holding.has_trait('fortified')
