"""Tests for the sample card definitions."""

import pytest

from l5r_sim.cards import FORMAL_INVITATION, SHIOTOME_ENCAMPMENT, all_definitions, get_definition
from l5r_sim.engine.prompts import ActionWindow
from l5r_sim.models.constants import ConflictType, Element, Location
from tests.helpers import choose_button, create_card_in, make_definition, put_into_play


def open_action_window(game):
    game.queue_step(ActionWindow(game))
    game.continue_execution()


class TestCardLookup:
    """Finding definitions by id or name."""

    @pytest.mark.parametrize("key", ["formal-invitation", "Formal Invitation", "formal invitation"])
    def test_get_definition(self, key):
        assert get_definition(key) is FORMAL_INVITATION

    def test_unknown_card(self):
        assert get_definition("Not A Card") is None
        assert len(all_definitions()) == 2


class TestFormalInvitation:
    """Attachment: move the attached character into a political conflict."""

    def _attach(self, game, player, glory=2):
        character = put_into_play(game, player, make_definition("Courtier", glory=glory))
        invitation = create_card_in(game, player, FORMAL_INVITATION, Location.HAND)
        return character, invitation

    def test_cannot_attach_to_characters_with_low_glory(self, game, alice):
        character, invitation = self._attach(game, alice, glory=1)

        assert not invitation.can_attach(character)
        assert not alice.attach(invitation, character)
        assert invitation.location is Location.HAND

    def test_moves_attached_character_into_political_conflict(self, game, alice):
        character, invitation = self._attach(game, alice)
        assert alice.attach(invitation, character)
        game.start_conflict(alice, ConflictType.POLITICAL)
        open_action_window(game)

        assert invitation.uuid in game.get_pending_input('Alice')[0]['selectable']
        assert game.handle_command('Alice', invitation.uuid, 'click')

        assert character.in_conflict
        assert character.is_attacking()
        assert game.get_pending_input()[0]['player'] == 'Bob'
        assert not invitation.get_playable_abilities(alice)

    def test_not_usable_in_military_conflict(self, game, alice):
        character, invitation = self._attach(game, alice)
        alice.attach(invitation, character)
        game.start_conflict(alice, ConflictType.MILITARY)

        assert invitation.get_playable_abilities(alice) == []

    def test_not_usable_outside_a_conflict(self, game, alice):
        character, invitation = self._attach(game, alice)
        alice.attach(invitation, character)

        assert invitation.get_playable_abilities(alice) == []


class TestShiotomeEncampment:
    """Holding: ready a Cavalry character once a military ring is claimed."""

    def _setup(self, game, player):
        encampment = create_card_in(game, player, SHIOTOME_ENCAMPMENT, Location.PROVINCE_ONE)
        rider = put_into_play(game, player, make_definition("Rider", traits=("Cavalry",)))
        footman = put_into_play(game, player, make_definition("Footman", traits=("Bushi",)))
        rider.bow()
        footman.bow()
        return encampment, rider, footman

    def test_requires_a_claimed_military_ring(self, game, alice, bob):
        encampment, _, _ = self._setup(game, alice)

        assert encampment.get_playable_abilities(alice) == []
        game.rings[Element.AIR].claim(bob)
        assert encampment.get_playable_abilities(alice) == []
        game.rings[Element.FIRE].claim(alice)
        game.rings[Element.FIRE].flip()
        assert encampment.get_playable_abilities(alice) == []
        game.rings[Element.FIRE].flip()
        assert len(encampment.get_playable_abilities(alice)) == 1

    def test_readies_the_chosen_cavalry_character(self, game, alice):
        encampment, rider, footman = self._setup(game, alice)
        game.rings[Element.WATER].claim(alice)
        open_action_window(game)

        assert game.handle_command('Alice', encampment.uuid, 'click')
        pending = game.get_pending_input('Alice')[0]
        assert pending['choice_type'] == 'select_card'
        assert pending['selectable'] == [rider.uuid]
        assert alice.get_card_selection_state(rider) == {'selectable': True}

        assert not game.handle_command('Alice', footman.uuid, 'click')
        assert game.handle_command('Alice', rider.uuid, 'click')

        assert not rider.bowed
        assert footman.bowed
        assert alice.selectable_cards == []
        assert encampment.abilities.actions[0].limit.use_count == 1
        assert encampment.get_playable_abilities(alice) == []

    def test_cancelling_target_selection_keeps_the_use(self, game, alice):
        encampment, rider, _ = self._setup(game, alice)
        game.rings[Element.VOID].claim(alice)
        open_action_window(game)
        game.handle_command('Alice', encampment.uuid, 'click')

        choose_button(game, 'Alice', 'Done')

        assert rider.bowed
        assert encampment.abilities.actions[0].limit.is_unused

    def test_no_ability_while_facedown(self, game, alice):
        encampment, _, _ = self._setup(game, alice)
        game.rings[Element.EARTH].claim(alice)
        encampment.facedown = True

        assert encampment.get_playable_abilities(alice) == []
