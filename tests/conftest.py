"""Shared fixtures for the rules engine tests."""

import pytest

from tests.helpers import create_test_game


@pytest.fixture
def game():
    """A two-player game (Alice first) that has not started."""
    return create_test_game()


@pytest.fixture
def alice(game):
    return game.get_player_by_name("Alice")


@pytest.fixture
def bob(game):
    return game.get_player_by_name("Bob")
