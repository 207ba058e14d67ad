"""Test helper utilities for L5R rules engine tests."""

from .card_helpers import (
    choose_button,
    create_card_in,
    create_test_game,
    make_definition,
    press_pass,
    put_into_play,
)

__all__ = [
    'choose_button',
    'create_card_in',
    'create_test_game',
    'make_definition',
    'press_pass',
    'put_into_play',
]
