"""Rings and the current conflict record."""

from typing import Any, List, Optional

from ..constants import ConflictType, Element


class Ring:
    """One of the five elemental rings."""

    def __init__(self, element: Element, conflict_type: ConflictType = ConflictType.MILITARY):
        self.element = element
        self.conflict_type = conflict_type
        self.claimed_by = None

    def is_considered_claimed(self, player=None) -> bool:
        """Check if the ring is claimed, by ``player`` when one is given."""
        if player is None:
            return self.claimed_by is not None
        return self.claimed_by is player

    def is_conflict_type(self, conflict_type) -> bool:
        conflict_type = ConflictType(conflict_type) if isinstance(conflict_type, str) else conflict_type
        return self.conflict_type is conflict_type

    def claim(self, player) -> None:
        self.claimed_by = player

    def flip(self) -> None:
        self.conflict_type = (ConflictType.POLITICAL if self.conflict_type is ConflictType.MILITARY
                              else ConflictType.MILITARY)

    def reset(self) -> None:
        self.claimed_by = None

    def __str__(self) -> str:
        return f"{self.element.value} ring ({self.conflict_type.value})"


class Conflict:
    """A conflict in progress: who attacks, who defends, and with which characters."""

    def __init__(self, attacking_player, defending_player, conflict_type: ConflictType,
                 ring: Optional[Ring] = None):
        self.attacking_player = attacking_player
        self.defending_player = defending_player
        self.conflict_type = conflict_type
        self.ring = ring
        self.attackers: List[Any] = []
        self.defenders: List[Any] = []

    def add_participant(self, card) -> None:
        """Add a character on its controller's side."""
        if self.is_participating(card):
            return
        if card.controller is self.attacking_player:
            self.attackers.append(card)
        else:
            self.defenders.append(card)
        card.in_conflict = True

    def remove_from_conflict(self, card) -> None:
        if card in self.attackers:
            self.attackers.remove(card)
        if card in self.defenders:
            self.defenders.remove(card)
        card.in_conflict = False

    def is_attacking(self, card) -> bool:
        return card in self.attackers

    def is_defending(self, card) -> bool:
        return card in self.defenders

    def is_participating(self, card) -> bool:
        return self.is_attacking(card) or self.is_defending(card)

    @property
    def participants(self) -> List[Any]:
        return self.attackers + self.defenders

    def end(self) -> None:
        for card in self.participants:
            card.in_conflict = False
        self.attackers = []
        self.defenders = []
