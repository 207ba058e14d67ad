"""Cards from the Breath of the Kami pack."""

from ..models.cards.card_definition import CardDefinition
from ..models.constants import CardType, ConflictType


def _formal_invitation_setup(ability) -> None:
    ability.action(
        title="Move attached character into the conflict",
        condition=lambda context: context.game.is_during_conflict(ConflictType.POLITICAL),
        game_action=ability.actions.move_to_conflict(lambda context: context.source.parent),
    )


def _formal_invitation_can_attach(attachment, target, context) -> bool:
    return target.get_type() is not CardType.CHARACTER or target.get_glory() >= 2


FORMAL_INVITATION = CardDefinition(
    id="formal-invitation",
    name="Formal Invitation",
    type=CardType.ATTACHMENT,
    clan="neutral",
    traits=("item",),
    cost=0,
    setup=_formal_invitation_setup,
    can_attach=_formal_invitation_can_attach,
)


def _military_ring_claimed(context) -> bool:
    return any(
        ring.is_considered_claimed(context.player) and ring.is_conflict_type(ConflictType.MILITARY)
        for ring in context.game.rings.values()
    )


def _shiotome_encampment_setup(ability) -> None:
    ability.action(
        title="Ready a Cavalry character",
        condition=_military_ring_claimed,
        target=ability.target(
            card_type=CardType.CHARACTER,
            card_condition=lambda card, context: card.has_trait('cavalry'),
            game_action=ability.actions.ready(),
        ),
    )


SHIOTOME_ENCAMPMENT = CardDefinition(
    id="shiotome-encampment",
    name="Shiotome Encampment",
    type=CardType.HOLDING,
    clan="unicorn",
    traits=("fortification",),
    strength_bonus=1,
    setup=_shiotome_encampment_setup,
)
