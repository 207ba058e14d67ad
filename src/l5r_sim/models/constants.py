"""Enumerations and location groupings shared by the rules engine."""

from enum import Enum


class Location(Enum):
    """Locations a card can occupy, plus the scopes used by effect declarations."""
    ANY = "any"
    PLAY_AREA = "play area"
    PROVINCES = "province"
    PROVINCE_ONE = "province 1"
    PROVINCE_TWO = "province 2"
    PROVINCE_THREE = "province 3"
    PROVINCE_FOUR = "province 4"
    STRONGHOLD_PROVINCE = "stronghold province"
    HAND = "hand"
    CONFLICT_DECK = "conflict deck"
    DYNASTY_DECK = "dynasty deck"
    CONFLICT_DISCARD_PILE = "conflict discard pile"
    DYNASTY_DISCARD_PILE = "dynasty discard pile"
    REMOVED_FROM_GAME = "removed from game"
    BEING_PLAYED = "being played"


PROVINCE_LOCATIONS = frozenset({
    Location.PROVINCE_ONE,
    Location.PROVINCE_TWO,
    Location.PROVINCE_THREE,
    Location.PROVINCE_FOUR,
    Location.STRONGHOLD_PROVINCE,
})

# Provinces that hold a dynasty card, in board order
DYNASTY_PROVINCES = (
    Location.PROVINCE_ONE,
    Location.PROVINCE_TWO,
    Location.PROVINCE_THREE,
    Location.PROVINCE_FOUR,
)

DECK_LOCATIONS = frozenset({Location.CONFLICT_DECK, Location.DYNASTY_DECK})

# Cards always turn face up when they arrive here
FACEUP_LOCATIONS = frozenset({
    Location.PLAY_AREA,
    Location.CONFLICT_DISCARD_PILE,
    Location.DYNASTY_DISCARD_PILE,
    Location.HAND,
})

# Locations where a card offers a menu in manual mode
MENU_LOCATIONS = PROVINCE_LOCATIONS | {Location.PLAY_AREA}

# Scopes a persistent effect may declare, and the concrete locations each covers
ALLOWED_EFFECT_LOCATIONS = (Location.ANY, Location.PLAY_AREA, Location.PROVINCES)
EFFECT_SCOPE_LOCATIONS = {
    Location.PLAY_AREA: frozenset({Location.PLAY_AREA}),
    Location.PROVINCES: PROVINCE_LOCATIONS,
}

# Every pile a player keeps cards in
PLAYER_PILES = (
    Location.HAND,
    Location.CONFLICT_DECK,
    Location.DYNASTY_DECK,
    Location.CONFLICT_DISCARD_PILE,
    Location.DYNASTY_DISCARD_PILE,
    Location.PLAY_AREA,
    Location.REMOVED_FROM_GAME,
    Location.BEING_PLAYED,
) + tuple(sorted(PROVINCE_LOCATIONS, key=lambda location: location.value))


class CardType(Enum):
    """Printed card types."""
    CHARACTER = "character"
    ATTACHMENT = "attachment"
    EVENT = "event"
    HOLDING = "holding"
    PROVINCE = "province"
    STRONGHOLD = "stronghold"
    ROLE = "role"


class DeckSide(Enum):
    """Which deck a card belongs to."""
    CONFLICT = "conflict"
    DYNASTY = "dynasty"


class CardCapability(Enum):
    """Type-dependent behaviours a card may have."""
    ATTACHABLE = "attachable"
    TRIGGERABLE = "triggerable"
    HAS_GLORY = "has_glory"
    PROVINCE_STRENGTH = "province_strength"


class AbilityType(Enum):
    """Kinds of card abilities."""
    ACTION = "action"
    REACTION = "reaction"
    FORCED_REACTION = "forcedreaction"
    INTERRUPT = "interrupt"
    FORCED_INTERRUPT = "forcedinterrupt"
    WOULD_INTERRUPT = "wouldinterrupt"


FORCED_ABILITY_TYPES = frozenset({AbilityType.FORCED_INTERRUPT, AbilityType.FORCED_REACTION})

# Trigger windows opened around an event, before and after its primary effect
INTERRUPT_WINDOWS = (AbilityType.WOULD_INTERRUPT, AbilityType.FORCED_INTERRUPT, AbilityType.INTERRUPT)
REACTION_WINDOWS = (AbilityType.FORCED_REACTION, AbilityType.REACTION)


class Duration(Enum):
    """How long an applied effect lasts."""
    PERSISTENT = "persistent"
    UNTIL_END_OF_CONFLICT = "untilEndOfConflict"
    UNTIL_END_OF_PHASE = "untilEndOfPhase"
    UNTIL_END_OF_ROUND = "untilEndOfRound"


class EffectName(Enum):
    """Names of the modifiers the effect engine aggregates."""
    ADD_TRAIT = "addTrait"
    ADD_FACTION = "addFaction"
    BLANK = "blank"
    RESTRICT = "restrict"
    INCREASE_LIMIT_ON_ABILITIES = "increaseLimitOnAbilities"
    DOES_NOT_READY = "doesNotReady"
    CAN_BE_SEEN_WHEN_FACEDOWN = "canBeSeenWhenFacedown"
    HIDE_WHEN_FACE_UP = "hideWhenFaceUp"
    MODIFY_GLORY = "modifyGlory"
    MODIFY_MILITARY_SKILL = "modifyMilitarySkill"
    MODIFY_POLITICAL_SKILL = "modifyPoliticalSkill"
    MODIFY_PROVINCE_STRENGTH = "modifyProvinceStrength"


class EventName(Enum):
    """Game events published on the event bus."""
    ON_CARD_MOVED = "onCardMoved"
    ON_CARD_REVEALED = "onCardRevealed"
    ON_CARD_READIED = "onCardReadied"
    ON_CARD_BOWED = "onCardBowed"
    ON_MOVE_TO_CONFLICT = "onMoveToConflict"
    ON_CARD_LEAVES_PLAY = "onCardLeavesPlay"
    ON_CHARACTER_ENTERS_PLAY = "onCharacterEntersPlay"
    ON_CARD_ATTACHED = "onCardAttached"
    ON_FATE_PLACED = "onFatePlaced"
    ON_FATE_REMOVED = "onFateRemoved"
    ON_MODIFY_HONOR = "onModifyHonor"
    ON_CARDS_DRAWN = "onCardsDrawn"
    ON_EFFECT_APPLIED = "onEffectApplied"
    ON_CARD_ABILITY_INITIATED = "onCardAbilityInitiated"
    ON_CARD_ABILITY_TRIGGERED = "onCardAbilityTriggered"
    ON_PHASE_STARTED = "onPhaseStarted"
    ON_PHASE_ENDED = "onPhaseEnded"
    ON_ROUND_ENDED = "onRoundEnded"
    ON_PASS_DYNASTY = "onPassDynasty"
    ON_HONOR_DIALS_REVEALED = "onHonorDialsRevealed"
    ON_CONFLICT_STARTED = "onConflictStarted"
    ON_CONFLICT_FINISHED = "onConflictFinished"


class ConflictType(Enum):
    """Conflict types; rings carry one of these."""
    MILITARY = "military"
    POLITICAL = "political"


class Element(Enum):
    """The five elemental rings."""
    AIR = "air"
    EARTH = "earth"
    FIRE = "fire"
    VOID = "void"
    WATER = "water"


class Token(Enum):
    """Token kinds a card can carry."""
    FATE = "fate"
    HONOR = "honor"


class TargetController(Enum):
    """Whose cards an ability target may choose."""
    ANY = "any"
    SELF = "self"
    OPPONENT = "opponent"


class PhaseName(Enum):
    """The phases of a round, in order."""
    DYNASTY = "dynasty"
    DRAW = "draw"
    CONFLICT = "conflict"
    FATE = "fate"


ROUND_SEQUENCE = (PhaseName.DYNASTY, PhaseName.DRAW, PhaseName.CONFLICT, PhaseName.FATE)
