"""Exception types raised by the rules engine."""


class RulesEngineError(Exception):
    """Base class for all rules engine errors."""
    pass


class CardConfigurationError(RulesEngineError, ValueError):
    """Raised when a card definition declares an ability the engine cannot support.

    These are programmer errors in card data. They surface while the card is
    being constructed so that a broken game never starts.
    """
    pass


class GameSetupError(RulesEngineError, ValueError):
    """Raised when a game cannot be created or started."""
    pass
