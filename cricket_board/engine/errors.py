"""
Engine exceptions.
Every error is a ValueError so callers can keep a single `except ValueError` around apply_action.
"""


class EngineError(ValueError):
    """Base class for all rule-engine failures."""


# ===== Precondition violations (caller should reject the request) =====

class GameOverError(EngineError):
    """An action was submitted after the game ended."""


class NotYourTurnError(EngineError):
    """The submitting player is not the current player."""


class InvalidTokenError(EngineError):
    """The token id does not belong to the acting player."""


class InvalidDiceError(EngineError):
    """Dice movement out of range, unknown direction, or a direction the settings forbid."""


class InvalidPhaseError(EngineError):
    """A TurnController operation was called in the wrong state (e.g. choosing a token before rolling)."""


class UnknownActionError(EngineError):
    """Action type the reducer does not handle."""


# ===== Programming / configuration errors =====

class ConfigurationError(EngineError):
    """Unknown enum value (square type, kill rule, mode, colour). Unreachable with valid setup data."""


# ===== Serialization boundary =====

class InvalidGameStateError(EngineError):
    """A serialized game state failed validation."""
