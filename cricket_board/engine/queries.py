"""
Query functions for callers (UI, AI, request handlers).
These functions answer questions about a state without mutating it.
"""

from dataclasses import dataclass
from typing import Any

from cricket_board.engine import DICE_SIDES
from cricket_board.engine.actions import Action
from cricket_board.engine.definitions import Direction, SquareType, get_square
from cricket_board.engine.errors import (
    EngineError,
    GameOverError,
    InvalidDiceError,
    NotYourTurnError,
    UnknownActionError,
)
from cricket_board.engine.state import DiceResult, GameState, PlayerState

ACTION_TYPES = ("play_turn", "advance_player")


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


# ===== Action Validation =====

def check_dice(state: GameState, dice: DiceResult) -> None:
    """Raise InvalidDiceError unless the roll is one the dice source could produce for this game."""
    if type(dice.movement) is not int or not 1 <= dice.movement <= DICE_SIDES:
        raise InvalidDiceError(f"Dice movement must be 1-{DICE_SIDES}, got {dice.movement!r}")
    if not isinstance(dice.direction, Direction):
        raise InvalidDiceError(f"Unknown dice direction {dice.direction!r}")
    if dice.direction == Direction.ANTI_CLOCKWISE and not state.settings.allow_anti_clockwise:
        raise InvalidDiceError("Anti-clockwise movement is not allowed in this game")


def check_action(state: GameState, action: Action) -> None:
    """
    Raise the matching EngineError if `action` may not be applied to `state`.

    Checks, in order:
    - game not over
    - submitter is the current player
    - known action type
    - play_turn: token id owned by the player, dice in range and direction allowed
    """
    if state.is_game_over:
        raise GameOverError("Game is over. No further actions are accepted.")

    current = state.get_current_player()
    if action.player_id != current.id:
        raise NotYourTurnError(
            f"Player {action.player_id} cannot act; it is {current.name}'s turn (player {current.id})"
        )

    if action.type not in ACTION_TYPES:
        raise UnknownActionError(f"Unknown action type: {action.type}")

    if action.type == "play_turn":
        current.get_token(action.payload.get("token_id"))
        check_dice(state, DiceResult.from_dict(action.payload.get("dice")))


def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Returns ValidationResult with valid=True or valid=False with error message.
    """
    try:
        check_action(state, action)
    except EngineError as e:
        return ValidationResult(False, str(e))
    return ValidationResult(True)


# ===== State Queries =====

def get_current_player(state: GameState) -> PlayerState:
    return state.get_current_player()


def get_active_players(state: GameState) -> list[PlayerState]:
    """Players who can still take turns."""
    return [p for p in state.players if p.can_act]


def get_move_preview(state: GameState, token_id: int, dice: DiceResult) -> dict[str, Any]:
    """
    Describe what moving `token_id` by `dice` would do, without applying it.
    Used by the CLI and AI to show / weigh options.
    """
    from cricket_board.engine.reducer import apply_turn

    player = state.get_current_player()
    token = player.get_token(token_id)
    new_state, events = apply_turn(state, token_id, dice)
    new_player = new_state.get_player(player.id)
    landing = events[0].payload["to"] if events and events[0].type == "token_moved" else token.position_index
    square = get_square(landing)
    return {
        "token_id": token_id,
        "from": token.position_index,
        "to": landing,
        "square_type": square.type.value,
        "square_value": square.value if square.type == SquareType.RUNS else 0,
        "score_change": new_player.score - player.score,
        "wickets_lost": new_player.wickets - player.wickets,
        "captures": sum(1 for e in events if e.type == "token_captured"),
        "level_after": new_player.get_token(token_id).level,
        "events": [e.type for e in events],
    }


def get_game_summary(state: GameState) -> dict[str, Any]:
    """
    Standings (score descending, seat order breaks ties) and winners.
    Every player sharing the top score is a winner.
    """
    ranked = sorted(state.players, key=lambda p: -p.score)
    standings = [
        {
            "player_id": p.id,
            "name": p.name,
            "color": p.color.value,
            "score": p.score,
            "wickets": p.wickets,
            "is_all_out": p.is_all_out,
        }
        for p in ranked
    ]
    top_score = ranked[0].score if ranked else 0
    winners = [p.id for p in ranked if p.score == top_score]
    return {
        "is_game_over": state.is_game_over,
        "standings": standings,
        "winners": winners,
    }
