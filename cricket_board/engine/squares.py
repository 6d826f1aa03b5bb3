"""
Square-event resolution: the landing square's own effect, applied once per move
whether or not a capture happened.
"""

from cricket_board.engine.definitions import BoardSquare, SquareType
from cricket_board.engine.errors import ConfigurationError
from cricket_board.engine.events import (
    GameEvent,
    all_out,
    runs_scored,
    token_returned,
    wicket_taken,
)
from cricket_board.engine.movement import compute_return_path
from cricket_board.engine.state import GameSettings, PlayerState


def resolve_square_event(
    player: PlayerState,
    token_id: int,
    square: BoardSquare,
    settings: GameSettings,
) -> tuple[bool, list[GameEvent]]:
    """
    Apply the square's effect using the moving token's current level.

    Runs     score += value * level
    Wicket   one wicket lost; token home at level 1
    Extra    score += level; another roll for the same player
    DotBall  nothing
    SafeZone nothing (capture immunity is handled in collisions)

    Returns:
        (grants_extra_turn, events)
    """
    events: list[GameEvent] = []
    token = player.get_token(token_id)
    level = token.level

    if square.type == SquareType.RUNS:
        runs = square.value * level
        player.add_score(runs)
        events.append(runs_scored(player.id, runs, player.score, "runs_square"))
        return False, events

    if square.type == SquareType.WICKET:
        became_all_out = player.take_wicket()
        events.append(wicket_taken(player.id, player.wickets, "wicket_square"))
        if became_all_out:
            events.append(all_out(player.id, player.score))
        player.return_token_to_home(token_id)
        events.append(token_returned(
            player.id,
            token_id,
            square.index,
            player.home_base_index,
            compute_return_path(square.index, player.home_base_index, settings),
            "wicket",
        ))
        return False, events

    if square.type == SquareType.EXTRA:
        player.add_score(level)
        events.append(runs_scored(player.id, level, player.score, "extra"))
        return True, events

    if square.type in (SquareType.DOT_BALL, SquareType.SAFE_ZONE):
        return False, events

    raise ConfigurationError(f"Unknown square type: {square.type!r}")
