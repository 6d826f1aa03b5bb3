"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

# Turn events
TURN_ENDED = "turn_ended"
TURN_SKIPPED = "turn_skipped"
EXTRA_TURN = "extra_turn"
PLAYER_ADVANCED = "player_advanced"

# Movement events
TOKEN_MOVED = "token_moved"
LEVEL_UP = "level_up"
TOKEN_RETURNED = "token_returned"

# Capture events
TOKEN_CAPTURED = "token_captured"
FORTRESS_HELD = "fortress_held"
LEVEL_STOLEN = "level_stolen"

# Scoring events
RUNS_SCORED = "runs_scored"
WICKET_TAKEN = "wicket_taken"
ALL_OUT = "all_out"

# End of game
GAME_OVER = "game_over"


# ===== Event Factory Functions =====

def token_moved(
    player_id: int,
    token_id: int,
    from_index: int,
    to_index: int,
    path: list[int],
    direction: str,
) -> GameEvent:
    return GameEvent(TOKEN_MOVED, {
        "player_id": player_id,
        "token_id": token_id,
        "from": from_index,
        "to": to_index,
        "path": path,
        "direction": direction,
    })


def level_up(player_id: int, token_id: int, new_level: int) -> GameEvent:
    return GameEvent(LEVEL_UP, {
        "player_id": player_id,
        "token_id": token_id,
        "level": new_level,
    })


def token_returned(
    player_id: int,
    token_id: int,
    from_index: int,
    home_base_index: int,
    path: list[int],
    cause: str,  # "capture" or "wicket"
) -> GameEvent:
    """path is the return route for animation; it has no rule effects."""
    return GameEvent(TOKEN_RETURNED, {
        "player_id": player_id,
        "token_id": token_id,
        "from": from_index,
        "to": home_base_index,
        "path": path,
        "cause": cause,
    })


def token_captured(
    attacker_id: int,
    attacker_token_id: int,
    victim_id: int,
    victim_token_id: int,
    position: int,
    victim_level: int,
) -> GameEvent:
    return GameEvent(TOKEN_CAPTURED, {
        "attacker_id": attacker_id,
        "attacker_token_id": attacker_token_id,
        "victim_id": victim_id,
        "victim_token_id": victim_token_id,
        "position": position,
        "victim_level": victim_level,
    })


def fortress_held(attacker_id: int, defender_id: int, position: int) -> GameEvent:
    return GameEvent(FORTRESS_HELD, {
        "attacker_id": attacker_id,
        "defender_id": defender_id,
        "position": position,
    })


def level_stolen(player_id: int, token_id: int, old_level: int, new_level: int, victim_id: int) -> GameEvent:
    return GameEvent(LEVEL_STOLEN, {
        "player_id": player_id,
        "token_id": token_id,
        "old_level": old_level,
        "new_level": new_level,
        "victim_id": victim_id,
    })


def runs_scored(
    player_id: int,
    runs: int,
    new_score: int,
    reason: str,  # "runs_square", "extra", "kill_bonus"
) -> GameEvent:
    return GameEvent(RUNS_SCORED, {
        "player_id": player_id,
        "runs": runs,
        "score": new_score,
        "reason": reason,
    })


def wicket_taken(player_id: int, wickets: int, cause: str) -> GameEvent:
    return GameEvent(WICKET_TAKEN, {
        "player_id": player_id,
        "wickets": wickets,
        "cause": cause,
    })


def all_out(player_id: int, score: int) -> GameEvent:
    return GameEvent(ALL_OUT, {
        "player_id": player_id,
        "score": score,
    })


def extra_turn(player_id: int) -> GameEvent:
    return GameEvent(EXTRA_TURN, {"player_id": player_id})


def turn_ended(player_id: int, turns_remaining: int | None, next_player_id: int) -> GameEvent:
    return GameEvent(TURN_ENDED, {
        "player_id": player_id,
        "turns_remaining": turns_remaining,
        "next_player_id": next_player_id,
    })


def turn_skipped(player_id: int, reason: str, next_player_id: int) -> GameEvent:
    """reason: "all_out" or "no_turns_remaining"."""
    return GameEvent(TURN_SKIPPED, {
        "player_id": player_id,
        "reason": reason,
        "next_player_id": next_player_id,
    })


def player_advanced(from_player_id: int, to_player_id: int) -> GameEvent:
    return GameEvent(PLAYER_ADVANCED, {
        "from_player_id": from_player_id,
        "to_player_id": to_player_id,
    })


def game_over(reason: str, standings: list[dict[str, Any]], winners: list[int]) -> GameEvent:
    """
    Emitted once, when the game-over latch is set.

    Args:
        reason: "all_finished" (hard stop) or "chase_complete" (last batter passed the top score)
        standings: [{"player_id", "name", "score", "wickets"}, ...] by score descending
        winners: ids of every player sharing the top score
    """
    return GameEvent(GAME_OVER, {
        "reason": reason,
        "standings": standings,
        "winners": winners,
    })
