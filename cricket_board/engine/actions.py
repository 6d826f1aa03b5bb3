"""
Action definitions for the game.
Actions are immutable, deterministic instructions. Dice are rolled before the action is built,
so replaying the same actions from the same state always gives the same result.
"""

from dataclasses import dataclass
from typing import Any

from cricket_board.engine.state import DiceResult


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type, the submitting player, and a payload."""
    type: str  # "play_turn" or "advance_player"
    player_id: int  # id of the player submitting the action
    payload: dict

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "player_id": self.player_id, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Action":
        return cls(
            type=str(data["type"]),
            player_id=int(data["player_id"]),
            payload=dict(data.get("payload") or {}),
        )


def play_turn(
    player_id: int,
    token_id: int,
    dice: DiceResult,
) -> Action:
    """
    Move one of the player's tokens by a dice result.
    Example: play_turn(1, 2, DiceResult(4, Direction.CLOCKWISE))
    """
    return Action(
        type="play_turn",
        player_id=player_id,
        payload={"token_id": token_id, "dice": dice.to_dict()},
    )


def advance_player(player_id: int) -> Action:
    """
    Pass control to the next player in seat order without resolving a move.
    Used by callers to step past players who cannot act (all out / no turns left).
    """
    return Action(
        type="advance_player",
        player_id=player_id,
        payload={},
    )
