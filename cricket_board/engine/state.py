"""
Game state representation.
Transitions never mutate a caller's state: the reducer works on a copy and returns it.
Includes JSON serialization (the camelCase document shared with clients and storage).
"""

import json
from dataclasses import dataclass, field
from copy import deepcopy
from typing import Any

from cricket_board.engine import MAX_WICKETS, TOKENS_PER_PLAYER
from cricket_board.engine.definitions import (
    Direction,
    GameMode,
    KillRule,
    PlayerColor,
    parse_enum,
)
from cricket_board.engine.errors import ConfigurationError, InvalidDiceError, InvalidTokenError


@dataclass
class Token:
    """One of a player's two pieces."""
    id: int  # 1 or 2
    position_index: int
    level: int = 1  # multiplies Runs/Extra rewards; back to 1 whenever sent home

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "positionIndex": self.position_index,
            "level": self.level,
        }


@dataclass
class PlayerState:
    """Per-player mutable state and the primitives that keep its invariants."""
    id: int
    name: str
    color: PlayerColor
    home_base_index: int
    turns_remaining: int | None  # None = no limit (Test mode)
    is_ai: bool = False
    score: int = 0
    wickets: int = 0
    tokens: list[Token] = field(default_factory=list)
    # Set once wickets reach MAX_WICKETS; never cleared
    is_all_out: bool = False

    def __post_init__(self) -> None:
        if not self.tokens:
            self.tokens = [
                Token(id=i, position_index=self.home_base_index)
                for i in range(1, TOKENS_PER_PLAYER + 1)
            ]

    @property
    def can_act(self) -> bool:
        """False once all out or out of turns in a limited-overs game."""
        return not self.is_all_out and self.turns_remaining != 0

    def get_token(self, token_id: int) -> Token:
        for token in self.tokens:
            if token.id == token_id:
                return token
        raise InvalidTokenError(f"{self.name} has no token {token_id!r}")

    def add_score(self, runs: int) -> None:
        self.score += runs

    def take_wicket(self) -> bool:
        """
        Record a lost wicket (Wicket square or capture).
        The count never exceeds MAX_WICKETS.
        Returns True only for the wicket that made the player all out.
        """
        if self.wickets < MAX_WICKETS:
            self.wickets += 1
        if self.wickets >= MAX_WICKETS and not self.is_all_out:
            self.is_all_out = True
            return True
        return False

    def return_token_to_home(self, token_id: int) -> Token:
        token = self.get_token(token_id)
        token.position_index = self.home_base_index
        token.level = 1
        return token

    def decrement_turn(self) -> None:
        if self.turns_remaining is not None and self.turns_remaining > 0:
            self.turns_remaining -= 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color.value,
            "homeBaseIndex": self.home_base_index,
            "isAI": self.is_ai,
            "score": self.score,
            "wickets": self.wickets,
            "turnsRemaining": self.turns_remaining,
            "tokens": [t.to_dict() for t in self.tokens],
            "isAllOut": self.is_all_out,
        }


@dataclass(frozen=True)
class GameSettings:
    """Rule options chosen at game creation. Fixed for the game's lifetime."""
    allow_anti_clockwise: bool = False
    kill_rule: KillRule = KillRule.JACKPOT
    steal_level_on_kill: bool = False
    # Capture bonus on a Runs square = value * multiplier per captured token (1 = flat bonus)
    kill_bonus_multiplier: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "kill_rule", parse_enum(KillRule, self.kill_rule, "kill rule"))
        for name in ("allow_anti_clockwise", "steal_level_on_kill"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be true or false, got {getattr(self, name)!r}")
        multiplier = self.kill_bonus_multiplier
        if type(multiplier) is not int or multiplier < 1:
            raise ConfigurationError(f"kill_bonus_multiplier must be an integer >= 1, got {multiplier!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "allowAntiClockwise": self.allow_anti_clockwise,
            "killRule": self.kill_rule.value,
            "stealLevelOnKill": self.steal_level_on_kill,
            "killBonusMultiplier": self.kill_bonus_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "GameSettings":
        """
        Build settings from the camelCase shape; missing keys take their defaults.
        Values are not coerced: "false" or 2.5 raise ConfigurationError.
        """
        if not isinstance(data, dict):
            data = {}
        return cls(
            allow_anti_clockwise=data.get("allowAntiClockwise", False),
            kill_rule=data.get("killRule", KillRule.JACKPOT.value),
            steal_level_on_kill=data.get("stealLevelOnKill", False),
            kill_bonus_multiplier=data.get("killBonusMultiplier", 1),
        )


@dataclass(frozen=True)
class DiceResult:
    """A roll: how far and which way."""
    movement: int  # 1 to DICE_SIDES
    direction: Direction = Direction.CLOCKWISE

    def to_dict(self) -> dict[str, Any]:
        return {"movement": self.movement, "direction": self.direction.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiceResult":
        if not isinstance(data, dict):
            raise InvalidDiceError(f"Dice result must be an object, got {type(data).__name__}")
        try:
            movement = data["movement"]
            if type(movement) is not int:
                raise TypeError(f"movement must be an integer, got {type(movement).__name__}")
            direction = Direction(data.get("direction", Direction.CLOCKWISE.value))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDiceError(f"Malformed dice result {data!r}: {e}") from None
        return cls(movement=movement, direction=direction)


@dataclass
class GameState:
    """Complete game state. The board is static data and is not part of it."""
    players: list[PlayerState]
    current_player_index: int = 0
    # One-way latch
    is_game_over: bool = False
    mode: GameMode = GameMode.T20
    settings: GameSettings = field(default_factory=GameSettings)

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def get_current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    def get_player(self, player_id: int) -> PlayerState | None:
        return next((p for p in self.players if p.id == player_id), None)

    # ===== Serialization Methods =====

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to the JSON-ready document."""
        return {
            "players": [p.to_dict() for p in self.players],
            "currentPlayerIndex": self.current_player_index,
            "isGameOver": self.is_game_over,
            "gameMode": self.mode.value,
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "GameState":
        """
        Create GameState from a document produced by to_dict.
        Raises InvalidGameStateError if the document is malformed; see schema.decode_state
        for the non-raising form.
        """
        from cricket_board.engine.schema import decode_state
        return decode_state(data).unwrap()

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize GameState to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> "GameState":
        """Deserialize GameState from a JSON string."""
        from cricket_board.engine.schema import decode_state_json
        return decode_state_json(json_str).unwrap()
