"""
Validating decode for serialized game states.
The pydantic models mirror GameState.to_dict exactly; anything else (missing keys, unknown keys,
wrong types, out-of-range values, broken invariants) is rejected with a readable reason.
"""

import json
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cricket_board.engine import BOARD_SIZE, MAX_PLAYERS, MAX_WICKETS, MIN_PLAYERS, TOKENS_PER_PLAYER
from cricket_board.engine.definitions import (
    COLOR_DEFINITIONS,
    GameMode,
    KillRule,
    PlayerColor,
)
from cricket_board.engine.errors import InvalidGameStateError
from cricket_board.engine.state import GameSettings, GameState, PlayerState, Token

ColorName = Literal["Blue", "Yellow", "Green", "Purple"]
ModeName = Literal["T20", "50-50", "Test"]
KillRuleName = Literal["jackpot", "fortress"]


class _Document(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


class TokenDocument(_Document):
    id: Literal[1, 2]
    position_index: int = Field(alias="positionIndex", ge=0, lt=BOARD_SIZE)
    level: int = Field(ge=1)


class PlayerDocument(_Document):
    id: int = Field(ge=1)
    name: str
    color: ColorName
    home_base_index: int = Field(alias="homeBaseIndex", ge=0, lt=BOARD_SIZE)
    is_ai: bool = Field(alias="isAI")
    score: int = Field(ge=0)
    wickets: int = Field(ge=0, le=MAX_WICKETS)
    turns_remaining: Optional[int] = Field(alias="turnsRemaining")
    tokens: list[TokenDocument] = Field(min_length=TOKENS_PER_PLAYER, max_length=TOKENS_PER_PLAYER)
    is_all_out: bool = Field(alias="isAllOut")

    @model_validator(mode="after")
    def check_invariants(self) -> "PlayerDocument":
        if sorted(t.id for t in self.tokens) != list(range(1, TOKENS_PER_PLAYER + 1)):
            raise ValueError("tokens must have ids 1 and 2")
        if self.is_all_out != (self.wickets >= MAX_WICKETS):
            raise ValueError(f"isAllOut={self.is_all_out} contradicts wickets={self.wickets}")
        if self.turns_remaining is not None and self.turns_remaining < 0:
            raise ValueError("turnsRemaining must be null or >= 0")
        expected_home = COLOR_DEFINITIONS[PlayerColor(self.color)].home_base_index
        if self.home_base_index != expected_home:
            raise ValueError(f"{self.color} home base is {expected_home}, not {self.home_base_index}")
        return self


class SettingsDocument(_Document):
    allow_anti_clockwise: bool = Field(alias="allowAntiClockwise")
    kill_rule: KillRuleName = Field(alias="killRule")
    steal_level_on_kill: bool = Field(alias="stealLevelOnKill")
    # Absent in documents written before the variant flag existed
    kill_bonus_multiplier: int = Field(default=1, alias="killBonusMultiplier", ge=1)


class GameDocument(_Document):
    players: list[PlayerDocument] = Field(min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    current_player_index: int = Field(alias="currentPlayerIndex", ge=0)
    is_game_over: bool = Field(alias="isGameOver")
    game_mode: ModeName = Field(alias="gameMode")
    settings: SettingsDocument

    @model_validator(mode="after")
    def check_invariants(self) -> "GameDocument":
        if self.current_player_index >= len(self.players):
            raise ValueError(
                f"currentPlayerIndex {self.current_player_index} out of range for {len(self.players)} players"
            )
        colors = [p.color for p in self.players]
        if len(set(colors)) != len(colors):
            raise ValueError(f"duplicate player colours: {colors}")
        ids = [p.id for p in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate player ids: {ids}")
        unlimited = self.game_mode == GameMode.TEST.value
        for p in self.players:
            if unlimited != (p.turns_remaining is None):
                raise ValueError(
                    f"player {p.id}: turnsRemaining={p.turns_remaining} does not fit mode {self.game_mode}"
                )
        return self


@dataclass
class DecodeResult:
    """Outcome of decoding: valid with a state, or invalid with the reason."""
    valid: bool
    state: GameState | None = None
    error: str | None = None

    def unwrap(self) -> GameState:
        """Return the decoded state or raise InvalidGameStateError."""
        if not self.valid or self.state is None:
            raise InvalidGameStateError(f"Invalid game state: {self.error}")
        return self.state

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def _build_state(doc: GameDocument) -> GameState:
    players = [
        PlayerState(
            id=p.id,
            name=p.name,
            color=PlayerColor(p.color),
            home_base_index=p.home_base_index,
            turns_remaining=p.turns_remaining,
            is_ai=p.is_ai,
            score=p.score,
            wickets=p.wickets,
            tokens=[
                Token(id=t.id, position_index=t.position_index, level=t.level)
                for t in sorted(p.tokens, key=lambda t: t.id)
            ],
            is_all_out=p.is_all_out,
        )
        for p in doc.players
    ]
    settings = GameSettings(
        allow_anti_clockwise=doc.settings.allow_anti_clockwise,
        kill_rule=KillRule(doc.settings.kill_rule),
        steal_level_on_kill=doc.settings.steal_level_on_kill,
        kill_bonus_multiplier=doc.settings.kill_bonus_multiplier,
    )
    return GameState(
        players=players,
        current_player_index=doc.current_player_index,
        is_game_over=doc.is_game_over,
        mode=GameMode(doc.game_mode),
        settings=settings,
    )


def decode_state(data: Any) -> DecodeResult:
    """Validate a serialized game state and rebuild it. Never raises for bad input."""
    if not isinstance(data, dict):
        return DecodeResult(False, error=f"expected an object, got {type(data).__name__}")
    try:
        doc = GameDocument.model_validate(data)
    except ValidationError as e:
        return DecodeResult(False, error=_format_validation_error(e))
    return DecodeResult(True, state=_build_state(doc))


def decode_state_json(json_str: str | bytes) -> DecodeResult:
    """decode_state for a JSON string."""
    try:
        data = json.loads(json_str)
    except (TypeError, json.JSONDecodeError) as e:
        return DecodeResult(False, error=f"not valid JSON: {e}")
    return decode_state(data)
