"""
Turn controller: a single game's session around the pure reducer.

Keeps the current GameState, the pending dice roll and an undo history, and exposes the
roll -> choose token -> resolve cycle:

    AWAITING_DICE_ROLL --roll_dice()--> AWAITING_TOKEN_CHOICE --choose_token()--> AWAITING_DICE_ROLL
                                                                                   or GAME_OVER

Not thread-safe; callers serialize moves for a game.
"""

import logging
import random
from collections import deque
from enum import Enum
from typing import Any

from cricket_board.engine.actions import advance_player, play_turn
from cricket_board.engine.ai import TokenChooser, random_token_choice
from cricket_board.engine.errors import InvalidPhaseError
from cricket_board.engine.events import GameEvent
from cricket_board.engine.queries import check_dice
from cricket_board.engine.reducer import apply_action
from cricket_board.engine.state import DiceResult, GameState, PlayerState
from cricket_board.engine.utils import roll_dice

logger = logging.getLogger(__name__)

# States kept for undo; older ones are dropped
DEFAULT_HISTORY_LIMIT = 100


class TurnPhase(str, Enum):
    AWAITING_DICE_ROLL = "awaiting_dice_roll"
    AWAITING_TOKEN_CHOICE = "awaiting_token_choice"
    GAME_OVER = "game_over"


class TurnController:
    """
    Drives one game. All rule work is delegated to apply_action.
    history_limit caps how many past states undo() can restore (0 disables undo).
    """

    def __init__(
        self,
        state: GameState,
        rng: random.Random | None = None,
        chooser: TokenChooser | None = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._state = state
        self._rng = rng or random.Random()
        self._chooser = chooser or random_token_choice(self._rng)
        self._pending_dice: DiceResult | None = None
        self._history: deque[GameState] = deque(maxlen=history_limit)

    @property
    def state(self) -> GameState:
        """Current state. Treat as read-only; mutate only through the controller."""
        return self._state

    @property
    def phase(self) -> TurnPhase:
        if self._state.is_game_over:
            return TurnPhase.GAME_OVER
        if self._pending_dice is not None:
            return TurnPhase.AWAITING_TOKEN_CHOICE
        return TurnPhase.AWAITING_DICE_ROLL

    @property
    def pending_dice(self) -> DiceResult | None:
        return self._pending_dice

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    def get_current_player(self) -> PlayerState:
        return self._state.get_current_player()

    # ===== Turn cycle =====

    def roll_dice(self) -> DiceResult:
        """Draw a roll for the current player and wait for their token choice."""
        if self.phase != TurnPhase.AWAITING_DICE_ROLL:
            raise InvalidPhaseError(f"Cannot roll dice while {self.phase.value}")
        self._pending_dice = roll_dice(self._state.settings, self._rng)
        logger.debug("%s rolled %s", self.get_current_player().name, self._pending_dice)
        return self._pending_dice

    def choose_token(self, token_id: int) -> list[GameEvent]:
        """Resolve the pending roll with the chosen token."""
        if self.phase != TurnPhase.AWAITING_TOKEN_CHOICE:
            raise InvalidPhaseError(f"Cannot choose a token while {self.phase.value}")
        events = self.play_turn(token_id, self._pending_dice)
        self._pending_dice = None
        return events

    def play_turn(self, token_id: int, dice: DiceResult) -> list[GameEvent]:
        """
        Resolve a move for the current player with a given roll.
        After the game has ended this is a no-op: it logs a warning and returns no events.
        """
        if self._state.is_game_over:
            logger.warning("Game is over. Cannot play another turn.")
            return []
        player = self.get_current_player()
        new_state, events = apply_action(self._state, play_turn(player.id, token_id, dice))
        self._commit(new_state)
        self._pending_dice = None
        for event in events:
            logger.debug("%s: %s", event.type, event.payload)
        return events

    def play_ai_turn(self) -> list[GameEvent]:
        """Roll, let the configured chooser pick a token, and play it."""
        if self.phase == TurnPhase.GAME_OVER:
            logger.warning("Game is over. Cannot play another turn.")
            return []
        dice = self._pending_dice or self.roll_dice()
        player = self.get_current_player()
        token_id = self._chooser(self._state, player, dice)
        logger.debug("[AI] %s moves token %s", player.name, token_id)
        return self.choose_token(token_id)

    def advance_to_next_player(self) -> list[GameEvent]:
        """Pass control to the next seat without resolving a move."""
        new_state, events = apply_action(self._state, advance_player(self.get_current_player().id))
        self._commit(new_state)
        self._pending_dice = None
        return events

    def skip_inactive_players(self) -> list[GameEvent]:
        """Advance past every player who cannot act (all out or out of turns)."""
        events: list[GameEvent] = []
        for _ in range(len(self._state.players)):
            if self._state.is_game_over or self.get_current_player().can_act:
                break
            # play_turn skips without moving or consuming a turn; the dice are never read
            events.extend(self.play_turn(1, DiceResult(1)))
        return events

    def set_pending_dice(self, dice: DiceResult) -> None:
        """Use an externally rolled result (e.g. physical dice) for the next token choice."""
        if self.phase != TurnPhase.AWAITING_DICE_ROLL:
            raise InvalidPhaseError(f"Cannot set dice while {self.phase.value}")
        check_dice(self._state, dice)
        self._pending_dice = dice

    # ===== History =====

    def _commit(self, new_state: GameState) -> None:
        self._history.append(self._state)
        self._state = new_state

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def undo(self) -> GameState:
        """Restore the state before the last resolved action."""
        if not self._history:
            raise InvalidPhaseError("Nothing to undo")
        self._state = self._history.pop()
        self._pending_dice = None
        return self._state

    # ===== Serialization =====

    def to_dict(self) -> dict[str, Any]:
        return self._state.to_dict()

    def to_json(self, indent: int | None = 2) -> str:
        return self._state.to_json(indent=indent)

    @classmethod
    def from_dict(
        cls,
        data: Any,
        rng: random.Random | None = None,
        chooser: TokenChooser | None = None,
    ) -> "TurnController":
        return cls(GameState.from_dict(data), rng=rng, chooser=chooser)

    @classmethod
    def from_json(
        cls,
        json_str: str,
        rng: random.Random | None = None,
        chooser: TokenChooser | None = None,
    ) -> "TurnController":
        return cls(GameState.from_json(json_str), rng=rng, chooser=chooser)
