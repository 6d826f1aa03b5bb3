"""
AI token selection.
A chooser receives the state, the player to move and the roll, and returns 1 or 2.
The engine places no other constraint on strategy.
"""

import random
from typing import Callable

from cricket_board.engine.queries import get_move_preview
from cricket_board.engine.state import DiceResult, GameState, PlayerState

TokenChooser = Callable[[GameState, PlayerState, DiceResult], int]


def random_token_choice(rng: random.Random | None = None) -> TokenChooser:
    """Coin flip between the two tokens."""
    rng = rng or random.Random()

    def choose(state: GameState, player: PlayerState, dice: DiceResult) -> int:
        return rng.choice([t.id for t in player.tokens])

    return choose


def _move_value(preview: dict) -> float:
    # Wickets cost far more than a few runs; captures are worth a wicket to the opponent.
    return (
        preview["score_change"]
        - 15 * preview["wickets_lost"]
        + 10 * preview["captures"]
        + 2 * preview["level_after"]
    )


def greedy_token_choice(rng: random.Random | None = None) -> TokenChooser:
    """
    Try both tokens with the reducer and keep the better outcome for this move.
    Ties (and identical tokens, e.g. both still on base) are broken at random.
    """
    rng = rng or random.Random()

    def choose(state: GameState, player: PlayerState, dice: DiceResult) -> int:
        scored = [
            (_move_value(get_move_preview(state, token.id, dice)), token.id)
            for token in player.tokens
        ]
        best = max(value for value, _ in scored)
        return rng.choice([token_id for value, token_id in scored if value == best])

    return choose
