"""
Main entry point for the Cricket Board Game Engine.
Demonstrates core functionality with a few scripted scenarios and a simulated game.
"""

import random

from cricket_board.config import AI_SEED, DEFAULT_GAME_MODE, DEFAULT_PLAYER_COLORS, DEFAULT_SETTINGS
from cricket_board.engine.actions import play_turn
from cricket_board.engine.ai import greedy_token_choice
from cricket_board.engine.controller import TurnController
from cricket_board.engine.definitions import Direction, GameMode, KillRule
from cricket_board.engine.errors import EngineError
from cricket_board.engine.reducer import apply_action
from cricket_board.engine.state import DiceResult, GameSettings, GameState
from cricket_board.engine.utils import (
    initialize_game_state,
    print_game_state,
    print_game_summary,
)


def main():
    print("Cricket Board Game Engine")
    print("=" * 60)

    settings = GameSettings.from_dict(DEFAULT_SETTINGS)
    state = initialize_game_state(DEFAULT_GAME_MODE, DEFAULT_PLAYER_COLORS[:2], settings)

    print("\n[INITIAL STATE]")
    print_game_state(state)

    # ===== SCENARIO 1: Runs square and the level multiplier =====
    print("\n[SCENARIO 1: Lap Bonus]")
    blue = state.players[0]
    blue.tokens[0].position_index = 46
    print("Blue token 1 sits on square 46; rolling a 3 walks it through its base at 0.")

    state, events = apply_action(state, play_turn(blue.id, 1, DiceResult(3)))
    blue = state.get_player(blue.id)
    print(f"  Events: {[e.type for e in events]}")
    print(f"  Token 1 is now on {blue.tokens[0].position_index} at level {blue.tokens[0].level}; "
          f"score {blue.score}")

    # ===== SCENARIO 2: Capture =====
    print("\n[SCENARIO 2: Capture on a Runs Square]")
    yellow = state.get_current_player()
    target = blue.tokens[0].position_index + 3  # square 4, Runs 4
    yellow.tokens[0].position_index = target - 2
    print(f"Yellow token 1 on {target - 2} rolls a 2 onto square {target}...")
    state.get_player(blue.id).tokens[1].position_index = target

    state, events = apply_action(state, play_turn(yellow.id, 1, DiceResult(2)))
    for e in events:
        if e.type in ("token_captured", "runs_scored", "wicket_taken"):
            print(f"  - {e.type}: {e.payload}")

    # ===== SCENARIO 3: Rejected moves leave the state untouched =====
    print("\n[SCENARIO 3: Validation]")
    before = state.to_json()
    for label, action in [
        ("wrong player", play_turn(yellow.id, 1, DiceResult(2))),
        ("bad token", play_turn(state.get_current_player().id, 3, DiceResult(2))),
        ("anti-clockwise not allowed", play_turn(
            state.get_current_player().id, 1, DiceResult(2, Direction.ANTI_CLOCKWISE))),
    ]:
        try:
            apply_action(state, action)
            print(f"✗ {label}: accepted")
        except EngineError as e:
            print(f"✓ {label}: rejected ({type(e).__name__}: {e})")
    print(f"  State unchanged: {state.to_json() == before}")

    # ===== SCENARIO 4: Save and restore =====
    print("\n[SCENARIO 4: Serialization Round Trip]")
    restored = GameState.from_json(state.to_json())
    print(f"  Round trip exact: {restored.to_dict() == state.to_dict()}")

    # ===== SCENARIO 5: Simulated game between two AIs =====
    print("\n[SCENARIO 5: Simulated Fortress Game]")
    rng = random.Random(AI_SEED)
    sim_state = initialize_game_state(
        GameMode.T20,
        DEFAULT_PLAYER_COLORS,
        GameSettings(kill_rule=KillRule.FORTRESS, steal_level_on_kill=True),
    )
    controller = TurnController(sim_state, rng=rng, chooser=greedy_token_choice(rng))
    moves = 0
    while not controller.is_game_over:
        controller.skip_inactive_players()
        if controller.is_game_over:
            break
        controller.play_ai_turn()
        moves += 1
    print(f"  Game finished after {moves} moves.")
    print_game_summary(controller.state)

    # ===== Summary =====
    print("\n" + "=" * 60)
    print("✓ Demonstrated:")
    print("  • Movement, lap level-up and Runs multiplier")
    print("  • Capture with wicket and kill bonus")
    print("  • Action validation without state mutation")
    print("  • JSON round trip and a full simulated game")
    print("=" * 60)


if __name__ == "__main__":
    main()
