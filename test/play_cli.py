#!/usr/bin/env python3
"""
Interactive CLI for playing the cricket board engine against AI opponents.
Run: python test/play_cli.py
"""

import random
import sys

from cricket_board.config import AI_SEED, DEFAULT_PLAYER_COLORS, DEFAULT_SETTINGS
from cricket_board.engine.ai import greedy_token_choice
from cricket_board.engine.controller import TurnController, TurnPhase
from cricket_board.engine.definitions import GameMode, PlayerColor, get_square
from cricket_board.engine.errors import EngineError
from cricket_board.engine.queries import get_game_summary, get_move_preview
from cricket_board.engine.state import GameSettings
from cricket_board.engine.utils import initialize_game_state, print_game_state, print_game_summary


def clear_screen():
    print("\n" * 2)


def prompt_choice(label, options, default=None):
    """Ask until the answer is one of options (case-insensitive). Empty input returns default."""
    lowered = {o.lower(): o for o in options}
    while True:
        answer = input(f"{label} [{'/'.join(options)}]: ").strip().lower()
        if not answer and default is not None:
            return default
        if answer in lowered:
            return lowered[answer]
        print("Invalid input")


def setup_game(rng):
    """Ask for mode, seat count and colour; everyone else is AI."""
    print("=" * 60)
    print("  CRICKET BOARD GAME")
    print("=" * 60)

    mode = prompt_choice("Game mode", [m.value for m in GameMode], default=GameMode.T20.value)
    count = int(prompt_choice("Players", ["2", "3", "4"], default="2"))
    colors = DEFAULT_PLAYER_COLORS[:count]
    human = prompt_choice("Your colour", colors, default=colors[0])

    settings = GameSettings.from_dict(DEFAULT_SETTINGS)
    if prompt_choice("Allow anti-clockwise dice?", ["y", "n"], default="n") == "y":
        settings = GameSettings.from_dict({**settings.to_dict(), "allowAntiClockwise": True})
    if prompt_choice("Kill rule", ["jackpot", "fortress"], default="jackpot") == "fortress":
        settings = GameSettings.from_dict({**settings.to_dict(), "killRule": "fortress"})

    state = initialize_game_state(mode, colors, settings, human_color=PlayerColor(human))
    return TurnController(state, rng=rng, chooser=greedy_token_choice(rng))


def print_header(controller):
    """Print game status header."""
    state = controller.state
    player = controller.get_current_player()
    turns = "∞" if player.turns_remaining is None else player.turns_remaining
    print("=" * 60)
    print(f"  {state.mode.value} | {player.name} to play | turns left {turns}")
    if state.is_game_over:
        print("  *** GAME OVER ***")
    print("=" * 60)


def print_options(controller, dice):
    """Show where each token would land for this roll."""
    print(f"\nYou rolled {dice.movement} ({dice.direction.name.replace('_', '-').lower()})")
    for token in controller.get_current_player().tokens:
        preview = get_move_preview(controller.state, token.id, dice)
        square = get_square(preview["to"])
        value = f" {square.value}" if square.value else ""
        extras = []
        if preview["captures"]:
            extras.append(f"captures {preview['captures']}")
        if preview["wickets_lost"]:
            extras.append("loses a wicket")
        if preview["level_after"] > token.level:
            extras.append("levels up")
        note = f" ({', '.join(extras)})" if extras else ""
        print(f"  [{token.id}] {preview['from']} -> {preview['to']} "
              f"{square.type.value}{value}, {preview['score_change']:+d} runs{note}")


def print_events(events):
    """Narrate what happened."""
    for e in events:
        p = e.payload
        if e.type == "token_moved":
            print(f"  Player {p['player_id']} token {p['token_id']}: {p['from']} -> {p['to']}")
        elif e.type == "level_up":
            print(f"  Lap complete! Token {p['token_id']} is now level {p['level']}")
        elif e.type == "token_captured":
            print(f"  Player {p['attacker_id']} captured player {p['victim_id']}'s token {p['victim_token_id']}!")
        elif e.type == "fortress_held":
            print(f"  Player {p['defender_id']}'s fortress holds at {p['position']}")
        elif e.type == "level_stolen":
            print(f"  Level stolen: {p['old_level']} -> {p['new_level']}")
        elif e.type == "runs_scored":
            print(f"  +{p['runs']} runs ({p['reason']}), total {p['score']}")
        elif e.type == "wicket_taken":
            print(f"  WICKET! Player {p['player_id']} is {p['wickets']} down")
        elif e.type == "all_out":
            print(f"  Player {p['player_id']} is ALL OUT for {p['score']}")
        elif e.type == "extra_turn":
            print("  Extra! Roll again.")
        elif e.type == "turn_skipped":
            print(f"  Player {p['player_id']} skipped ({p['reason']})")
        elif e.type == "game_over":
            print(f"  Game over ({p['reason']})")
        elif e.type in ("turn_ended", "token_returned", "player_advanced"):
            pass  # Header will show this
        else:
            print(f"  {e.type}: {p}")


def play_human_turn(controller):
    """Roll, show the options and apply the chosen token. Returns False to quit."""
    while True:
        if controller.phase == TurnPhase.AWAITING_DICE_ROLL:
            choice = input("\n[r] Roll  [s] Show board  [u] Undo  [w] Save  [q] Quit: ").strip().lower()
            if choice == "q":
                return False
            if choice == "s":
                print_game_state(controller.state)
                continue
            if choice == "u":
                if not controller.can_undo:
                    print("Nothing to undo")
                    continue
                controller.undo()
                print("Undone.")
                return True
            if choice == "w":
                filename = input("Save filename (default: save.json): ").strip() or "save.json"
                with open(filename, "w") as f:
                    f.write(controller.to_json())
                print(f"Game saved to {filename}")
                continue
            if choice != "r":
                print("Invalid input")
                continue
            controller.roll_dice()

        print_options(controller, controller.pending_dice)
        token_id = int(prompt_choice("Move token", ["1", "2"]))
        try:
            events = controller.choose_token(token_id)
        except EngineError as ex:
            print(f"\nError: {ex}")
            continue
        print("\n--- Events ---")
        print_events(events)
        return True


def main_loop():
    rng = random.Random(AI_SEED)
    if len(sys.argv) > 1:
        with open(sys.argv[1]) as f:
            controller = TurnController.from_json(f.read(), rng=rng, chooser=greedy_token_choice(rng))
        print(f"Loaded {sys.argv[1]}")
    else:
        controller = setup_game(rng)

    while not controller.is_game_over:
        print_events(controller.skip_inactive_players())
        if controller.is_game_over:
            break

        clear_screen()
        print_header(controller)
        player = controller.get_current_player()

        if player.is_ai:
            print("\n--- Events ---")
            print_events(controller.play_ai_turn())
            continue

        if not play_human_turn(controller):
            print("Thanks for playing!")
            return

    print_game_summary(controller.state)
    summary = get_game_summary(controller.state)
    humans = [p.id for p in controller.state.players if not p.is_ai]
    if any(pid in summary["winners"] for pid in humans):
        print("Well played!")


if __name__ == "__main__":
    try:
        main_loop()
    except KeyboardInterrupt:
        print("\n\nGame interrupted. Goodbye!")
        sys.exit(0)
