"""
Utility functions for the game engine.
"""

import random
from collections.abc import Iterable

from cricket_board.engine import DICE_SIDES, MAX_PLAYERS, MAX_WICKETS, MIN_PLAYERS
from cricket_board.engine.definitions import (
    BOARD_LAYOUT,
    COLOR_DEFINITIONS,
    INITIAL_TURNS,
    Direction,
    GameMode,
    PlayerColor,
    parse_enum,
)
from cricket_board.engine.errors import ConfigurationError
from cricket_board.engine.state import DiceResult, GameSettings, GameState, PlayerState


def initialize_game_state(
    mode: GameMode | str,
    player_colors: Iterable[PlayerColor | str],
    settings: GameSettings | None = None,
    human_color: PlayerColor | str | None = None,
) -> GameState:
    """
    Create a fresh game: every token on its owner's base, level 1, no score.

    Args:
        mode: T20 (20 turns each), 50-50 (50 turns each) or Test (unlimited)
        player_colors: seat order; player ids are 1..n in this order
        settings: rule options (defaults: clockwise only, jackpot, no level stealing)
        human_color: if given, every other colour is flagged as AI
    """
    mode = parse_enum(GameMode, mode, "game mode")
    colors = [parse_enum(PlayerColor, c, "colour") for c in player_colors]
    if not MIN_PLAYERS <= len(colors) <= MAX_PLAYERS:
        raise ConfigurationError(f"A game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(colors)}")
    if len(set(colors)) != len(colors):
        raise ConfigurationError(f"Duplicate colours: {[c.value for c in colors]}")
    human = parse_enum(PlayerColor, human_color, "colour") if human_color is not None else None

    initial_turns = INITIAL_TURNS[mode]
    players = []
    for seat, color in enumerate(colors, start=1):
        color_def = COLOR_DEFINITIONS[color]
        players.append(PlayerState(
            id=seat,
            name=f"Player {seat} ({color_def.display_name})",
            color=color,
            home_base_index=color_def.home_base_index,
            turns_remaining=initial_turns,
            is_ai=human is not None and color != human,
        ))

    return GameState(
        players=players,
        current_player_index=0,
        is_game_over=False,
        mode=mode,
        settings=settings or GameSettings(),
    )


def roll_dice(settings: GameSettings, rng: random.Random | None = None) -> DiceResult:
    """
    Roll 1..DICE_SIDES. Direction is a coin flip only when anti-clockwise play is allowed.

    Args:
        settings: game settings (allow_anti_clockwise)
        rng: random source; pass a seeded random.Random for reproducible games
    """
    rng = rng or random.Random()
    movement = rng.randint(1, DICE_SIDES)
    if settings.allow_anti_clockwise and rng.random() < 0.5:
        direction = Direction.ANTI_CLOCKWISE
    else:
        direction = Direction.CLOCKWISE
    return DiceResult(movement=movement, direction=direction)


def print_game_state(state: GameState) -> None:
    """Print a human-readable view of the game state."""
    print(f"Mode: {state.mode.value} | Kill rule: {state.settings.kill_rule.value}"
          f"{' | GAME OVER' if state.is_game_over else ''}")
    current = state.get_current_player()
    for player in state.players:
        marker = ">" if player is current else " "
        turns = "∞" if player.turns_remaining is None else player.turns_remaining
        status = " ALL OUT" if player.is_all_out else ""
        print(f"{marker} {player.name}{' [AI]' if player.is_ai else ''}: "
              f"{player.score}/{player.wickets} (wickets of {MAX_WICKETS}), turns left {turns}{status}")
        for token in player.tokens:
            square = BOARD_LAYOUT[token.position_index]
            print(f"    token {token.id}: square {token.position_index} ({square.type.value}"
                  f"{' ' + str(square.value) if square.value else ''}) level {token.level}")


def print_game_summary(state: GameState) -> None:
    """Print final scores, best first."""
    from cricket_board.engine.queries import get_game_summary
    summary = get_game_summary(state)

    print("\n--- GAME OVER ---" if state.is_game_over else "\n--- SCORES ---")
    print("Final Scores:")
    for rank, row in enumerate(summary["standings"], start=1):
        print(f"{rank}. {row['name']}: {row['score']} runs for {row['wickets']} wickets.")

    names = [state.get_player(pid).name for pid in summary["winners"]]
    if len(names) == 1:
        print(f"\n{names[0]} wins the game!")
    elif names:
        print(f"\nTie between {', '.join(names)}!")
