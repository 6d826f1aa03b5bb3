"""
Collision (capture) resolution.
A token landing on a square knocks every exposed opposing token there back to its base.

Note: these functions MODIFY the state passed in. The reducer calls them on its
working copy, never on the caller's state.
"""

from cricket_board.engine.definitions import KillRule, SquareType, get_square
from cricket_board.engine.events import (
    GameEvent,
    all_out,
    fortress_held,
    level_stolen,
    runs_scored,
    token_captured,
    token_returned,
    wicket_taken,
)
from cricket_board.engine.movement import compute_return_path
from cricket_board.engine.state import GameState, PlayerState, Token


def is_fortress(defender: PlayerState, position: int) -> bool:
    """Both of the defender's tokens stacked on this square."""
    return all(t.position_index == position for t in defender.tokens)


def exposed_tokens(state: GameState, defender: PlayerState, position: int) -> list[Token]:
    """Defender tokens on `position` that a landing attacker would capture."""
    square = get_square(position)
    if square.type == SquareType.SAFE_ZONE:
        return []
    if state.settings.kill_rule == KillRule.FORTRESS and is_fortress(defender, position):
        return []
    return [t for t in defender.tokens if t.position_index == position]


def resolve_collisions(
    state: GameState,
    attacker: PlayerState,
    attacking_token_id: int,
    position: int,
) -> tuple[bool, list[GameEvent]]:
    """
    Capture opposing tokens on the landing square.

    Rules:
    - Safe zones are immune: nothing is ever captured there.
    - Fortress kill rule: a defender with both tokens on the square is immune.
    - Each captured token: victim loses a wicket, token goes home at level 1.
    - steal_level_on_kill: attacker takes the victim's pre-capture level if higher.
      Later captures in the same move compare against the updated level.
    - On a Runs square the attacker scores value * kill_bonus_multiplier per capture
      (not scaled by level).

    Returns:
        (captured_any, events)
    """
    events: list[GameEvent] = []
    square = get_square(position)
    if square.type == SquareType.SAFE_ZONE:
        return False, events

    settings = state.settings
    attacking_token = attacker.get_token(attacking_token_id)
    captured_any = False

    for victim in state.players:
        if victim.id == attacker.id:
            continue
        if not any(t.position_index == position for t in victim.tokens):
            continue

        if settings.kill_rule == KillRule.FORTRESS and is_fortress(victim, position):
            events.append(fortress_held(attacker.id, victim.id, position))
            continue

        for victim_token in [t for t in victim.tokens if t.position_index == position]:
            captured_any = True
            victim_level = victim_token.level  # before reset

            events.append(token_captured(
                attacker.id, attacking_token.id, victim.id, victim_token.id, position, victim_level,
            ))

            became_all_out = victim.take_wicket()
            events.append(wicket_taken(victim.id, victim.wickets, "capture"))
            if became_all_out:
                events.append(all_out(victim.id, victim.score))

            victim.return_token_to_home(victim_token.id)
            events.append(token_returned(
                victim.id,
                victim_token.id,
                position,
                victim.home_base_index,
                compute_return_path(position, victim.home_base_index, settings),
                "capture",
            ))

            if settings.steal_level_on_kill and victim_level > attacking_token.level:
                old_level = attacking_token.level
                attacking_token.level = victim_level
                events.append(level_stolen(attacker.id, attacking_token.id, old_level, victim_level, victim.id))

            if square.type == SquareType.RUNS:
                bonus = square.value * settings.kill_bonus_multiplier
                attacker.add_score(bonus)
                events.append(runs_scored(attacker.id, bonus, attacker.score, "kill_bonus"))

    return captured_any, events
