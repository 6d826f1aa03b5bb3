"""
Main game reducer.
Applies actions to state, enforcing rules and producing new state.
Returns (new_state, events) where events describe what happened.
The input state is never modified.
"""

from cricket_board.engine.actions import Action, play_turn
from cricket_board.engine.collisions import resolve_collisions
from cricket_board.engine.definitions import GameMode, get_square
from cricket_board.engine.events import (
    GameEvent,
    extra_turn,
    game_over,
    level_up,
    player_advanced,
    token_moved,
    turn_ended,
    turn_skipped,
)
from cricket_board.engine.movement import compute_movement_path
from cricket_board.engine.queries import check_action, get_game_summary
from cricket_board.engine.squares import resolve_square_event
from cricket_board.engine.state import DiceResult, GameState


def apply_action(
    state: GameState,
    action: Action,
) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    Validates (before touching anything):
    - Game is not over
    - Action player matches the current player
    - Token id and dice are valid for play_turn

    Args:
        state: Current game state
        action: Action to apply

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    check_action(state, action)

    new_state = state.copy()
    events: list[GameEvent] = []

    if action.type == "play_turn":
        new_state, evts = _handle_play_turn(
            new_state, action.payload["token_id"], DiceResult.from_dict(action.payload["dice"]))
        events.extend(evts)

    elif action.type == "advance_player":
        new_state, evts = _handle_advance_player(new_state)
        events.extend(evts)

    return new_state, events


def apply_turn(
    state: GameState,
    token_id: int,
    dice: DiceResult,
) -> tuple[GameState, list[GameEvent]]:
    """play_turn on behalf of whoever is the current player."""
    return apply_action(state, play_turn(state.get_current_player().id, token_id, dice))


def advance_to_next_player(state: GameState) -> None:
    """Round-robin to the next seat. Modifies state in place."""
    state.current_player_index = (state.current_player_index + 1) % len(state.players)


def _handle_advance_player(state: GameState) -> tuple[GameState, list[GameEvent]]:
    previous = state.get_current_player()
    advance_to_next_player(state)
    return state, [player_advanced(previous.id, state.get_current_player().id)]


def _end_turn(state: GameState) -> GameEvent:
    player = state.get_current_player()
    player.decrement_turn()
    advance_to_next_player(state)
    return turn_ended(player.id, player.turns_remaining, state.get_current_player().id)


def _handle_play_turn(
    state: GameState,
    token_id: int,
    dice: DiceResult,
) -> tuple[GameState, list[GameEvent]]:
    """
    Resolve one move end to end.

    Order:
    1. Players who cannot act (all out, or no turns left) are skipped: no dice used, no decrement
    2. Walk the path; passing through or landing on the home base levels the token up
    3. Collisions, then the landing square's own effect (always)
    4. A capture ends the turn even on an Extra square; otherwise Extra grants another roll
    5. Game-over check
    """
    events: list[GameEvent] = []
    player = state.get_current_player()

    if not player.can_act:
        reason = "all_out" if player.is_all_out else "no_turns_remaining"
        advance_to_next_player(state)
        events.append(turn_skipped(player.id, reason, state.get_current_player().id))
        return state, events

    token = player.get_token(token_id)
    old_position = token.position_index

    # The path excludes the starting square, so a token resting on its base
    # only levels up after it has gone round and come back.
    path = compute_movement_path(old_position, dice.movement, dice.direction)
    new_position = path[-1]

    token.position_index = new_position
    events.append(token_moved(player.id, token.id, old_position, new_position, path, dice.direction.value))

    if player.home_base_index in path:
        token.level += 1
        events.append(level_up(player.id, token.id, token.level))

    captured, evts = resolve_collisions(state, player, token.id, new_position)
    events.extend(evts)

    gets_another_turn, evts = resolve_square_event(player, token.id, get_square(new_position), state.settings)
    events.extend(evts)

    if captured or not gets_another_turn:
        events.append(_end_turn(state))
    else:
        events.append(extra_turn(player.id))

    events.extend(_check_game_over(state))
    return state, events


def _check_game_over(state: GameState) -> list[GameEvent]:
    """
    Set the game-over latch if either condition holds.

    Hard stop: Test mode ends when everyone is all out; limited-overs modes end when
    everyone is all out or out of turns.
    Chase: with exactly one batter left, the game ends once their score passes the best
    all-out score (0 if nobody scored).
    """
    if state.is_game_over:
        return []

    if state.mode == GameMode.TEST:
        finished = all(p.is_all_out for p in state.players)
    else:
        finished = all(p.is_all_out or p.turns_remaining == 0 for p in state.players)
    if finished:
        return [_finish(state, "all_finished")]

    all_out_players = [p for p in state.players if p.is_all_out]
    if len(all_out_players) == len(state.players) - 1:
        last_player = next(p for p in state.players if not p.is_all_out)
        score_to_beat = max([0] + [p.score for p in all_out_players])
        if last_player.score > score_to_beat:
            return [_finish(state, "chase_complete")]

    return []


def _finish(state: GameState, reason: str) -> GameEvent:
    state.is_game_over = True
    summary = get_game_summary(state)
    return game_over(reason, summary["standings"], summary["winners"])


def replay_from_actions(
    initial_state: GameState,
    actions: list[Action],
) -> tuple[GameState, list[GameEvent]]:
    """
    Replay a series of actions from an initial state.
    Event sourcing: state is derived from action log.

    Args:
        initial_state: Starting game state
        actions: List of actions to apply in sequence

    Returns:
        Tuple of (final_state, all_events) after all actions applied
    """
    current_state = initial_state.copy()
    all_events: list[GameEvent] = []

    for action in actions:
        current_state, events = apply_action(current_state, action)
        all_events.extend(events)

    return current_state, all_events
