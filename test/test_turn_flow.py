import pytest

from cricket_board.engine.actions import Action, advance_player, play_turn
from cricket_board.engine.definitions import Direction
from cricket_board.engine.errors import (
    InvalidDiceError,
    InvalidTokenError,
    NotYourTurnError,
    UnknownActionError,
)
from cricket_board.engine.queries import get_move_preview, validate_action
from cricket_board.engine.reducer import apply_action, apply_turn, replay_from_actions
from cricket_board.engine.state import DiceResult


def event_types(events):
    return [e.type for e in events]


def test_lap_through_home_base_levels_up(game, place):
    place(game, 1, 1, 46)

    state, events = apply_turn(game, 1, DiceResult(3))
    blue = state.get_player(1)

    moved = events[0]
    assert moved.type == "token_moved"
    assert moved.payload["path"] == [47, 0, 1]
    assert blue.get_token(1).position_index == 1
    assert blue.get_token(1).level == 2
    assert "level_up" in event_types(events)
    # Runs 1 at level 2
    assert blue.score == 2


def test_leaving_base_does_not_level_up(game):
    state, events = apply_turn(game, 1, DiceResult(3))

    assert state.get_player(1).get_token(1).level == 1
    assert "level_up" not in event_types(events)


def test_full_lap_from_base_levels_up_once(game):
    state = game
    level_ups = 0
    while state.get_player(1).get_token(1).position_index != 0 or level_ups == 0:
        current = state.get_current_player()
        if current.id == 1:
            state, events = apply_turn(state, 1, DiceResult(6))
            level_ups += event_types(events).count("level_up")
        else:
            state, _ = apply_action(state, advance_player(current.id))

    assert level_ups == 1
    assert state.get_player(1).get_token(1).level == 2


def test_runs_square_scales_with_level(game, place):
    place(game, 1, 1, 2, level=3)

    state, events = apply_turn(game, 1, DiceResult(6))

    assert state.get_player(1).score == 18
    assert state.get_current_player().id == 2
    assert state.get_player(1).turns_remaining == 19


def test_dot_ball_does_nothing(game):
    state, events = apply_turn(game, 1, DiceResult(2))

    blue = state.get_player(1)
    assert blue.score == 0
    assert blue.wickets == 0
    assert event_types(events) == ["token_moved", "turn_ended"]


def test_wicket_square_sends_token_home(game, place):
    place(game, 1, 1, 0, level=3)
    place(game, 1, 2, 1)

    state, events = apply_turn(game, 1, DiceResult(5))
    blue = state.get_player(1)

    assert blue.wickets == 1
    assert blue.get_token(1).position_index == 0
    assert blue.get_token(1).level == 1
    assert "token_returned" in event_types(events)
    assert state.get_current_player().id == 2


def test_extra_square_grants_another_roll(game):
    state, events = apply_turn(game, 1, DiceResult(6))
    blue = state.get_player(1)

    assert blue.score == 1
    assert blue.turns_remaining == 20
    assert state.get_current_player().id == 1
    assert event_types(events)[-1] == "extra_turn"


def test_capture_on_extra_ends_the_turn(game, place):
    place(game, 2, 1, 6)

    state, events = apply_turn(game, 1, DiceResult(6))
    blue, yellow = state.get_player(1), state.get_player(2)

    assert "token_captured" in event_types(events)
    assert "extra_turn" not in event_types(events)
    # Extra still pays out; no kill bonus off a Runs square
    assert blue.score == 1
    assert blue.turns_remaining == 19
    assert yellow.wickets == 1
    assert yellow.get_token(1).position_index == 12
    assert state.get_current_player().id == 2


def test_anti_clockwise_move_when_allowed(make_game):
    state = make_game(allow_anti_clockwise=True)

    state, events = apply_turn(state, 1, DiceResult(2, Direction.ANTI_CLOCKWISE))

    assert events[0].payload["path"] == [47, 46]
    assert events[0].payload["direction"] == "Red"
    assert state.get_player(1).score == 3
    assert "level_up" not in event_types(events)


def test_anti_clockwise_rejected_by_default(game):
    with pytest.raises(InvalidDiceError):
        apply_turn(game, 1, DiceResult(2, Direction.ANTI_CLOCKWISE))


@pytest.mark.parametrize("movement", [0, 7, -1])
def test_out_of_range_dice_rejected(game, movement):
    with pytest.raises(InvalidDiceError):
        apply_turn(game, 1, DiceResult(movement))


def test_wrong_player_rejected_without_mutation(game):
    before = game.to_dict()

    with pytest.raises(NotYourTurnError):
        apply_action(game, play_turn(2, 1, DiceResult(3)))

    assert game.to_dict() == before


def test_unknown_token_rejected(game):
    with pytest.raises(InvalidTokenError):
        apply_turn(game, 3, DiceResult(3))


def test_unknown_action_rejected(game):
    with pytest.raises(UnknownActionError):
        apply_action(game, Action(type="pass", player_id=1, payload={}))


def test_engine_errors_are_value_errors(game):
    with pytest.raises(ValueError):
        apply_action(game, play_turn(2, 1, DiceResult(3)))


def test_apply_action_leaves_input_untouched(game, place):
    place(game, 2, 1, 4)
    before = game.to_dict()

    apply_turn(game, 1, DiceResult(4))

    assert game.to_dict() == before


def test_advance_player(game):
    state, events = apply_action(game, advance_player(1))

    assert state.get_current_player().id == 2
    assert events[0].type == "player_advanced"
    assert state.get_player(1).turns_remaining == 20


def test_validate_action_reports_instead_of_raising(game):
    assert validate_action(game, play_turn(1, 1, DiceResult(3))).valid

    result = validate_action(game, play_turn(2, 1, DiceResult(3)))
    assert not result.valid
    assert "turn" in result.error


def test_move_preview_does_not_apply(game, place):
    place(game, 2, 1, 4)
    before = game.to_dict()

    preview = get_move_preview(game, 1, DiceResult(4))

    assert preview["to"] == 4
    assert preview["captures"] == 1
    assert preview["score_change"] == 8
    assert game.to_dict() == before


def test_replay_matches_step_by_step(game):
    actions = [
        play_turn(1, 1, DiceResult(3)),
        play_turn(2, 2, DiceResult(4)),
        play_turn(1, 2, DiceResult(6)),
        play_turn(1, 1, DiceResult(1)),
    ]

    state = game
    for action in actions:
        state, _ = apply_action(state, action)
    replayed, events = replay_from_actions(game, actions)

    assert replayed.to_dict() == state.to_dict()
    assert event_types(events).count("token_moved") == 4


@pytest.mark.parametrize("movement", [3.9, "3", True])
def test_non_integer_dice_rejected(game, movement):
    before = game.to_dict()
    action = Action(
        type="play_turn",
        player_id=1,
        payload={"token_id": 1, "dice": {"movement": movement, "direction": "Green"}},
    )

    with pytest.raises(InvalidDiceError):
        apply_action(game, action)
    assert not validate_action(game, action).valid
    assert game.to_dict() == before
