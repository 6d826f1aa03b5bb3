import pytest

from cricket_board.engine.definitions import GameMode, PlayerColor
from cricket_board.engine.state import GameSettings
from cricket_board.engine.utils import initialize_game_state


@pytest.fixture
def make_game():
    """Factory for fresh games; keyword arguments go to GameSettings."""
    def _make(mode=GameMode.T20, colors=(PlayerColor.BLUE, PlayerColor.YELLOW), **settings):
        return initialize_game_state(mode, colors, GameSettings(**settings))
    return _make


@pytest.fixture
def game(make_game):
    """Two-player T20 game: Blue (id 1, base 0) to move, Yellow (id 2, base 12)."""
    return make_game()


@pytest.fixture
def place():
    """Put a token on a square (and optionally set its level) directly."""
    def _place(state, player_id, token_id, position, level=1):
        token = state.get_player(player_id).get_token(token_id)
        token.position_index = position
        token.level = level
        return token
    return _place


@pytest.fixture
def all_out():
    """Mark a player all out with a given score."""
    def _all_out(state, player_id, score=0):
        player = state.get_player(player_id)
        player.wickets = 10
        player.is_all_out = True
        player.score = score
        return player
    return _all_out
