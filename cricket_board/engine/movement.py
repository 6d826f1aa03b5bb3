"""
Movement calculations around the circular track.
"""

from cricket_board.engine import BOARD_SIZE
from cricket_board.engine.definitions import Direction
from cricket_board.engine.state import GameSettings


def _step(direction: Direction) -> int:
    return 1 if direction == Direction.CLOCKWISE else -1


def _walk(start: int, step: int, count: int) -> list[int]:
    path = []
    position = start
    for _ in range(count):
        position = (position + step) % BOARD_SIZE
        path.append(position)
    return path


def compute_movement_path(start: int, movement: int, direction: Direction = Direction.CLOCKWISE) -> list[int]:
    """
    Squares visited by a move, in order, excluding the start square.
    The last element is the destination. Wraps at the ring boundary.

    Example: compute_movement_path(46, 3) -> [47, 0, 1]
    """
    return _walk(start, _step(direction), movement)


def clockwise_distance(from_index: int, to_index: int) -> int:
    return (to_index - from_index) % BOARD_SIZE


def anti_clockwise_distance(from_index: int, to_index: int) -> int:
    return (from_index - to_index) % BOARD_SIZE


def compute_return_path(from_index: int, home_base_index: int, settings: GameSettings) -> list[int]:
    """
    Route a token takes back to its base after a capture or a wicket (animation only).

    Rules:
    - Anti-clockwise play disabled: always rewind anti-clockwise, whatever the distance.
    - Anti-clockwise play enabled: shorter direction, ties go clockwise.
    - Empty list when the token is already home.
    """
    if not settings.allow_anti_clockwise:
        return _walk(from_index, -1, anti_clockwise_distance(from_index, home_base_index))

    forward = clockwise_distance(from_index, home_base_index)
    backward = anti_clockwise_distance(from_index, home_base_index)
    if forward <= backward:
        return _walk(from_index, 1, forward)
    return _walk(from_index, -1, backward)
