"""
Static definitions for the board and player colours.
Board data lives in data/board.json: one entry per square (index, grid coords, type, run value,
owner colour for home bases) plus the colour table (home base per colour).
Loaded once at import; every game shares the same read-only tuple.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from cricket_board.engine import BOARD_SIZE
from cricket_board.engine.errors import ConfigurationError

DATA_DIR = Path(__file__).parent.parent / "data"
BOARD_FILE = DATA_DIR / "board.json"


class SquareType(str, Enum):
    SAFE_ZONE = "SafeZone"
    RUNS = "Runs"
    DOT_BALL = "DotBall"
    WICKET = "Wicket"
    EXTRA = "Extra"


class PlayerColor(str, Enum):
    BLUE = "Blue"
    YELLOW = "Yellow"
    GREEN = "Green"
    PURPLE = "Purple"


class GameMode(str, Enum):
    T20 = "T20"
    FIFTY_FIFTY = "50-50"
    TEST = "Test"


class KillRule(str, Enum):
    JACKPOT = "jackpot"
    FORTRESS = "fortress"


class Direction(str, Enum):
    # Wire values are the dice-face colours.
    CLOCKWISE = "Green"
    ANTI_CLOCKWISE = "Red"


# Turns per player for each mode; None = unlimited
INITIAL_TURNS = {
    GameMode.T20: 20,
    GameMode.FIFTY_FIFTY: 50,
    GameMode.TEST: None,
}


def parse_enum(enum_cls: type[Enum], value, what: str):
    """Coerce value into enum_cls, raising ConfigurationError for unknown values."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ConfigurationError(f"Unknown {what}: {value!r}") from None


@dataclass(frozen=True)
class Coords:
    row: int
    col: int


@dataclass(frozen=True)
class BoardSquare:
    """One square of the circular track. Immutable."""
    index: int
    coords: Coords
    type: SquareType
    value: int  # runs magnitude; 0 unless type is Runs
    owner_color: Optional[PlayerColor] = None  # set for home-base safe zones


@dataclass(frozen=True)
class ColorDefinition:
    """Defines the fixed properties of a player colour."""
    color: PlayerColor
    display_name: str
    home_base_index: int


def _parse_square(raw: dict) -> BoardSquare:
    owner = raw.get("owner_color")
    return BoardSquare(
        index=int(raw["index"]),
        coords=Coords(row=int(raw["row"]), col=int(raw["col"])),
        type=parse_enum(SquareType, raw["type"], "square type"),
        value=int(raw.get("value", 0)),
        owner_color=parse_enum(PlayerColor, owner, "colour") if owner is not None else None,
    )


def load_board_layout(path: Path | str | None = None) -> tuple[
    tuple[BoardSquare, ...],
    dict[PlayerColor, ColorDefinition],
]:
    """
    Load the board squares and colour table.

    Validates that there are exactly BOARD_SIZE squares indexed 0..BOARD_SIZE-1 in order
    and that every colour's home base is a safe zone owned by that colour.

    Returns:
        (squares, color_defs)
    """
    path = Path(path) if path is not None else BOARD_FILE
    with open(path, "r") as f:
        data = json.load(f)

    squares = tuple(_parse_square(s) for s in data.get("squares", []))
    if len(squares) != BOARD_SIZE:
        raise ConfigurationError(f"Board must have {BOARD_SIZE} squares, found {len(squares)}")
    for i, square in enumerate(squares):
        if square.index != i:
            raise ConfigurationError(f"Square at position {i} has index {square.index}")

    color_defs: dict[PlayerColor, ColorDefinition] = {}
    for raw in data.get("colors", []):
        color = parse_enum(PlayerColor, raw["color"], "colour")
        home = int(raw["home_base_index"])
        base = squares[home]
        if base.type != SquareType.SAFE_ZONE or base.owner_color != color:
            raise ConfigurationError(f"Home base {home} of {color.value} is not its safe zone")
        color_defs[color] = ColorDefinition(
            color=color,
            display_name=str(raw.get("display_name") or color.value),
            home_base_index=home,
        )
    return squares, color_defs


BOARD_LAYOUT, COLOR_DEFINITIONS = load_board_layout()


def get_square(index: int) -> BoardSquare:
    if type(index) is not int or not 0 <= index < BOARD_SIZE:
        raise ConfigurationError(f"Square index must be 0-{BOARD_SIZE - 1}, got {index!r}")
    return BOARD_LAYOUT[index]
