"""
Cricket Board Game Rules Engine
Deterministic game-state machine without web framework, database, or UI
"""

BOARD_SIZE = 48
DICE_SIDES = 6
MAX_WICKETS = 10
TOKENS_PER_PLAYER = 2
MIN_PLAYERS = 2
MAX_PLAYERS = 4
