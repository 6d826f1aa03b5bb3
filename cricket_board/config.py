"""
Single place for default game configuration.
Change DEFAULT_GAME_MODE / DEFAULT_SETTINGS to switch what a new game uses when the caller gives nothing.
"""
import os

# Game mode id as serialized ("T20", "50-50", "Test").
DEFAULT_GAME_MODE = "T20"

# Serialized (camelCase) shape, same as the "settings" block of a game state document.
DEFAULT_SETTINGS = {
    "allowAntiClockwise": False,
    "killRule": "jackpot",
    "stealLevelOnKill": False,
    "killBonusMultiplier": 1,
}

DEFAULT_PLAYER_COLORS = ["Blue", "Yellow", "Green", "Purple"]

# Seed for AI / dice randomness in the demo and CLI. Unset = nondeterministic.
_raw_seed = os.environ.get("CRICKET_AI_SEED")
AI_SEED = int(_raw_seed) if _raw_seed and _raw_seed.lstrip("-").isdigit() else None
