"""
Game configuration and constants.
"""

# Patterns
PATTERN_LENGTH = 3
HEADS_SYMBOL = "H"
TAILS_SYMBOL = "T"
DEFAULT_PLAYER_PATTERN = "HHH"

# Simulation speed
SLOW_UPDATE_INTERVAL_MS = 500  # 500 ms between tosses
FAST_UPDATE_INTERVAL_MS = 100  # 100 ms between batches

SLOW_TOSS_COUNT = 1
FAST_TOSS_COUNT = 100

# Tick cadence of the page fragment; must stay below the fastest interval
FRAME_INTERVAL_S = 0.05

HISTORY_UNAVAILABLE = "History not available."

# Contestant names
PLAYER = "player"
COMPUTER = "computer"

# Colors for plotting
COLOR_MAP = {
    "Player": "#377eb8",    # blue
    "Computer": "#e41a1c",  # red
}

# UI Settings
MONTE_CARLO_RACES = 2000
