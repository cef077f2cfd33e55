"""
Single place for default game/setup configuration.
Change DEFAULT_SETUP_ID to switch which setup is used when creating a new game (when no setup_id is provided).
"""
# Setup id from war/data/setups/<id>/ (e.g. "classic"). This is the default for new games.
DEFAULT_SETUP_ID = "classic"

# Faction the human player controls when none is requested.
DEFAULT_PLAYER_FACTION = "Blue"

# Mission parameters. A setup manifest may override them under "missions".
ELIMINATE_TARGET_FACTION = "Green"
CONQUER_THRESHOLD = 3

# Most games the API keeps in memory. Creating one more evicts finished games first, then the oldest.
GAME_LIMIT = 100
