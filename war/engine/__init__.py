"""
WAR - structured territorial conquest engine.
Core combat resolution and mission evaluation, without UI or persistence.
"""

DICE_SIDES = 6

# The world roster is fixed; a setup must provide exactly this many territories.
WORLD_SIZE = 5
