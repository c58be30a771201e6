"""
Gameplay tuning shared by the core, the window and the environment.
Distances are field units, speeds are units per tick, times are milliseconds.
"""

# Field
FIELD_WIDTH = 600
FIELD_HEIGHT = 400

# Player
PLAYER_SIZE = 10
PLAYER_SPEED = 4.0
PLAYER_SPAWN_BOTTOM_OFFSET = 30
AUTOFIRE_INTERVAL = 100
PLAYER_BULLET_SPEED = 7.0
PLAYER_BULLET_RADIUS = 3.0

# Boss
BOSS_WIDTH = 40
BOSS_HEIGHT = 20
BOSS_SPAWN_Y = 40
BOSS_TURN_INTERVAL = 500
BOSS_BULLET_RADIUS = 5.0

# Difficulty
BASE_HP = 3
HARD_TIER_EVERY = 5
ORDINARY_SHOT_INTERVAL = 1500
MIN_SHOT_INTERVAL = 800
SHOT_INTERVAL_STEP = 50
ORDINARY_BULLET_COUNT = 12
MAX_ORDINARY_BULLET_COUNT = 20
MAX_HARD_BULLET_COUNT = 24
ORDINARY_BULLET_SPEED = 3.0
HARD_BULLET_SPEED = 4.0
ORDINARY_BOSS_SPEED = 2.0
HARD_BOSS_SPEED = 3.0

# Ambient "falling petals" barrage
AMBIENT_BULLET_COUNT = 12
AMBIENT_BULLET_SPEED = 2.0

# Colors
BG_COLOR = (18, 18, 22)
PLAYER_COLOR = (70, 110, 255)
PLAYER_BULLET_COLOR = (180, 180, 220)
BOSS_COLOR = (220, 80, 80)
BOSS_BULLET_COLOR = (255, 170, 200)
AMBIENT_BULLET_COLOR = (255, 192, 203)
HUD_COLOR = (220, 220, 220)
RAINBOW = [
    (255, 0, 0),
    (255, 127, 0),
    (255, 255, 0),
    (0, 255, 0),
    (0, 0, 255),
    (75, 0, 130),
    (148, 0, 211),
]
