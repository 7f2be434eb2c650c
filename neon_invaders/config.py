"""
Configuration constants for Neon Invaders.

All gameplay timing is expressed in seconds and all speeds in pixels per
second, so the simulation is independent of the display refresh rate.
"""

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
SCREEN_WIDTH: int = 800
SCREEN_HEIGHT: int = 600
UPDATE_RATE: int = 60  # Hz – display refresh requested from pygame
SMALL_SCREEN_WIDTH: int = 600  # below this width the small size class applies

# ---------------------------------------------------------------------------
# Size classes (player w, player h, enemy size, enemy padding)
# ---------------------------------------------------------------------------
PLAYER_WIDTH: int = 40
PLAYER_HEIGHT: int = 30
ENEMY_SIZE: int = 30
ENEMY_PADDING: int = 20

SMALL_PLAYER_WIDTH: int = 30
SMALL_PLAYER_HEIGHT: int = 22
SMALL_ENEMY_SIZE: int = 20
SMALL_ENEMY_PADDING: int = 10

PLAYER_BOTTOM_MARGIN: int = 20  # gap between ship and arena floor

# ---------------------------------------------------------------------------
# Frame clock
# ---------------------------------------------------------------------------
MAX_FRAME_DT: float = 0.1  # seconds; longer gaps are clamped

# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
PLAYER_SPEED: float = 500.0
PLAYER_FIRE_COOLDOWN: float = 0.4

# ---------------------------------------------------------------------------
# Projectiles
# ---------------------------------------------------------------------------
PROJECTILE_WIDTH: int = 4
PROJECTILE_HEIGHT: int = 15
PROJECTILE_SPEED: float = 600.0

# ---------------------------------------------------------------------------
# Enemy formation
# ---------------------------------------------------------------------------
ENEMY_ROWS: int = 5
ENEMY_MAX_COLUMNS: int = 8
ENEMY_TYPES: int = 3          # squid, crab, octopus (visual only)
GRID_SIDE_MARGIN: int = 40    # total horizontal slack reserved around the grid
GRID_TOP: int = 50

ENEMY_BASE_SPEED: float = 50.0
ENEMY_DROP_DISTANCE: float = 20.0
ENEMY_SPEED_STEP: float = 5.0       # added on every wall bounce
ENEMY_FIRE_CHANCE: float = 0.0005   # per enemy, per frame
REFERENCE_FPS: int = 60             # frame rate the fire chance was tuned at

FIRE_RATE_PER_FRAME: str = "per-frame"
FIRE_RATE_PER_SECOND: str = "per-second"
FIRE_RATE_MODES: tuple[str, str] = (FIRE_RATE_PER_FRAME, FIRE_RATE_PER_SECOND)

# ---------------------------------------------------------------------------
# Waves
# ---------------------------------------------------------------------------
WAVE_RESPAWN_DELAY: float = 1.0
WAVE_SPEED_BONUS: float = 50.0  # base formation speed gained per cleared wave

# ---------------------------------------------------------------------------
# Particles
# ---------------------------------------------------------------------------
PARTICLE_BURST: int = 10
PARTICLE_SPREAD: float = 200.0  # velocity range per axis, centred on zero
PARTICLE_DECAY: float = 2.0     # life lost per second (~0.5 s lifespan)
PARTICLE_SIZE: int = 3

# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
POINTS_PER_ENEMY: int = 100

# ---------------------------------------------------------------------------
# Colours (RGB)
# ---------------------------------------------------------------------------
COLOR_PLAYER: tuple[int, int, int] = (0, 243, 255)
COLOR_ENEMY: tuple[int, int, int] = (255, 0, 255)
COLOR_SHOT_UP: tuple[int, int, int] = COLOR_PLAYER
COLOR_SHOT_DOWN: tuple[int, int, int] = COLOR_ENEMY
COLOR_BACKGROUND: tuple[int, int, int] = (5, 5, 16)
COLOR_TEXT: tuple[int, int, int] = (255, 255, 255)
TRAIL_ALPHA: int = 77  # ~0.3 opacity background wash per frame

# ---------------------------------------------------------------------------
# Audio synthesis
# ---------------------------------------------------------------------------
SAMPLE_RATE: int = 22050
MASTER_GAIN: float = 0.3
