import logging
import math
import os

# --- Playfield ---
WIDTH, HEIGHT = 800, 600
WALL_INSET = 8
FLOOR_MARGIN = 50
TOTAL_LEVELS = 15

# --- Paddle ---
PADDLE_WIDTH = 160
PADDLE_HEIGHT = 16
PADDLE_Y = HEIGHT - 50
PADDLE_SPEED = 900
PADDLE_RAIL = 10
PADDLE_MIN_WIDTH = 40
PADDLE_MAX_WIDTH = WIDTH - 40
PADDLE_EXPAND_STEP = 70
PADDLE_EASING = 15
PADDLE_DEAD_ZONE = 2

# --- Ball ---
BALL_RADIUS = 10
BALL_SPEED = 480
BALL_SPAWN_OFFSET = 14
BALL_STICKY_GAP = 2
LAUNCH_ANGLE_MIN = -math.pi * 0.7
LAUNCH_ANGLE_MAX = -math.pi * 0.3
PADDLE_DEFLECTION = math.pi * 0.4
PADDLE_OFFSET_CLAMP = 0.95
SLOW_FACTOR = 0.6
SLOW_DURATION = 8

# --- Bricks ---
BRICK_COLS = 12
BRICK_MIN_ROWS, BRICK_MAX_ROWS = 5, 12
BRICK_PADDING = 6
BRICK_MARGIN_X = 32
BRICK_MARGIN_Y = 80
BRICK_HEIGHT = 24
BRICK_WIDTH = (WIDTH - 2 * BRICK_MARGIN_X - (BRICK_COLS - 1) * BRICK_PADDING) / BRICK_COLS
PATTERN_SKIP_LEVEL = 5
STRIPE_SKIP_LEVEL = 8
RANDOM_SKIP_LEVEL = 12
RANDOM_SKIP_CHANCE = 0.1
MOVING_LEVEL = 6
MOVING_CHANCE = 0.07
MOVING_RANGE = (50, 120)
MOVING_SPEED = (40, 80)
INDESTRUCTIBLE_LEVEL = 10
INDESTRUCTIBLE_CHANCE = 0.04
INDESTRUCTIBLE_HP = math.inf
COLOR_INDESTRUCTIBLE = (68, 68, 68)

# --- Powerups ---
POWERUP_CHANCE = 0.22
POWERUP_SIZE = 32
POWERUP_DRIFT = 50
POWERUP_FALL_SPEED = 140
POWERUP_LIFETIME = 8
FULL_WIDTH_DURATION = 8
DOUBLE_SCORE_DURATION = 10
MULTI_BALL_COUNT = 2

# --- Scoring ---
INITIAL_LIVES = 3
MAX_LIVES = 9
COMBO_WINDOW = 1.5
COMBO_MILESTONE = 5
COMBO_BONUS = 50
HIT_POINTS = 10
LEVEL_BONUS_BASE = 500
LEVEL_BONUS_STEP = 100

# --- Effects ---
BRICK_PARTICLES = 10
POWERUP_PARTICLES = 12
PARTICLE_LIFE = 0.5
PARTICLE_SPEED = (100, 200)
PARTICLE_SIZE = (3, 7)
SHAKE_ON_COMBO = 0.3
SHAKE_DECAY = 8

# --- Timing ---
MAX_STEP = 0.033
FPS = 60
ENV_FPS = 30
MAX_STEPS = 20000

LOG_LEVEL = os.environ.get("BRICKBREAKER_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level=None):
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
