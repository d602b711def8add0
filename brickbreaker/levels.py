"""Procedural brick layouts.

Layout shape is fixed by the level number (row count, skip patterns, hit
points); only the optional rules (random gaps, indestructible and moving
bricks) draw from the random source, so a seeded generator reproduces a
level exactly.
"""
import math

from brickbreaker import config
from brickbreaker.entities import Brick, clamp, round_half_up


def row_count(level_index):
    lvl = level_index + 1
    return clamp(4 + math.floor(lvl / 1.5), config.BRICK_MIN_ROWS, config.BRICK_MAX_ROWS)


def brick_hp(level_index, row):
    lvl = level_index + 1
    return 1 + lvl // 4 + row // 5


def brick_points(hp, level_index):
    lvl = level_index + 1
    return round_half_up(50 * hp * (1 + lvl / 8))


def _pattern_skip(lvl, row, col):
    if lvl >= config.PATTERN_SKIP_LEVEL and (row + col) % 8 == 0:
        return True
    if lvl >= config.STRIPE_SKIP_LEVEL and col % 2 == 0 and row % 3 == 0:
        return True
    return False


def generate_level(level_index, rng):
    """Return the bricks for ``level_index`` (0-based), row-major."""
    if level_index < 0:
        raise ValueError(f"level index must be non-negative, got {level_index}")

    lvl = level_index + 1
    bricks = []

    for row in range(row_count(level_index)):
        for col in range(config.BRICK_COLS):
            if _pattern_skip(lvl, row, col):
                continue
            if lvl >= config.RANDOM_SKIP_LEVEL and rng.random() < config.RANDOM_SKIP_CHANCE:
                continue

            x = config.BRICK_MARGIN_X + col * (config.BRICK_WIDTH + config.BRICK_PADDING)
            y = config.BRICK_MARGIN_Y + row * (config.BRICK_HEIGHT + config.BRICK_PADDING)

            hp = brick_hp(level_index, row)
            indestructible = lvl >= config.INDESTRUCTIBLE_LEVEL and rng.random() < config.INDESTRUCTIBLE_CHANCE
            if indestructible:
                hp = config.INDESTRUCTIBLE_HP

            moving = lvl >= config.MOVING_LEVEL and rng.random() < config.MOVING_CHANCE
            move_range = rng.uniform(*config.MOVING_RANGE) if moving else 0.0
            move_speed = rng.uniform(*config.MOVING_SPEED) if moving else 0.0

            bricks.append(Brick(
                x, y, config.BRICK_WIDTH, config.BRICK_HEIGHT,
                hp=hp,
                points=0 if indestructible else brick_points(hp, level_index),
                indestructible=indestructible,
                moving=moving,
                move_range=move_range,
                move_speed=move_speed,
                direction=1 if rng.random() < 0.5 else -1,
            ))

    return bricks
