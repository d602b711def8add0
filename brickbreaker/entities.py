import math
from collections import namedtuple

import pygame

from brickbreaker import config


PowerupType = namedtuple("PowerupType", ["id", "icon", "color"])

POWERUP_TYPES = [
    PowerupType("multi", "⚪", (74, 222, 128)),
    PowerupType("expand", "⇔", (251, 191, 36)),
    PowerupType("slow", "⏱", (139, 92, 246)),
    PowerupType("life", "♥", (244, 63, 94)),
    PowerupType("full", "━", (6, 182, 212)),
    PowerupType("2x", "2×", (251, 146, 60)),
]
POWERUP_BY_ID = {p.id: p for p in POWERUP_TYPES}


def clamp(value, low, high):
    return max(low, min(high, value))


def round_half_up(value):
    return math.floor(value + 0.5)


class Paddle:
    def __init__(self):
        self.w = config.PADDLE_WIDTH
        self.h = config.PADDLE_HEIGHT
        self.y = config.PADDLE_Y
        self.x = config.WIDTH / 2 - self.w / 2
        self.speed = config.PADDLE_SPEED
        self.original_w = config.PADDLE_WIDTH

    @property
    def center_x(self):
        return self.x + self.w / 2

    def set_width(self, width):
        self.w = clamp(width, config.PADDLE_MIN_WIDTH, config.PADDLE_MAX_WIDTH)

    def clamp_position(self):
        self.x = clamp(self.x, config.PADDLE_RAIL, config.WIDTH - self.w - config.PADDLE_RAIL)

    @property
    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))


class Ball:
    def __init__(self, pos, vel=(0, 0), speed=config.BALL_SPEED, sticky=False):
        self.pos = pygame.Vector2(pos)
        self.vel = pygame.Vector2(vel)
        self.radius = config.BALL_RADIUS
        self.speed = speed
        self.sticky = sticky
        self.slow_timer = 0.0
        self.alive = True

    def follow(self, paddle):
        self.pos.update(paddle.center_x, paddle.y - self.radius - config.BALL_STICKY_GAP)


class Brick:
    def __init__(self, x, y, w, h, hp, points, indestructible=False,
                 moving=False, move_range=0.0, move_speed=0.0, direction=1):
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self.hp = hp
        self.max_hp = hp
        self.points = points
        self.indestructible = indestructible
        self.moving = moving
        self.base_x = x
        self.move_range = move_range
        self.move_speed = move_speed
        self.direction = direction
        self.destroyed = False

    @property
    def breakable(self):
        return not self.destroyed and not self.indestructible

    @property
    def center(self):
        return self.x + self.w / 2, self.y + self.h / 2

    @property
    def hp_ratio(self):
        if self.indestructible:
            return 1.0
        return clamp(self.hp / self.max_hp, 0.0, 1.0)

    @property
    def color(self):
        if self.indestructible:
            return config.COLOR_INDESTRUCTIBLE
        ratio = self.hp_ratio
        color = pygame.Color(0)
        color.hsla = ((220 + 140 * (1 - ratio)) % 360, 70 + 30 * ratio, 50 + 15 * ratio, 100)
        return tuple(color)[:3]

    def update(self, sim_time):
        # Cosmetic oscillation; collisions use whatever x this leaves behind.
        if self.moving and not self.destroyed:
            phase = sim_time * self.move_speed / 30
            self.x = self.base_x + self.direction * math.sin(phase) * self.move_range

    @property
    def rect(self):
        return pygame.Rect(int(self.x), int(self.y), int(self.w), int(self.h))


class Powerup:
    def __init__(self, kind, pos, vel, life=config.POWERUP_LIFETIME):
        self.kind = kind
        self.pos = pygame.Vector2(pos)
        self.vel = pygame.Vector2(vel)
        self.w = config.POWERUP_SIZE
        self.h = config.POWERUP_SIZE
        self.life = life
        self.alive = True

    def update(self, dt):
        self.pos += self.vel * dt
        self.life -= dt
        if self.life <= 0 or self.pos.y > config.HEIGHT + config.FLOOR_MARGIN:
            self.alive = False

    def caught_by(self, paddle):
        return (
            paddle.x <= self.pos.x <= paddle.x + paddle.w
            and self.pos.y + self.h / 2 >= paddle.y
            and self.pos.y - self.h / 2 <= paddle.y + paddle.h
        )

    @property
    def rect(self):
        return pygame.Rect(int(self.pos.x - self.w / 2), int(self.pos.y - self.h / 2), self.w, self.h)


class Particle:
    def __init__(self, pos, vel, life, size, color):
        self.pos = pygame.Vector2(pos)
        self.vel = pygame.Vector2(vel)
        self.life = life
        self.max_life = life
        self.size = size
        self.color = color

    @property
    def alive(self):
        return self.life > 0

    def update(self, dt):
        self.pos += self.vel * dt
        self.life -= dt


class PowerupState:
    def __init__(self):
        self.full_timer = 0.0
        self.score_multiplier = 1
        self.multiplier_timer = 0.0


class World:
    """Entity registry for the level in play."""

    def __init__(self):
        self.paddle = Paddle()
        self.balls = []
        self.bricks = []
        self.powerups = []
        self.particles = []

    def breakable_bricks(self):
        return [b for b in self.bricks if b.breakable]

    def visible_bricks(self):
        return [b for b in self.bricks if not b.destroyed]

    def compact(self):
        """Drop every entity that was marked dead during the tick."""
        self.balls = [b for b in self.balls if b.alive]
        self.powerups = [p for p in self.powerups if p.alive]
        self.particles = [p for p in self.particles if p.alive]
