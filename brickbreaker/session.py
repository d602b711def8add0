from collections import namedtuple

from brickbreaker import config
from brickbreaker.entities import PowerupState, World


Event = namedtuple("Event", ["kind", "params"])

# Cue names reported to the presentation layer.
LAUNCH = "launch"
WALL_BOUNCE = "wall_bounce"
PADDLE_HIT = "paddle_hit"
BRICK_HIT = "brick_hit"
BRICK_DESTROYED = "brick_destroyed"
POWERUP_CAUGHT = "powerup_caught"
COMBO = "combo"
LIFE_LOST = "life_lost"
LEVEL_CLEAR = "level_clear"
GAME_OVER = "game_over"
RESTART = "restart"


class Session:
    """All mutable state of one play-through, from level 0 to game over."""

    def __init__(self):
        self.world = World()
        self.powerups = PowerupState()
        self.score = 0
        self.lives = config.INITIAL_LIVES
        self.level = 0
        self.combo = 0
        self.combo_timer = 0.0
        self.paused = False
        self.game_over = False
        self.won = False
        self.awaiting_launch = True
        self.shake = 0.0
        self.sim_time = 0.0
        self.events = []

    def emit(self, kind, **params):
        self.events.append(Event(kind, params))

    def drain_events(self):
        events, self.events = self.events, []
        return events
