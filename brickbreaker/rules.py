import logging
import math

import numpy as np

from brickbreaker import config
from brickbreaker.entities import POWERUP_BY_ID, POWERUP_TYPES, Ball, Particle, Powerup, clamp, round_half_up
from brickbreaker.levels import generate_level
from brickbreaker.physics import move_paddle, step_balls
from brickbreaker import session as cues
from brickbreaker.session import Session

logger = logging.getLogger(__name__)


class GameController:
    """Game rules and level progression for one brick breaker session.

    Owns the ``Session`` aggregate and the random source. Adapters feed input
    through ``set_paddle_target``/``set_movement``/``launch``/``toggle_pause``/
    ``restart`` and read back ``snapshot()`` once per tick.
    """

    def __init__(self, rng=None, seed=None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.pointer_x = None
        self.move_left = False
        self.move_right = False
        self.session = None
        self._start_session()

    def _start_session(self):
        self.session = Session()
        self.load_level(0)

    # --- Input ---

    def set_paddle_target(self, x):
        self.pointer_x = clamp(x, 0, config.WIDTH)

    def set_movement(self, left=False, right=False):
        self.move_left = bool(left)
        self.move_right = bool(right)

    def launch(self):
        s = self.session
        if not s.awaiting_launch or s.game_over or s.paused:
            return
        s.awaiting_launch = False
        for ball in s.world.balls:
            if ball.sticky:
                ball.sticky = False
                angle = self.rng.uniform(config.LAUNCH_ANGLE_MIN, config.LAUNCH_ANGLE_MAX)
                ball.vel.update(math.cos(angle) * ball.speed, math.sin(angle) * ball.speed)
        s.emit(cues.LAUNCH)

    def toggle_pause(self):
        if self.session.game_over:
            return
        self.session.paused = not self.session.paused
        logger.debug("Paused" if self.session.paused else "Resumed")

    def restart(self, rng=None, seed=None):
        if rng is not None:
            self.rng = rng
        elif seed is not None:
            self.rng = np.random.default_rng(seed)
        self._start_session()
        self.session.emit(cues.RESTART)
        logger.info("Session restarted")

    # --- Level flow ---

    def load_level(self, index):
        assert 0 <= index < config.TOTAL_LEVELS, f"level index {index} out of range"
        index = clamp(index, 0, config.TOTAL_LEVELS - 1)

        s = self.session
        s.level = index
        s.world.bricks = generate_level(index, self.rng)
        s.world.balls = []
        self.spawn_ball()
        s.combo = 0
        s.combo_timer = 0.0
        logger.info("Loaded level %d/%d with %d bricks", index + 1, config.TOTAL_LEVELS, len(s.world.bricks))

    def spawn_ball(self):
        paddle = self.session.world.paddle
        ball = Ball((paddle.center_x, paddle.y - config.BALL_SPAWN_OFFSET), sticky=True)
        self.session.world.balls.append(ball)
        self.session.awaiting_launch = True
        return ball

    # --- Simulation ---

    def update(self, dt):
        s = self.session
        if s.paused or s.game_over:
            return

        self._update_timers(dt)
        move_paddle(s.world.paddle, dt, self.pointer_x, self.move_left, self.move_right)

        s.sim_time += dt
        step_balls(s, dt, self.register_hit)
        for brick in s.world.bricks:
            brick.update(s.sim_time)

        self._update_powerups(dt)
        s.world.compact()

        self._check_ball_loss()
        if not s.game_over:
            self._check_level_clear()

        for particle in s.world.particles:
            particle.update(dt)
        s.world.compact()

    def _update_timers(self, dt):
        s = self.session
        state = s.powerups
        if state.full_timer > 0:
            state.full_timer -= dt
            if state.full_timer <= 0:
                s.world.paddle.set_width(s.world.paddle.original_w)
        if state.multiplier_timer > 0:
            state.multiplier_timer -= dt
            if state.multiplier_timer <= 0:
                state.score_multiplier = 1

        if s.combo_timer > 0:
            s.combo_timer -= dt
            if s.combo_timer <= 0:
                s.combo = 0

        if s.shake > 0:
            s.shake = max(0.0, s.shake - dt * config.SHAKE_DECAY)

    def register_hit(self, brick):
        """Score a ball hit on ``brick``; its hp has already been decremented."""
        s = self.session
        if brick.hp <= 0:
            self._destroy_brick(brick)
        else:
            s.score += round_half_up(config.HIT_POINTS * s.powerups.score_multiplier)
            s.emit(cues.BRICK_HIT, hp=brick.hp)

    def _destroy_brick(self, brick):
        s = self.session
        brick.destroyed = True
        points = brick.points * s.powerups.score_multiplier
        s.score += points

        s.combo += 1
        s.combo_timer = config.COMBO_WINDOW
        cx, cy = brick.center
        if s.combo % config.COMBO_MILESTONE == 0:
            bonus = s.combo * config.COMBO_BONUS
            s.score += bonus
            s.shake = config.SHAKE_ON_COMBO
            s.emit(cues.COMBO, combo=s.combo, bonus=bonus, x=cx, y=cy)

        self.spawn_powerup(cx, cy)
        self.create_particles(cx, cy, brick.color, config.BRICK_PARTICLES)
        s.emit(cues.BRICK_DESTROYED, combo=s.combo, points=points)

    def _check_ball_loss(self):
        s = self.session
        if s.world.balls or s.awaiting_launch:
            return
        s.lives = max(0, s.lives - 1)
        s.combo = 0
        s.emit(cues.LIFE_LOST, lives=s.lives)
        logger.debug("Ball lost, %d lives left", s.lives)

        if s.lives <= 0:
            self._end_game(won=False)
        else:
            self.spawn_ball()

    def _check_level_clear(self):
        s = self.session
        if s.world.breakable_bricks():
            return
        bonus = config.LEVEL_BONUS_BASE + s.level * config.LEVEL_BONUS_STEP
        s.score += bonus
        s.emit(cues.LEVEL_CLEAR, level=s.level, bonus=bonus)
        logger.info("Level %d cleared, bonus %d", s.level + 1, bonus)

        if s.level < config.TOTAL_LEVELS - 1:
            self.load_level(s.level + 1)
        else:
            self._end_game(won=True)

    def _end_game(self, won):
        s = self.session
        s.game_over = True
        s.paused = True
        s.won = won
        s.emit(cues.GAME_OVER, won=won, score=s.score)
        logger.info("Game over (%s), final score %d", "win" if won else "loss", s.score)

    # --- Powerups ---

    def spawn_powerup(self, x, y):
        if self.rng.random() > config.POWERUP_CHANCE:
            return None
        kind = POWERUP_TYPES[int(self.rng.integers(len(POWERUP_TYPES)))]
        vel = (self.rng.uniform(-config.POWERUP_DRIFT, config.POWERUP_DRIFT), config.POWERUP_FALL_SPEED)
        powerup = Powerup(kind, (x, y), vel)
        self.session.world.powerups.append(powerup)
        return powerup

    def _update_powerups(self, dt):
        paddle = self.session.world.paddle
        for powerup in self.session.world.powerups:
            powerup.update(dt)
            if not powerup.alive:
                continue
            if powerup.caught_by(paddle):
                powerup.alive = False
                self.apply_powerup(powerup.kind.id, powerup.pos)

    def apply_powerup(self, kind_id, pos=None):
        kind = POWERUP_BY_ID.get(kind_id)
        if kind is None:
            raise ValueError(f"unknown powerup type: {kind_id!r}")

        s = self.session
        world = s.world
        if kind.id == "multi":
            live = [b for b in world.balls if b.alive]
            if live:
                base = live[0]
                for _ in range(config.MULTI_BALL_COUNT):
                    vel = (
                        self.rng.uniform(-1, 1) * base.speed,
                        -abs(self.rng.uniform(0.7, 1)) * base.speed,
                    )
                    world.balls.append(Ball(base.pos, vel, speed=base.speed))
        elif kind.id == "expand":
            world.paddle.set_width(world.paddle.w + config.PADDLE_EXPAND_STEP)
        elif kind.id == "slow":
            for ball in world.balls:
                ball.slow_timer = max(ball.slow_timer, config.SLOW_DURATION)
        elif kind.id == "life":
            s.lives = min(config.MAX_LIVES, s.lives + 1)
        elif kind.id == "full":
            world.paddle.set_width(config.PADDLE_MAX_WIDTH)
            s.powerups.full_timer = config.FULL_WIDTH_DURATION
        elif kind.id == "2x":
            s.powerups.score_multiplier = 2
            s.powerups.multiplier_timer = config.DOUBLE_SCORE_DURATION

        s.emit(cues.POWERUP_CAUGHT, type=kind.id)
        logger.debug("Applied powerup %s", kind.id)
        if pos is not None:
            self.create_particles(pos[0], pos[1], kind.color, config.POWERUP_PARTICLES)

    # --- Effects ---

    def create_particles(self, x, y, color, count):
        for i in range(count):
            angle = 2 * math.pi * i / count
            speed = self.rng.uniform(*config.PARTICLE_SPEED)
            self.session.world.particles.append(Particle(
                (x, y),
                (math.cos(angle) * speed, math.sin(angle) * speed),
                config.PARTICLE_LIFE,
                self.rng.uniform(*config.PARTICLE_SIZE),
                color,
            ))

    # --- Presentation ---

    def snapshot(self):
        """Read-only view of the tick for renderers; drains pending events."""
        s = self.session
        world = s.world
        paddle = world.paddle
        return {
            "paddle": (paddle.x, paddle.y, paddle.w, paddle.h),
            "balls": [{"x": b.pos.x, "y": b.pos.y, "r": b.radius} for b in world.balls],
            "bricks": [
                {
                    "rect": (b.x, b.y, b.w, b.h),
                    "hp_ratio": b.hp_ratio,
                    "max_hp": b.max_hp,
                    "indestructible": b.indestructible,
                    "color": b.color,
                }
                for b in world.visible_bricks()
            ],
            "powerups": [
                {
                    "rect": (p.pos.x - p.w / 2, p.pos.y - p.h / 2, p.w, p.h),
                    "type": p.kind.id,
                    "icon": p.kind.icon,
                    "color": p.kind.color,
                }
                for p in world.powerups
            ],
            "particles": [
                {"x": p.pos.x, "y": p.pos.y, "size": p.size, "color": p.color, "life": p.life / p.max_life}
                for p in world.particles
            ],
            "hud": self.hud(),
            "events": s.drain_events(),
        }

    def hud(self):
        s = self.session
        return {
            "score": s.score,
            "level": s.level,
            "total_levels": config.TOTAL_LEVELS,
            "lives": s.lives,
            "combo": s.combo,
            "paused": s.paused,
            "game_over": s.game_over,
            "won": s.won,
            "awaiting_launch": s.awaiting_launch,
            "score_multiplier": s.powerups.score_multiplier,
            "shake": s.shake,
        }
