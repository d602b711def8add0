import os

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete
import numpy as np
import pygame

from brickbreaker import config
from brickbreaker.clock import LAUNCH, PAUSE, SimulationClock
from brickbreaker.render import Renderer
from brickbreaker.rules import GameController

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": config.ENV_FPS}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: ← and → to move the paddle. Space to launch the ball. Shift to pause."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "Brick Breaker Pro: clear 15 procedurally built levels, chain combos and catch powerups before your lives run out."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    REWARD_WIN = 100.0
    REWARD_LOSE = -50.0

    def __init__(self, render_mode="rgb_array"):
        super().__init__()
        self.render_mode = render_mode

        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(config.HEIGHT, config.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        pygame.init()
        self.renderer = Renderer()

        # State variables are initialized in reset()
        self.controller = None
        self.clock = None
        self.snapshot = None
        self.steps = 0
        self.prev_space_held = False
        self.prev_shift_held = False

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        if self.controller is None:
            self.controller = GameController(rng=self.np_random)
            self.clock = SimulationClock(self.controller)
        else:
            self.controller.restart(rng=self.np_random)

        self.steps = 0
        self.prev_space_held = False
        self.prev_shift_held = False
        self.snapshot = self.clock.advance(0.0)

        return self._get_observation(), self._get_info()

    def step(self, action):
        movement = action[0]
        space_held = action[1] == 1
        shift_held = action[2] == 1

        inputs = self.clock.inputs
        inputs.move_left = movement == 3
        inputs.move_right = movement == 4
        if space_held and not self.prev_space_held:
            inputs.press(LAUNCH)
        if shift_held and not self.prev_shift_held:
            inputs.press(PAUSE)
        self.prev_space_held = space_held
        self.prev_shift_held = shift_held

        score_before = self.controller.session.score
        was_over = self.controller.session.game_over
        self.snapshot = self.clock.advance(1.0 / config.ENV_FPS)
        self.steps += 1

        hud = self.snapshot["hud"]
        reward = float(hud["score"] - score_before)
        terminated = hud["game_over"]
        if terminated and not was_over:
            reward += self.REWARD_WIN if hud["won"] else self.REWARD_LOSE
        truncated = self.steps >= config.MAX_STEPS and not terminated

        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info()
        )

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        surface = self.renderer.draw(self.snapshot)
        arr = pygame.surfarray.array3d(surface)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        info = dict(self.snapshot["hud"])
        info["steps"] = self.steps
        info["bricks_left"] = len(self.controller.session.world.breakable_bricks())
        info["events"] = [e.kind for e in self.snapshot["events"]]
        return info

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        print("Running implementation validation...")
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        obs, info = self.reset()
        assert obs.shape == (config.HEIGHT, config.WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)

        obs, reward, term, trunc, info = self.step(self.action_space.sample())
        assert obs.shape == (config.HEIGHT, config.WIDTH, 3)
        assert isinstance(reward, float)
        assert isinstance(term, bool)
        assert isinstance(info, dict)

        print("✓ Implementation validated successfully")
