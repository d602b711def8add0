import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from brickbreaker import config
from brickbreaker.entities import POWERUP_BY_ID, POWERUP_TYPES, Powerup
from brickbreaker.render import Renderer
from tests.support import make_controller


class TestPowerupLabel(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()

    def test_drawable_icon_is_used(self):
        self.assertEqual(self.renderer.powerup_label({"icon": "2x", "type": "2x"}), "2x")

    def test_missing_icon_falls_back_to_type(self):
        self.assertEqual(self.renderer.powerup_label({"icon": "", "type": "multi"}), "multi")

    def test_glyph_outside_font_falls_back_to_type(self):
        # private use area, never covered by the bundled font
        self.assertEqual(self.renderer.powerup_label({"icon": "\ue000", "type": "slow"}), "slow")

    def test_every_powerup_gets_a_label(self):
        for kind in POWERUP_TYPES:
            label = self.renderer.powerup_label({"icon": kind.icon, "type": kind.id})
            self.assertIn(label, (kind.icon, kind.id))


class TestDraw(unittest.TestCase):
    def test_draws_snapshot_with_falling_powerups(self):
        controller = make_controller()
        world = controller.session.world
        for i, kind in enumerate(POWERUP_TYPES):
            world.powerups.append(Powerup(kind, (100 + 60 * i, 300), (0, config.POWERUP_FALL_SPEED)))
        renderer = Renderer()
        surface = renderer.draw(controller.snapshot())
        self.assertIsInstance(surface, pygame.Surface)
        self.assertEqual(surface.get_size(), (config.WIDTH, config.HEIGHT))

    def test_draws_game_over_overlay(self):
        controller = make_controller()
        controller.session.game_over = True
        controller.session.paused = True
        world = controller.session.world
        world.powerups.append(Powerup(POWERUP_BY_ID["life"], (200, 200), (0, 0)))
        surface = Renderer().draw(controller.snapshot())
        self.assertEqual(surface.get_size(), (config.WIDTH, config.HEIGHT))


if __name__ == "__main__":
    unittest.main()
