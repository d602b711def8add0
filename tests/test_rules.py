import unittest

import numpy as np

from brickbreaker import config
from brickbreaker import session as cues
from brickbreaker.entities import POWERUP_BY_ID, Powerup
from tests.support import ScriptedRng, event_kinds, make_brick, make_controller, smash


class TestLaunchAndPause(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller()
        self.session = self.controller.session

    def test_new_session_waits_with_one_sticky_ball(self):
        self.assertTrue(self.session.awaiting_launch)
        self.assertEqual(len(self.session.world.balls), 1)
        self.assertTrue(self.session.world.balls[0].sticky)
        self.assertEqual(self.session.lives, 3)
        self.assertEqual(self.session.level, 0)

    def test_launch_only_acts_once(self):
        self.controller.launch()
        ball = self.session.world.balls[0]
        self.assertFalse(ball.sticky)
        self.assertFalse(self.session.awaiting_launch)
        # midpoint of the launch cone is straight up
        self.assertAlmostEqual(ball.vel.x, 0)
        self.assertAlmostEqual(ball.vel.y, -config.BALL_SPEED)
        vel = ball.vel.copy()

        self.controller.launch()
        self.assertEqual(ball.vel, vel)
        self.assertEqual(event_kinds(self.session.events).count(cues.LAUNCH), 1)

    def test_launch_is_ignored_while_paused(self):
        self.controller.toggle_pause()
        self.controller.launch()
        self.assertTrue(self.session.awaiting_launch)

    def test_pause_freezes_update(self):
        self.controller.launch()
        ball = self.session.world.balls[0]
        self.controller.toggle_pause()
        y = ball.pos.y
        self.controller.update(0.03)
        self.assertEqual(ball.pos.y, y)
        self.controller.toggle_pause()
        self.controller.update(0.03)
        self.assertLess(ball.pos.y, y)

    def test_sticky_ball_follows_paddle_moves(self):
        self.controller.set_movement(right=True)
        self.controller.update(0.03)
        ball = self.session.world.balls[0]
        self.assertEqual(ball.pos.x, self.session.world.paddle.center_x)

    def test_out_of_range_level_is_a_contract_violation(self):
        with self.assertRaises(AssertionError):
            self.controller.load_level(config.TOTAL_LEVELS)


class TestScoring(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller()
        self.session = self.controller.session
        self.bricks = self.session.world.bricks

    def test_destroying_a_brick_scores_its_points(self):
        smash(self.controller, self.bricks[0])
        self.assertTrue(self.bricks[0].destroyed)
        self.assertEqual(self.session.score, 56)
        self.assertEqual(self.session.combo, 1)
        self.assertEqual(self.session.combo_timer, config.COMBO_WINDOW)
        self.assertIn(cues.BRICK_DESTROYED, event_kinds(self.session.events))

    def test_partial_hit_scores_flat_points_without_combo(self):
        brick = make_brick(hp=2)
        brick.hp -= 1
        self.controller.register_hit(brick)
        self.assertEqual(self.session.score, 10)
        self.assertEqual(self.session.combo, 0)
        self.assertFalse(brick.destroyed)

    def test_double_score_multiplier(self):
        self.controller.apply_powerup("2x")
        smash(self.controller, self.bricks[0])
        self.assertEqual(self.session.score, 112)
        brick = make_brick(hp=1)
        self.controller.register_hit(brick)
        self.assertEqual(self.session.score, 132)

    def test_partial_hit_rounds_halves_up(self):
        self.session.powerups.score_multiplier = 1.25
        brick = make_brick(hp=2)
        brick.hp -= 1
        self.controller.register_hit(brick)
        self.assertEqual(self.session.score, 13)

    def test_combo_bonus_only_at_multiples_of_five(self):
        bonuses = []
        for brick in self.bricks[:15]:
            before = self.session.score
            smash(self.controller, brick)
            bonuses.append(self.session.score - before - brick.points)
            self.controller.update(0.1)

        expected = [0] * 15
        expected[4], expected[9], expected[14] = 250, 500, 750
        self.assertEqual(bonuses, expected)
        combos = [e.params["combo"] for e in self.session.events if e.kind == cues.COMBO]
        self.assertEqual(combos, [5, 10, 15])

    def test_combo_expires_after_window(self):
        for brick in self.bricks[:3]:
            smash(self.controller, brick)
        self.assertEqual(self.session.combo, 3)
        self.controller.update(1.0)
        self.assertEqual(self.session.combo, 3)
        self.controller.update(0.6)
        self.assertEqual(self.session.combo, 0)
        smash(self.controller, self.bricks[3])
        self.assertEqual(self.session.combo, 1)


class TestPowerups(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller()
        self.session = self.controller.session
        self.world = self.session.world

    def test_slow_does_not_stack(self):
        self.controller.launch()
        ball = self.world.balls[0]
        self.controller.apply_powerup("slow")
        self.assertEqual(ball.slow_timer, 8)
        self.controller.update(0.5)
        self.assertAlmostEqual(ball.slow_timer, 7.5)
        self.controller.apply_powerup("slow")
        self.assertEqual(ball.slow_timer, 8)
        self.controller.apply_powerup("slow")
        self.assertEqual(ball.slow_timer, 8)

    def test_expand_grows_up_to_cap(self):
        self.controller.apply_powerup("expand")
        self.assertEqual(self.world.paddle.w, 230)
        for _ in range(20):
            self.controller.apply_powerup("expand")
        self.assertEqual(self.world.paddle.w, config.WIDTH - 40)

    def test_extra_life_caps_at_nine(self):
        for _ in range(10):
            self.controller.apply_powerup("life")
        self.assertEqual(self.session.lives, 9)

    def test_full_width_reverts_after_duration(self):
        self.controller.apply_powerup("expand")
        self.controller.apply_powerup("full")
        self.assertEqual(self.world.paddle.w, config.WIDTH - 40)
        self.controller.update(7.9)
        self.assertEqual(self.world.paddle.w, config.WIDTH - 40)
        self.controller.update(0.2)
        self.assertEqual(self.world.paddle.w, config.PADDLE_WIDTH)

    def test_double_score_reverts_after_duration(self):
        self.controller.apply_powerup("2x")
        self.assertEqual(self.session.powerups.score_multiplier, 2)
        self.controller.update(10.1)
        self.assertEqual(self.session.powerups.score_multiplier, 1)

    def test_multi_ball_adds_two_rising_balls(self):
        self.controller.launch()
        self.controller.apply_powerup("multi")
        balls = self.world.balls
        self.assertEqual(len(balls), 3)
        for extra in balls[1:]:
            self.assertFalse(extra.sticky)
            self.assertLess(extra.vel.y, 0)
            self.assertEqual(extra.pos, balls[0].pos)
            self.assertIsNot(extra.pos, balls[0].pos)

    def test_unknown_type_is_rejected(self):
        with self.assertRaises(ValueError):
            self.controller.apply_powerup("laser")

    def test_drop_chance(self):
        self.assertIsNone(self.controller.spawn_powerup(100, 100))
        self.controller.rng.value = 0.0
        self.controller.rng.index = 3
        powerup = self.controller.spawn_powerup(100, 100)
        self.assertEqual(powerup.kind.id, "life")
        self.assertEqual(powerup.vel.y, config.POWERUP_FALL_SPEED)
        self.assertEqual(self.world.powerups, [powerup])

    def test_caught_powerup_applies_once(self):
        paddle = self.world.paddle
        self.world.powerups.append(Powerup(POWERUP_BY_ID["life"], (paddle.center_x, paddle.y), (0, 140)))
        self.controller.update(0.01)
        self.assertEqual(self.session.lives, 4)
        self.assertEqual(self.world.powerups, [])
        self.controller.update(0.01)
        self.assertEqual(self.session.lives, 4)
        self.assertEqual(event_kinds(self.session.events).count(cues.POWERUP_CAUGHT), 1)
        self.assertEqual(len(self.world.particles), config.POWERUP_PARTICLES)

    def test_expired_powerup_is_removed_in_the_same_tick(self):
        paddle = self.world.paddle
        self.world.powerups.append(
            Powerup(POWERUP_BY_ID["life"], (paddle.center_x, paddle.y), (0, 140), life=0.005)
        )
        self.controller.update(0.01)
        self.assertEqual(self.world.powerups, [])
        self.assertEqual(self.session.lives, 3)

    def test_powerup_leaving_the_field_is_removed(self):
        self.world.powerups.append(Powerup(POWERUP_BY_ID["life"], (50, config.HEIGHT + 60), (0, 140)))
        self.controller.update(0.01)
        self.assertEqual(self.world.powerups, [])


class TestProgression(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller()
        self.session = self.controller.session

    def drop_all_balls(self):
        for ball in self.session.world.balls:
            ball.pos.y = config.HEIGHT + 200
        self.controller.update(0.01)

    def test_losing_the_ball_costs_a_life(self):
        self.controller.launch()
        smash(self.controller, self.session.world.bricks[0])
        self.drop_all_balls()
        self.assertEqual(self.session.lives, 2)
        self.assertEqual(self.session.level, 0)
        self.assertEqual(self.session.combo, 0)
        self.assertTrue(self.session.awaiting_launch)
        self.assertEqual(len(self.session.world.balls), 1)
        self.assertTrue(self.session.world.balls[0].sticky)
        self.assertIn(cues.LIFE_LOST, event_kinds(self.session.events))

    def test_sticky_ball_is_never_lost(self):
        self.session.world.balls[0].pos.y = config.HEIGHT + 200
        self.controller.update(0.01)
        self.assertEqual(self.session.lives, 3)

    def test_last_life_ends_the_game_and_freezes_it(self):
        self.session.lives = 1
        self.controller.launch()
        self.drop_all_balls()
        self.assertEqual(self.session.lives, 0)
        self.assertTrue(self.session.game_over)
        self.assertTrue(self.session.paused)
        self.assertFalse(self.session.won)

        score = self.session.score
        bricks = [b.hp for b in self.session.world.bricks]
        self.controller.toggle_pause()
        self.assertTrue(self.session.paused)
        self.controller.update(0.03)
        self.controller.launch()
        self.assertEqual(self.session.score, score)
        self.assertEqual([b.hp for b in self.session.world.bricks], bricks)
        self.assertEqual(self.session.world.balls, [])

    def test_restart_builds_a_fresh_session(self):
        old = self.session
        old.score = 900
        old.lives = 0
        old.game_over = True
        self.controller.apply_powerup("expand")
        self.controller.restart()
        fresh = self.controller.session
        self.assertIsNot(fresh, old)
        self.assertEqual(fresh.score, 0)
        self.assertEqual(fresh.lives, 3)
        self.assertEqual(fresh.level, 0)
        self.assertFalse(fresh.paused)
        self.assertFalse(fresh.game_over)
        self.assertEqual(fresh.world.paddle.w, config.PADDLE_WIDTH)
        self.assertEqual(fresh.powerups.score_multiplier, 1)
        self.assertEqual(event_kinds(fresh.events), [cues.RESTART])

    def test_restart_can_reseed_or_swap_the_random_source(self):
        rng = ScriptedRng(value=0.5)
        self.controller.restart(rng=rng)
        self.assertIs(self.controller.rng, rng)

        self.controller.restart(seed=5)
        first = [b.direction for b in self.controller.session.world.bricks]
        self.controller.restart(seed=5)
        second = [b.direction for b in self.controller.session.world.bricks]
        self.assertIsInstance(self.controller.rng, np.random.Generator)
        self.assertEqual(first, second)

    def test_clearing_level_zero_advances_with_bonus(self):
        for brick in self.session.world.bricks:
            smash(self.controller, brick)
        before = self.session.score
        self.controller.update(0.01)
        self.assertEqual(self.session.score - before, 500)
        self.assertEqual(self.session.level, 1)
        self.assertEqual(self.session.combo, 0)
        self.assertTrue(self.session.awaiting_launch)
        self.assertEqual(len(self.session.world.balls), 1)
        self.assertTrue(all(not b.destroyed for b in self.session.world.bricks))
        clear = [e for e in self.session.events if e.kind == cues.LEVEL_CLEAR]
        self.assertEqual(clear[0].params, {"level": 0, "bonus": 500})

    def test_level_bonus_grows_with_level(self):
        self.controller.load_level(3)
        for brick in self.session.world.bricks:
            smash(self.controller, brick)
        before = self.session.score
        self.controller.update(0.01)
        self.assertEqual(self.session.score - before, 800)
        self.assertEqual(self.session.level, 4)

    def test_clearing_the_last_level_wins(self):
        self.controller.load_level(config.TOTAL_LEVELS - 1)
        for brick in self.session.world.bricks:
            smash(self.controller, brick)
        self.controller.update(0.01)
        self.assertTrue(self.session.game_over)
        self.assertTrue(self.session.won)
        self.assertTrue(self.session.paused)
        self.assertEqual(self.session.level, config.TOTAL_LEVELS - 1)

    def test_indestructible_bricks_do_not_block_clear(self):
        self.session.world.bricks = [make_brick(hp=float("inf"), points=0, indestructible=True)]
        self.controller.update(0.01)
        self.assertEqual(self.session.level, 1)


class TestSnapshot(unittest.TestCase):
    def test_snapshot_exposes_visible_state_and_drains_events(self):
        controller = make_controller()
        controller.launch()
        smash(controller, controller.session.world.bricks[0])
        snap = controller.snapshot()

        self.assertEqual(len(snap["balls"]), 1)
        self.assertEqual(len(snap["bricks"]), 59)
        self.assertEqual(snap["hud"]["score"], 56)
        self.assertEqual(snap["hud"]["total_levels"], 15)
        self.assertEqual(len(snap["particles"]), config.BRICK_PARTICLES)
        self.assertEqual(snap["paddle"][2], config.PADDLE_WIDTH)
        self.assertEqual(event_kinds(snap["events"]), [cues.LAUNCH, cues.BRICK_DESTROYED])
        self.assertEqual(controller.snapshot()["events"], [])


if __name__ == "__main__":
    unittest.main()
