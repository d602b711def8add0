from brickbreaker import config
from brickbreaker.entities import Brick
from brickbreaker.rules import GameController


class ScriptedRng:
    """Stand-in for numpy's Generator with fixed draws.

    ``random()`` returns ``value`` (0.99 keeps every optional rule off),
    ``uniform`` returns the interval midpoint and ``integers`` returns ``index``.
    """

    def __init__(self, value=0.99, index=0):
        self.value = value
        self.index = index

    def random(self):
        return self.value

    def uniform(self, low, high):
        return (low + high) / 2

    def integers(self, n):
        return self.index % n


def make_controller(**kwargs):
    return GameController(rng=ScriptedRng(**kwargs))


def make_brick(x=100, y=100, hp=1, points=50, **kwargs):
    return Brick(x, y, 60, config.BRICK_HEIGHT, hp=hp, points=points, **kwargs)


def smash(controller, brick):
    """Destroy ``brick`` the way a ball hit on its last hit point would."""
    brick.hp = 0
    controller.register_hit(brick)


def event_kinds(events):
    return [e.kind for e in events]
