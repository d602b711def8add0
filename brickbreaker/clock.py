import logging

from brickbreaker import config

logger = logging.getLogger(__name__)

LAUNCH = "launch"
PAUSE = "pause"
RESTART = "restart"


class InputBuffer:
    """Collects input between ticks.

    Continuous inputs are last-write-wins; discrete actions are deduplicated
    so one press yields one action on the next tick.
    """

    def __init__(self):
        self.pointer_x = None
        self.move_left = False
        self.move_right = False
        self._actions = []

    def press(self, action):
        if action not in self._actions:
            self._actions.append(action)

    def apply(self, controller):
        if self.pointer_x is not None:
            controller.set_paddle_target(self.pointer_x)
        controller.set_movement(self.move_left, self.move_right)

        actions, self._actions = self._actions, []
        for action in actions:
            if action == RESTART:
                controller.restart()
            elif action == PAUSE:
                controller.toggle_pause()
            elif action == LAUNCH:
                controller.launch()
        return actions


class SimulationClock:
    """Drives a ``GameController`` once per frame with a capped step."""

    def __init__(self, controller, max_step=config.MAX_STEP):
        self.controller = controller
        self.max_step = max_step
        self.inputs = InputBuffer()
        self.last_time = None
        self.frames = 0

    def tick(self, now):
        """Advance to wall-clock time ``now`` (seconds) and return a snapshot."""
        elapsed = 0.0 if self.last_time is None else now - self.last_time
        self.last_time = now
        return self.advance(elapsed)

    def advance(self, elapsed):
        dt = min(self.max_step, max(0.0, elapsed))
        if elapsed > 10 * self.max_step:
            logger.debug("Frame gap of %.3fs clamped to %.3fs", elapsed, dt)
        self.inputs.apply(self.controller)

        session = self.controller.session
        if not session.paused and not session.game_over:
            self.controller.update(dt)
        self.frames += 1
        return self.controller.snapshot()
