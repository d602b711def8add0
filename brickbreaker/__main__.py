import logging

import pygame

from brickbreaker import config
from brickbreaker.clock import LAUNCH, PAUSE, RESTART, SimulationClock
from brickbreaker.render import Renderer
from brickbreaker.rules import GameController

logger = logging.getLogger(__name__)

KEY_ACTIONS = {
    pygame.K_SPACE: LAUNCH,
    pygame.K_p: PAUSE,
    pygame.K_RETURN: RESTART,
}


def main():
    config.configure_logging()

    pygame.init()
    pygame.display.set_caption("Brick Breaker Pro")
    screen = pygame.display.set_mode((config.WIDTH, config.HEIGHT))
    renderer = Renderer(screen)
    fps_clock = pygame.time.Clock()

    clock = SimulationClock(GameController())
    inputs = clock.inputs
    running = True

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key in KEY_ACTIONS:
                inputs.press(KEY_ACTIONS[event.key])
            elif event.type == pygame.MOUSEMOTION:
                inputs.pointer_x = event.pos[0]
            elif event.type == pygame.MOUSEBUTTONDOWN:
                inputs.pointer_x = event.pos[0]
                inputs.press(LAUNCH)

        keys = pygame.key.get_pressed()
        inputs.move_left = keys[pygame.K_LEFT] or keys[pygame.K_a]
        inputs.move_right = keys[pygame.K_RIGHT] or keys[pygame.K_d]

        snapshot = clock.tick(pygame.time.get_ticks() / 1000)
        for cue in snapshot["events"]:
            # sfx: one cue per event kind
            logger.debug("cue %s %s", cue.kind, cue.params)

        renderer.draw(snapshot)
        pygame.display.flip()
        fps_clock.tick(config.FPS)

    logger.info("Exited after %d frames, score %d", clock.frames, clock.controller.session.score)
    pygame.quit()


if __name__ == "__main__":
    main()
