def policy(env):
    # Strategy: launch as soon as a ball rests on the paddle, then keep the paddle
    # centre under the lowest falling ball. A quarter-width dead zone stops the
    # paddle from jittering once it is roughly lined up.
    session = env.controller.session
    paddle = session.world.paddle

    if session.awaiting_launch and not session.paused:
        return [0, 1, 0]  # Launch

    balls = [b for b in session.world.balls if b.vel.y > 0] or session.world.balls
    if not balls:
        return [0, 0, 0]

    target_x = max(balls, key=lambda b: b.pos.y).pos.x
    dx = target_x - paddle.center_x
    if dx > paddle.w / 4:
        return [4, 0, 0]  # Move right
    elif dx < -paddle.w / 4:
        return [3, 0, 0]  # Move left
    return [0, 0, 0]
