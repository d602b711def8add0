import math

from brickbreaker import config
from brickbreaker.entities import clamp
from brickbreaker.session import PADDLE_HIT, WALL_BOUNCE


def circle_rect_collision(center, radius, x, y, w, h):
    """Closest-point test between a circle and an axis-aligned rectangle."""
    closest_x = clamp(center[0], x, x + w)
    closest_y = clamp(center[1], y, y + h)
    dx = center[0] - closest_x
    dy = center[1] - closest_y
    return dx * dx + dy * dy <= radius * radius


def paddle_bounce(ball, paddle):
    """Re-aim ``ball`` off the paddle, keeping its speed."""
    offset = (ball.pos.x - paddle.center_x) / (paddle.w / 2)
    angle = clamp(offset, -config.PADDLE_OFFSET_CLAMP, config.PADDLE_OFFSET_CLAMP) * config.PADDLE_DEFLECTION
    ball.vel.update(math.sin(angle) * ball.speed, -math.cos(angle) * ball.speed)
    ball.pos.y = paddle.y - ball.radius - config.BALL_STICKY_GAP


def entered_vertically(prev_y, radius, brick):
    return prev_y + radius <= brick.y or prev_y - radius >= brick.y + brick.h


def move_paddle(paddle, dt, target=None, move_left=False, move_right=False):
    if target is not None and abs(target - paddle.center_x) > config.PADDLE_DEAD_ZONE:
        goal = target - paddle.w / 2
        paddle.x += (goal - paddle.x) * clamp(config.PADDLE_EASING * dt, 0, 1)
    if move_left:
        paddle.x -= paddle.speed * dt
    if move_right:
        paddle.x += paddle.speed * dt
    paddle.clamp_position()


def step_ball(session, ball, dt, on_brick_hit):
    """Advance one ball by ``dt`` and resolve its collisions in order:
    side walls, ceiling, floor exit, paddle, then at most one brick.
    """
    paddle = session.world.paddle

    if ball.sticky:
        ball.follow(paddle)
        return

    speed_mult = 1.0
    if ball.slow_timer > 0:
        speed_mult = config.SLOW_FACTOR
        ball.slow_timer -= dt

    prev_y = ball.pos.y
    ball.pos += ball.vel * (dt * speed_mult)

    r = ball.radius
    if ball.pos.x - r <= config.WALL_INSET:
        ball.pos.x = config.WALL_INSET + r
        ball.vel.x = abs(ball.vel.x)
        session.emit(WALL_BOUNCE)
    if ball.pos.x + r >= config.WIDTH - config.WALL_INSET:
        ball.pos.x = config.WIDTH - config.WALL_INSET - r
        ball.vel.x = -abs(ball.vel.x)
        session.emit(WALL_BOUNCE)
    if ball.pos.y - r <= config.WALL_INSET:
        ball.pos.y = config.WALL_INSET + r
        ball.vel.y = abs(ball.vel.y)
        session.emit(WALL_BOUNCE)

    if ball.pos.y - r > config.HEIGHT + config.FLOOR_MARGIN:
        ball.alive = False
        return

    if ball.vel.y > 0 and circle_rect_collision(ball.pos, r, paddle.x, paddle.y, paddle.w, paddle.h):
        paddle_bounce(ball, paddle)
        session.emit(PADDLE_HIT)

    for brick in session.world.bricks:
        if not brick.breakable:
            continue
        if circle_rect_collision(ball.pos, r, brick.x, brick.y, brick.w, brick.h):
            if entered_vertically(prev_y, r, brick):
                ball.vel.y *= -1
            else:
                ball.vel.x *= -1
            brick.hp -= 1
            on_brick_hit(brick)
            break


def step_balls(session, dt, on_brick_hit):
    for ball in session.world.balls:
        step_ball(session, ball, dt, on_brick_hit)
