import random

import pygame
import pygame.gfxdraw

from brickbreaker import config


class Renderer:
    """Draws controller snapshots onto a pygame surface."""

    COLOR_BG_TOP = (15, 20, 40)
    COLOR_BG_BOTTOM = (40, 50, 80)
    COLOR_PADDLE = (94, 179, 255)
    COLOR_PADDLE_GLOW = (94, 179, 255, 60)
    COLOR_BALL = (255, 94, 108)
    COLOR_BALL_GLOW = (255, 94, 108, 60)
    COLOR_TEXT = (255, 255, 255)
    COLOR_SHADOW = (10, 10, 10)
    COLOR_COMBO = (251, 191, 36)
    COLOR_HEALTH = (255, 255, 255, 80)

    def __init__(self, surface=None):
        pygame.font.init()
        self.screen = surface if surface is not None else pygame.Surface((config.WIDTH, config.HEIGHT))
        self.font_large = pygame.font.Font(None, 64)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 22)
        self.background = self._make_background()

    def _make_background(self):
        bg = pygame.Surface((config.WIDTH, config.HEIGHT))
        for y in range(config.HEIGHT):
            interp = y / config.HEIGHT
            color = tuple(
                int(top * (1 - interp) + bottom * interp)
                for top, bottom in zip(self.COLOR_BG_TOP, self.COLOR_BG_BOTTOM)
            )
            pygame.draw.line(bg, color, (0, y), (config.WIDTH, y))
        return bg

    def draw(self, snapshot):
        hud = snapshot["hud"]
        self.screen.blit(self.background, (0, 0))

        layer = pygame.Surface((config.WIDTH, config.HEIGHT), pygame.SRCALPHA)
        self._render_game(layer, snapshot)
        offset = (0, 0)
        if hud["shake"] > 0:
            amount = hud["shake"] * 10
            offset = (int(random.uniform(-amount, amount)), int(random.uniform(-amount, amount)))
        self.screen.blit(layer, offset)

        self._render_ui(hud, snapshot["balls"])
        return self.screen

    def _render_game(self, surf, snapshot):
        for brick in snapshot["bricks"]:
            rect = pygame.Rect(*map(int, brick["rect"]))
            pygame.draw.rect(surf, brick["color"], rect, border_radius=6)
            if not brick["indestructible"] and brick["max_hp"] > 1:
                bar = pygame.Rect(rect.x + 4, rect.bottom - 6, int((rect.w - 8) * brick["hp_ratio"]), 2)
                pygame.draw.rect(surf, self.COLOR_HEALTH, bar)

        for p in snapshot["powerups"]:
            rect = pygame.Rect(*map(int, p["rect"]))
            pygame.draw.rect(surf, p["color"], rect, border_radius=8)
            label = self.font_small.render(self.powerup_label(p), True, (0, 0, 0))
            surf.blit(label, label.get_rect(center=rect.center))

        x, y, w, h = map(int, snapshot["paddle"])
        glow = pygame.Rect(x - 3, y - 3, w + 6, h + 6)
        pygame.draw.rect(surf, self.COLOR_PADDLE_GLOW, glow, border_radius=10)
        pygame.draw.rect(surf, self.COLOR_PADDLE, (x, y, w, h), border_radius=8)

        for ball in snapshot["balls"]:
            bx, by, r = int(ball["x"]), int(ball["y"]), int(ball["r"])
            pygame.gfxdraw.filled_circle(surf, bx, by, r * 2, self.COLOR_BALL_GLOW)
            pygame.gfxdraw.filled_circle(surf, bx, by, r, self.COLOR_BALL)
            pygame.gfxdraw.aacircle(surf, bx, by, r, self.COLOR_BALL)

        for p in snapshot["particles"]:
            alpha = max(0, min(255, int(p["life"] * 255)))
            pygame.gfxdraw.filled_circle(surf, int(p["x"]), int(p["y"]), max(1, int(p["size"])), (*p["color"], alpha))

    def powerup_label(self, powerup):
        # Font.metrics() yields None for every glyph the font cannot draw.
        icon = powerup["icon"]
        if icon and None not in self.font_small.metrics(icon):
            return icon
        return powerup["type"]

    def _render_ui(self, hud, balls):
        self._render_text(f"SCORE: {hud['score']:,}", self.font_medium, (12, 10), self.COLOR_TEXT)
        self._render_text(
            f"LEVEL: {hud['level'] + 1}/{hud['total_levels']}", self.font_medium,
            (config.WIDTH // 2, 22), self.COLOR_TEXT, align="center"
        )
        self._render_text(f"LIVES: {hud['lives']}", self.font_medium, (config.WIDTH - 12, 10), self.COLOR_TEXT, align="topright")

        if hud["combo"] >= 3:
            self._render_text(f"COMBO x{hud['combo']}", self.font_medium, (config.WIDTH - 20, 40), self.COLOR_COMBO, align="topright")

        if hud["awaiting_launch"] and balls and not hud["paused"]:
            self._render_text(
                "CLICK OR PRESS SPACE TO LAUNCH", self.font_medium,
                (config.WIDTH // 2, config.HEIGHT // 2), self.COLOR_TEXT, align="center"
            )

        if hud["paused"]:
            overlay = pygame.Surface((config.WIDTH, config.HEIGHT), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 180))
            self.screen.blit(overlay, (0, 0))
            if hud["game_over"]:
                title = "YOU WIN!" if hud["won"] else "GAME OVER"
            else:
                title = "PAUSED"
            center = (config.WIDTH // 2, config.HEIGHT // 2 - 20)
            self._render_text(title, self.font_large, center, self.COLOR_TEXT, align="center")
            if hud["game_over"]:
                self._render_text(
                    f"Final Score: {hud['score']:,}", self.font_medium,
                    (config.WIDTH // 2, config.HEIGHT // 2 + 30), self.COLOR_TEXT, align="center"
                )
                self._render_text(
                    "Press Enter to play again", self.font_small,
                    (config.WIDTH // 2, config.HEIGHT // 2 + 60), self.COLOR_TEXT, align="center"
                )

    def _render_text(self, text, font, pos, color, align="topleft"):
        text_surf = font.render(text, True, color)
        shadow_surf = font.render(text, True, self.COLOR_SHADOW)

        text_rect = text_surf.get_rect()
        if align == "center":
            text_rect.center = pos
        elif align == "topright":
            text_rect.topright = pos
        else:
            text_rect.topleft = pos

        self.screen.blit(shadow_surf, (text_rect.x + 2, text_rect.y + 2))
        self.screen.blit(text_surf, text_rect)
