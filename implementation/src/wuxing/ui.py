from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from raylib_compat import (
    Color,
    draw_circle,
    draw_circle_lines,
    draw_line,
    draw_rectangle,
    draw_rectangle_lines,
    draw_text,
    measure_text,
)

from wuxing.elements import Element
from wuxing.simulation import GameSession, PressureClock

ELEMENT_RGB = {
    Element.WOOD: (46, 204, 113),
    Element.FIRE: (231, 76, 60),
    Element.EARTH: (241, 196, 15),
    Element.METAL: (236, 240, 241),
    Element.WATER: (44, 62, 80),
}
_EMPTY_RGB = (68, 68, 68)

BACKGROUND = Color(11, 16, 32, 255)
PANEL = Color(18, 26, 51, 242)
BOARD_BG = Color(15, 22, 48, 230)
TEXT = Color(255, 255, 255, 255)
TEXT_DIM = Color(255, 255, 255, 190)
LABEL_DARK = Color(11, 16, 32, 255)
AIM_LINE = Color(255, 255, 255, 64)
DANGER = Color(231, 76, 60, 90)
OVERLAY = Color(0, 0, 0, 140)

_AIM_LINE_LENGTH = 520


@dataclass
class Ui:
    """Draws a session snapshot. Holds no game state of its own."""

    def draw(self, session: GameSession, clock: PressureClock, aiming: bool) -> None:
        cfg = session.config
        board = session.board
        cell = board.cell_size
        radius = cell * 0.38

        draw_rectangle(0, 0, cfg.view_width, cfg.top_ui_height, PANEL)
        draw_rectangle(
            0, cfg.view_height - cfg.bottom_ui_height,
            cfg.view_width, cfg.bottom_ui_height, PANEL,
        )

        gx, gy = int(board.origin_x), int(board.origin_y)
        gw, gh = int(board.width), int(board.height)
        draw_rectangle(gx - 4, gy - 4, gw + 8, gh + 8, BOARD_BG)
        draw_rectangle_lines(gx - 4, gy - 4, gw + 8, gh + 8, Color(255, 255, 255, 20))
        draw_rectangle(gx, int(gy + board.danger_row * cell), gw, int(cell), DANGER)

        for r, c, bubble in board.iter_cells():
            if bubble is None:
                continue
            x, y = board.cell_to_world(r, c)
            self.draw_bubble(x, y, radius, bubble.element, str(bubble.level))

        if session.shot is not None:
            self.draw_bubble(session.shot.x, session.shot.y, radius, session.shot.element)
        elif aiming and session.aim_angle is not None:
            sx, sy = cfg.shooter_position
            draw_line(
                int(sx), int(sy),
                int(sx + math.cos(session.aim_angle) * _AIM_LINE_LENGTH),
                int(sy + math.sin(session.aim_angle) * _AIM_LINE_LENGTH),
                AIM_LINE,
            )

        sx, sy = cfg.shooter_position
        self.draw_bubble(sx, sy, radius, session.current, "1", dim=session.in_flight)

        self.draw_queue(session, radius)

        draw_text(f"Score: {session.score}", 16, 16, 18, TEXT)
        draw_text("Ke removes - Sheng grows", 16, 44, 14, TEXT_DIM)
        draw_text(f"Pressure in {clock.remaining:.1f}s", 220, 44, 14, TEXT_DIM)
        draw_text(session.hint.text, 140, cfg.view_height - 110, 14, TEXT)
        draw_text("SHIFT / right click: swap", 16, cfg.view_height - 30, 12, TEXT_DIM)

        if session.is_over:
            self.draw_game_over(session)

    def draw_queue(self, session: GameSession, radius: float) -> None:
        base_x, base_y = 58, 70
        draw_text("Hold", 16, 86, 12, TEXT_DIM)
        self.draw_bubble(base_x, base_y, radius, session.hold)
        draw_text("Next", 16, 126, 12, TEXT_DIM)
        for i, element in enumerate(session.upcoming):
            self.draw_bubble(base_x + i * 46, base_y + 52, radius, element)

    @staticmethod
    def draw_bubble(
        x: float,
        y: float,
        radius: float,
        element: Optional[Element],
        label: str = "",
        dim: bool = False,
    ) -> None:
        rgb = _EMPTY_RGB if element is None else ELEMENT_RGB[element]
        fill = Color(rgb[0], rgb[1], rgb[2], 64 if dim else 255)
        draw_circle(int(x), int(y), radius, fill)
        draw_circle_lines(int(x), int(y), radius + 2, Color(0, 0, 0, 64))
        if label:
            size = max(8, int(radius * 0.75))
            width = measure_text(label, size) or 0
            color = TEXT if element is Element.WATER else LABEL_DARK
            draw_text(label, int(x - width / 2), int(y - size / 2), size, color)

    @staticmethod
    def draw_game_over(session: GameSession) -> None:
        cfg = session.config
        cx, cy = cfg.view_width // 2, cfg.view_height // 2
        box_w = int(cfg.view_width * 0.92)
        draw_rectangle(cx - box_w // 2, cy - 90, box_w, 180, OVERLAY)
        draw_rectangle_lines(cx - box_w // 2, cy - 90, box_w, 180, Color(255, 255, 255, 46))
        lines = [
            ("GAME OVER", 28, -40),
            (session.termination_reason or "", 16, -6),
            (f"Score: {session.score}", 18, 32),
            ("Press R to try again", 14, 62),
        ]
        for text, size, dy in lines:
            width = measure_text(text, size) or 0
            draw_text(text, int(cx - width / 2), cy + dy - size // 2, size, TEXT)
