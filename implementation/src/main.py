from __future__ import annotations

import asyncio
import logging

from raylib_compat import (
    KEY_LEFT_SHIFT,
    KEY_R,
    KEY_RIGHT_SHIFT,
    MOUSE_BUTTON_LEFT,
    MOUSE_BUTTON_RIGHT,
    begin_drawing,
    clear_background,
    close_window,
    end_drawing,
    get_frame_time,
    get_mouse_position,
    init_window,
    is_key_pressed,
    is_mouse_button_down,
    is_mouse_button_pressed,
    is_mouse_button_released,
    set_exit_key,
    set_target_fps,
    window_should_close,
)

from wuxing.config import load_config
from wuxing.simulation import GameSession, PressureClock, demo_session
from wuxing.ui import BACKGROUND, Ui

logger = logging.getLogger(__name__)


def _new_game() -> tuple[GameSession, PressureClock]:
    session = demo_session(load_config())
    return session, PressureClock(interval=session.config.pressure_interval)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    session, clock = _new_game()
    cfg = session.config
    init_window(cfg.view_width, cfg.view_height, "Wu Xing Bubbles")
    set_exit_key(0)
    set_target_fps(60)

    ui = Ui()
    aiming = False

    try:
        while not window_should_close():
            dt = get_frame_time()
            mouse = get_mouse_position()

            if is_key_pressed(KEY_R) and session.is_over:
                session, clock = _new_game()
                aiming = False

            if not session.is_over:
                # Input: press to aim, drag to adjust, release to fire.
                if is_mouse_button_pressed(MOUSE_BUTTON_LEFT) and not session.in_flight:
                    aiming = True
                if aiming and is_mouse_button_down(MOUSE_BUTTON_LEFT):
                    session.aim_at(mouse.x, mouse.y)
                if aiming and is_mouse_button_released(MOUSE_BUTTON_LEFT):
                    aiming = False
                    session.fire()

                if (
                    is_key_pressed(KEY_LEFT_SHIFT)
                    or is_key_pressed(KEY_RIGHT_SHIFT)
                    or is_mouse_button_pressed(MOUSE_BUTTON_RIGHT)
                ):
                    session.swap_hold()

                session.advance(dt)
                for _ in range(clock.tick(dt)):
                    session.trigger_pressure()
                if session.is_over:
                    clock.stop()

            begin_drawing()
            clear_background(BACKGROUND)
            ui.draw(session, clock, aiming)
            end_drawing()

            await asyncio.sleep(0)
    finally:
        close_window()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
