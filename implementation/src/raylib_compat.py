"""raylib compatibility layer over the raylib/pyray C bindings.

Imports from the CamelCase `raylib` module (falling back to the snake_case
`pyray` module shipped in the same distribution) and re-exports the handful
of drawing and input calls the front end needs under snake_case names, with
UTF-8 encoding for functions that take `const char*`.
"""
from __future__ import annotations

try:
    from raylib import *  # type: ignore
except Exception:
    try:
        from pyray import *  # type: ignore
    except Exception as exc:
        raise ImportError(
            "Could not import raylib bindings. Install 'raylib'."
        ) from exc

# Some bindings expose Color/Vector2 as structs, others use plain tuples.
if "Color" not in globals():
    def Color(r: int, g: int, b: int, a: int):  # type: ignore
        return (r, g, b, a)

_CAMEL_MAP = {
    "init_window": "InitWindow",
    "set_target_fps": "SetTargetFPS",
    "window_should_close": "WindowShouldClose",
    "begin_drawing": "BeginDrawing",
    "clear_background": "ClearBackground",
    "end_drawing": "EndDrawing",
    "get_frame_time": "GetFrameTime",
    "is_key_pressed": "IsKeyPressed",
    "draw_text": "DrawText",
    "draw_rectangle": "DrawRectangle",
    "draw_rectangle_lines": "DrawRectangleLines",
    "draw_circle": "DrawCircle",
    "draw_circle_lines": "DrawCircleLines",
    "draw_line": "DrawLine",
    "close_window": "CloseWindow",
    "get_mouse_position": "GetMousePosition",
    "is_mouse_button_pressed": "IsMouseButtonPressed",
    "is_mouse_button_down": "IsMouseButtonDown",
    "is_mouse_button_released": "IsMouseButtonReleased",
    "measure_text": "MeasureText",
    "set_exit_key": "SetExitKey",
}

for _snake, _camel in _CAMEL_MAP.items():
    if _snake not in globals() and _camel in globals():
        globals()[_snake] = globals()[_camel]


def _encode_text(value):  # type: ignore
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


# pyray already accepts str; only the raw C bindings need bytes.
if "InitWindow" in globals():
    _init_window = globals()["init_window"]
    def init_window(width, height, title):  # type: ignore
        return _init_window(width, height, _encode_text(title))

    _draw_text = globals()["draw_text"]
    def draw_text(text, x, y, size, color):  # type: ignore
        return _draw_text(_encode_text(text), x, y, size, color)

    _measure_text = globals()["measure_text"]
    def measure_text(text, size):  # type: ignore
        return _measure_text(_encode_text(text), size)
