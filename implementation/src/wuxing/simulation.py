from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Optional

from wuxing.config import GameConfig, load_config
from wuxing.elements import Element, Interaction, classify
from wuxing.grid import Board
from wuxing.queue import ShotQueue
from wuxing.store import ScoreStore
from wuxing.trajectory import TrajectoryResolver
from wuxing.types import NO_HINT, Bubble, Hint, HintKind, Outcome, Resolution, ShotState

logger = logging.getLogger(__name__)

DANGER_LINE_REASON = "Hit the danger line"
PRESSURE_REASON = "Overwhelmed by pressure"

_HINT_FOR_INTERACTION = {
    Interaction.KE: HintKind.KE_REMOVAL,
    Interaction.SHENG: HintKind.SHENG_GROWTH,
    Interaction.NEUTRAL: HintKind.NEUTRAL_STICK,
}


@dataclass
class GameSession:
    """One game: board, shot queue, projectile, score and terminal state.

    Every mutation happens synchronously inside `fire`, `advance`,
    `swap_hold` and `trigger_pressure`. The caller owns the frame loop and
    the pressure timer (see `PressureClock`) and reads state back after
    each call. Once the game is over all four operations are no-ops.
    """
    config: GameConfig = field(default_factory=GameConfig)
    rng: Optional[random.Random] = None

    board: Board = field(init=False)
    queue: ShotQueue = field(init=False)
    resolver: TrajectoryResolver = field(init=False)
    stats: ScoreStore = field(default_factory=ScoreStore)

    aim_angle: Optional[float] = None
    hint: Hint = NO_HINT
    last_resolution: Optional[Resolution] = None
    is_over: bool = False
    termination_reason: Optional[str] = None

    def __post_init__(self) -> None:
        cfg = self.config
        if self.rng is None:
            self.rng = random.Random(cfg.rng_seed)
        origin_x, origin_y = cfg.grid_origin
        self.board = Board(
            rows=cfg.rows,
            cols=cfg.cols,
            cell_size=cfg.cell_size,
            origin_x=origin_x,
            origin_y=origin_y,
        )
        self.queue = ShotQueue(rng=self.rng, size=cfg.queue_size)
        shooter_x, shooter_y = cfg.shooter_position
        min_angle, max_angle = cfg.aim_bounds
        self.resolver = TrajectoryResolver(
            board=self.board,
            shooter_x=shooter_x,
            shooter_y=shooter_y,
            speed=cfg.shot_speed,
            min_angle=min_angle,
            max_angle=max_angle,
            collision_threshold=cfg.collision_threshold,
            wall_inset=cfg.wall_inset,
            march_step=cfg.march_step,
            max_prediction_steps=cfg.max_prediction_steps,
        )
        self.board.seed(cfg.seed_rows, cfg.seed_fill_probability, self.rng)

    # ── Observable state ─────────────────────────────────────────

    @property
    def score(self) -> int:
        return self.stats.score

    @property
    def current(self) -> Element:
        return self.queue.current

    @property
    def hold(self) -> Optional[Element]:
        return self.queue.hold

    @property
    def upcoming(self) -> tuple[Element, ...]:
        return self.queue.upcoming

    @property
    def shot(self) -> Optional[ShotState]:
        return self.resolver.shot

    @property
    def in_flight(self) -> bool:
        return self.resolver.in_flight

    @property
    def shooter_cell(self) -> tuple[int, int]:
        return self.board.world_to_cell(self.resolver.shooter_x, self.resolver.shooter_y)

    def grid_snapshot(self) -> list[list[Optional[tuple[Element, int]]]]:
        return self.board.snapshot()

    # ── Aiming ───────────────────────────────────────────────────

    def update_aim(self, angle: float) -> Hint:
        self.aim_angle = self.resolver.clamp_aim(angle)
        self.hint = self.predict_hint(self.aim_angle)
        return self.hint

    def aim_at(self, x: float, y: float) -> Hint:
        angle = math.atan2(y - self.resolver.shooter_y, x - self.resolver.shooter_x)
        return self.update_aim(angle)

    def predict_hint(self, angle: float) -> Hint:
        predicted = self.resolver.predict(angle)
        if predicted is None:
            return NO_HINT
        _, _, bubble = predicted
        kind = _HINT_FOR_INTERACTION[classify(self.current, bubble.element)]
        return Hint(kind=kind, element=bubble.element)

    # ── Inbound operations ───────────────────────────────────────

    def fire(self, angle: Optional[float] = None) -> bool:
        if self.is_over or self.resolver.in_flight:
            return False
        if angle is None:
            angle = self.aim_angle if self.aim_angle is not None else -math.pi / 2
        self.resolver.launch(self.current, angle)
        self.queue.lock()
        self.stats.shots_fired += 1
        return True

    def advance(self, dt: float) -> Optional[Resolution]:
        if self.is_over or not self.resolver.in_flight:
            return None
        contact = self.resolver.step(dt)
        if contact is None:
            return None
        resolution = self._apply(self.resolver.resolve(contact))
        self.last_resolution = resolution
        return resolution

    def swap_hold(self) -> bool:
        if self.is_over:
            return False
        swapped = self.queue.swap(in_flight=self.resolver.in_flight)
        if swapped:
            self.stats.swaps += 1
            self.hint = NO_HINT
        return swapped

    def trigger_pressure(self) -> bool:
        if self.is_over:
            return False
        if not self.board.apply_pressure(self.config.pressure_spawn_probability, self.rng):
            self._end(PRESSURE_REASON)
            return False
        self.stats.pressure_shifts += 1
        logger.debug("Pressure shift %d", self.stats.pressure_shifts)
        return True

    # ── Internals ────────────────────────────────────────────────

    def _apply(self, resolution: Resolution) -> Resolution:
        cfg = self.config
        if resolution.outcome is Outcome.KE_REMOVAL:
            self.board.clear(*resolution.target)
            points = cfg.ke_points
        elif resolution.outcome is Outcome.SHENG_GROWTH:
            target = self.board.get(*resolution.target)
            if target is not None:
                target.grow(cfg.max_level)
            points = cfg.sheng_points
        else:
            self.board.set(*resolution.landing, Bubble(resolution.element))
            if resolution.game_over:
                self.stats.sticks += 1
                self._end(DANGER_LINE_REASON)
                return resolution
            points = cfg.stick_points

        resolution = replace(resolution, points=points)
        self.stats.record(resolution.outcome, points)
        logger.debug("Shot resolved: %s", resolution)
        self._after_shot_resolved()
        return resolution

    def _after_shot_resolved(self) -> None:
        self.queue.load_next()
        self.queue.reset_swap_lock()
        self.hint = NO_HINT

    def _end(self, reason: str) -> None:
        self.is_over = True
        self.termination_reason = reason
        logger.info("Game over: %s (score %d)", reason, self.stats.score)


@dataclass
class PressureClock:
    """Accumulates frame time and reports how many pressure events are due."""
    interval: float = 9.0
    elapsed: float = 0.0
    stopped: bool = False

    def tick(self, dt: float) -> int:
        if self.stopped or self.interval <= 0:
            return 0
        self.elapsed += dt
        due = 0
        while self.elapsed >= self.interval:
            self.elapsed -= self.interval
            due += 1
        return due

    def stop(self) -> None:
        self.stopped = True

    @property
    def remaining(self) -> float:
        return max(0.0, self.interval - self.elapsed)


def demo_session(config: GameConfig | None = None) -> GameSession:
    if config is None:
        config = load_config()
    return GameSession(config=config)
