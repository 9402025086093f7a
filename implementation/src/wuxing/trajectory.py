"""Projectile stepping, collision detection and shot resolution.

Per shot the resolver moves Aiming -> InFlight -> Resolving -> Aiming:
`launch` creates the projectile, `step` advances it until it touches a
bubble or the top of the board, and `resolve` turns that contact into a
`Resolution` describing what the session must do to the board. The
resolver never mutates the board itself.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from wuxing.elements import Element, Interaction, classify
from wuxing.grid import Board
from wuxing.types import Bubble, Cell, Contact, Outcome, Resolution, ShotState

logger = logging.getLogger(__name__)


@dataclass
class TrajectoryResolver:
    board: Board
    shooter_x: float
    shooter_y: float
    speed: float = 900.0
    min_angle: float = math.radians(-160.0)
    max_angle: float = math.radians(-20.0)
    collision_threshold: float = 0.42
    wall_inset: float = 0.1
    march_step: float = 0.35
    max_prediction_steps: int = 80
    shot: Optional[ShotState] = field(default=None, init=False)

    @property
    def in_flight(self) -> bool:
        return self.shot is not None

    @property
    def left_wall(self) -> float:
        return self.board.origin_x + self.board.cell_size * self.wall_inset

    @property
    def right_wall(self) -> float:
        return self.board.origin_x + self.board.width - self.board.cell_size * self.wall_inset

    @property
    def top_out_y(self) -> float:
        return self.board.origin_y + self.board.cell_size * 0.5

    def clamp_aim(self, angle: float) -> float:
        return max(self.min_angle, min(self.max_angle, angle))

    def launch(self, element: Element, angle: float) -> Optional[ShotState]:
        if self.shot is not None:
            return None
        angle = self.clamp_aim(angle)
        self.shot = ShotState(
            element=element,
            x=self.shooter_x,
            y=self.shooter_y,
            vx=math.cos(angle) * self.speed,
            vy=math.sin(angle) * self.speed,
        )
        return self.shot

    # ── Flight ───────────────────────────────────────────────────

    def step(self, dt: float) -> Optional[Contact]:
        """Advance the projectile by dt seconds; return the first contact, if any.

        Long frames are split so no sub-step moves further than one
        ray-march step, otherwise a fast shot could pass through a bubble.
        """
        shot = self.shot
        if shot is None or dt <= 0.0:
            return None
        distance = math.hypot(shot.vx, shot.vy) * dt
        max_move = self.board.cell_size * self.march_step
        substeps = max(1, math.ceil(distance / max_move))
        sub_dt = dt / substeps
        for _ in range(substeps):
            contact = self._advance(shot, sub_dt)
            if contact is not None:
                return contact
        return None

    def _advance(self, shot: ShotState, dt: float) -> Optional[Contact]:
        shot.x += shot.vx * dt
        shot.y += shot.vy * dt

        if shot.x < self.left_wall:
            shot.x = self.left_wall
            shot.vx = -shot.vx
        elif shot.x > self.right_wall:
            shot.x = self.right_wall
            shot.vx = -shot.vx

        if shot.y <= self.top_out_y:
            return Contact(target=None)

        hit = self.find_overlap(shot.x, shot.y)
        if hit is not None:
            return Contact(target=hit)
        return None

    def find_overlap(self, x: float, y: float) -> Optional[Cell]:
        """Nearest occupied cell in the 3x3 block around (x, y) within the collision radius."""
        r, c = self.board.world_to_cell(x, y)
        if not self.board.in_bounds(r, c):
            return None
        threshold = self.board.cell_size * self.collision_threshold
        best: Optional[Cell] = None
        best_d = math.inf
        for rr in range(r - 1, r + 2):
            for cc in range(c - 1, c + 2):
                if self.board.get(rr, cc) is None:
                    continue
                bx, by = self.board.cell_to_world(rr, cc)
                d = math.hypot(bx - x, by - y)
                if d <= threshold and d < best_d:
                    best_d = d
                    best = (rr, cc)
        return best

    # ── Resolution ───────────────────────────────────────────────

    def landing_cell(self, target: Optional[Cell], x: float, y: float) -> Cell:
        if target is not None:
            landing = self.board.best_adjacent_empty(target[0], target[1], x, y)
            if landing is not None:
                return landing
        r, c = self.board.clamp_cell(*self.board.world_to_cell(x, y))
        if self.board.is_empty(r, c):
            return r, c
        nearest = self.board.nearest_empty_in_row(r, c)
        if nearest is not None:
            return nearest
        # Full row: the stick overwrites the clamped cell.
        return r, c

    def resolve(self, contact: Contact) -> Resolution:
        """Decide the outcome of the current shot and return to aiming."""
        shot = self.shot
        if shot is None:
            raise RuntimeError("resolve() called with no shot in flight")
        self.shot = None

        target_element: Optional[Element] = None
        if contact.target is not None:
            target = self.board.get(*contact.target)
            if target is not None:
                target_element = target.element
                interaction = classify(shot.element, target.element)
                if interaction is Interaction.KE:
                    return Resolution(
                        outcome=Outcome.KE_REMOVAL,
                        element=shot.element,
                        target=contact.target,
                        target_element=target_element,
                    )
                if interaction is Interaction.SHENG:
                    return Resolution(
                        outcome=Outcome.SHENG_GROWTH,
                        element=shot.element,
                        target=contact.target,
                        target_element=target_element,
                    )

        landing = self.landing_cell(contact.target, shot.x, shot.y)
        overwrote = not self.board.is_empty(*landing)
        if overwrote:
            logger.warning("Shot landing at %s overwrites an existing bubble", landing)
        return Resolution(
            outcome=Outcome.STICK,
            element=shot.element,
            target=contact.target,
            target_element=target_element,
            landing=landing,
            overwrote=overwrote,
            game_over=self.board.is_game_over_row(landing[0]),
        )

    # ── Aim prediction ───────────────────────────────────────────

    def predict(self, angle: float) -> Optional[tuple[int, int, Bubble]]:
        """Ray-march from the shooter and return the first occupied cell crossed."""
        angle = self.clamp_aim(angle)
        step = self.board.cell_size * self.march_step
        dx = math.cos(angle) * step
        dy = math.sin(angle) * step
        x, y = self.shooter_x, self.shooter_y
        left = self.board.origin_x
        right = self.board.origin_x + self.board.width
        for _ in range(self.max_prediction_steps):
            x += dx
            y += dy
            if y < self.board.origin_y:
                return None
            if x < left or x > right:
                return None
            r, c = self.board.world_to_cell(x, y)
            if not self.board.in_bounds(r, c):
                continue
            bubble = self.board.get(r, c)
            if bubble is not None:
                return r, c, bubble
        return None
