"""Turtle graphics engine for the learning-journey visualization.

A single cursor (position, heading, pen, color) moves over a bounded surface
and records the line segments it draws. Segments are append-only within a
drawing session; ``clear()`` discards them and resets the cursor. Every
pattern generator starts with ``clear()``, so one canvas never mixes two
sessions.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field

from devjournal.models import JourneyInput, JourneyStats, JourneyStyle

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = (800, 400)
DEFAULT_COLOR = "#3B82F6"

JOURNEY_COLORS = {
    "journal": "#3B82F6",
    "bugs": "#EF4444",
    "snippets": "#10B981",
    "new_tech": "#F59E0B",
}
TREE_COLORS = ["#10B981", "#3B82F6", "#F59E0B", "#8B5CF6"]

SPIRAL_TURN = 91
TREE_TRUNK = 100
TREE_ANGLE = 30
TREE_SCALE = 0.7
TREE_MAX_DEPTH = 5
TREE_MIN_LENGTH = 10
HEXAGON_SIDE = 60
GEOMETRIC_SLICES = 12
RANDOM_TURN_CHANCE = 0.3
RANDOM_TURN_RANGE = 30
DEFAULT_COMPLEXITY = 5


@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Segment:
    """One drawn line, colored at the time it was drawn."""
    start: Point
    end: Point
    color: str
    width: int = 2

    def to_dict(self) -> dict:
        return {
            "start": [self.start.x, self.start.y],
            "end": [self.end.x, self.end.y],
            "color": self.color,
            "width": self.width,
        }


@dataclass
class TurtleState:
    """Turtle state machine: where the pen is and how it draws."""

    position: Point = field(default_factory=Point)
    heading: float = 0.0
    pen_active: bool = True
    stroke_color: str = DEFAULT_COLOR

    def to_dict(self) -> dict:
        return {
            "position": [self.position.x, self.position.y],
            "heading": self.heading,
            "pen_active": self.pen_active,
            "stroke_color": self.stroke_color,
        }


class TurtleCanvas:
    """A drawing surface with one turtle on it."""

    def __init__(self, width: int = DEFAULT_CANVAS_SIZE[0], height: int = DEFAULT_CANVAS_SIZE[1]):
        self.width = width
        self.height = height
        self.segments: list[Segment] = []
        self.state = self._fresh_state()

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    def _fresh_state(self) -> TurtleState:
        return TurtleState(position=self.center)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self.segments = []
        self.state = self._fresh_state()

    def forward(self, distance: float) -> None:
        start = Point(self.state.position.x, self.state.position.y)
        radians = math.radians(self.state.heading)
        end = Point(
            start.x + math.cos(radians) * distance,
            start.y + math.sin(radians) * distance,
        )
        self.state.position = end
        if self.state.pen_active:
            self.segments.append(Segment(start, Point(end.x, end.y), self.state.stroke_color))

    def turn(self, angle: float) -> None:
        self.state.heading += angle

    def pen_up(self) -> None:
        self.state.pen_active = False

    def pen_down(self) -> None:
        self.state.pen_active = True

    def set_color(self, color: str) -> None:
        self.state.stroke_color = color

    def move_to(self, x: float, y: float) -> None:
        """Relocate the cursor. Never draws, whatever the pen state."""
        self.state.position = Point(x, y)

    def set_heading(self, heading: float) -> None:
        self.state.heading = heading

    # ------------------------------------------------------------------
    # Pattern generators
    # ------------------------------------------------------------------

    def draw_spiral_pattern(self, iterations: int = 100) -> None:
        """Expanding square-ish spiral; one segment per iteration."""
        self.clear()
        self.set_color(DEFAULT_COLOR)
        for i in range(iterations):
            self.forward(i * 0.5)
            self.turn(SPIRAL_TURN)

    def draw_tree_pattern(self, length: float = TREE_TRUNK) -> None:
        self.clear()
        self._draw_branch(length, 0)

    def _draw_branch(self, length: float, depth: int) -> None:
        if depth > TREE_MAX_DEPTH or length < TREE_MIN_LENGTH:
            return

        self.set_color(TREE_COLORS[depth % len(TREE_COLORS)])
        self.forward(length)

        # right
        self.turn(TREE_ANGLE)
        self._draw_branch(length * TREE_SCALE, depth + 1)
        self.turn(-TREE_ANGLE)

        # left
        self.turn(-TREE_ANGLE)
        self._draw_branch(length * TREE_SCALE, depth + 1)
        self.turn(TREE_ANGLE)

        # walk back to where this branch started
        self.turn(180)
        self.forward(length)
        self.turn(180)

    def draw_geometric_pattern(self) -> None:
        """Twelve hexagons fanned around the center, 30 degrees apart."""
        self.clear()
        center = self.center
        for i in range(GEOMETRIC_SLICES):
            self.pen_up()
            self.move_to(center.x, center.y)
            self.set_heading(i * 30)
            self.pen_down()

            self.set_color(f"hsl({i * 30}, 70%, 60%)")
            for _ in range(6):
                self.forward(HEXAGON_SIDE)
                self.turn(60)

    def draw_learning_journey(self, data: JourneyInput, rng: random.Random | None = None) -> None:
        """Spiral of activities followed by one small branch per technology.

        ``rng`` drives the occasional random wobble; pass a seeded
        ``random.Random`` for a reproducible drawing.
        """
        rng = rng or random.Random()
        self.clear()

        center = self.center
        self.move_to(center.x, center.y)

        radius = 5.0
        for i in range(data.total):
            if i < data.journal_entries:
                self.set_color(JOURNEY_COLORS["journal"])
            elif i < data.journal_entries + data.bugs_resolved:
                self.set_color(JOURNEY_COLORS["bugs"])
            else:
                self.set_color(JOURNEY_COLORS["snippets"])

            self.forward(radius * 0.3)
            self.turn(30 + i * 2)
            radius += 0.8

            if rng.random() < RANDOM_TURN_CHANCE:
                self.turn(rng.uniform(-RANDOM_TURN_RANGE, RANDOM_TURN_RANGE))

        count = len(data.technologies)
        for index, _tech in enumerate(data.technologies):
            self.pen_up()
            angle = math.radians(index * 360 / count)
            branch_radius = 50 + index * 10
            self.move_to(
                center.x + math.cos(angle) * branch_radius,
                center.y + math.sin(angle) * branch_radius,
            )
            self.pen_down()
            self.set_color(JOURNEY_COLORS["new_tech"])

            for _ in range(3):
                self.forward(15)
                self.turn(45)

    def draw_style(
        self,
        style: JourneyStyle | str,
        data: JourneyInput,
        complexity: int = DEFAULT_COMPLEXITY,
        rng: random.Random | None = None,
    ) -> None:
        """Dispatch one of the visualization styles offered to the user."""
        style = JourneyStyle(style)
        if style is JourneyStyle.TREE:
            self.draw_tree_pattern()
        elif style is JourneyStyle.GEOMETRIC:
            self.draw_geometric_pattern()
        elif style is JourneyStyle.ORGANIC:
            self.draw_spiral_pattern(complexity * 20)
        else:
            self.draw_learning_journey(data, rng=rng)
        logger.info("Drew %s pattern: %d segments", style.value, len(self.segments))

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "state": self.state.to_dict(),
            "segments": [s.to_dict() for s in self.segments],
        }


def journey_stats(data: JourneyInput) -> JourneyStats:
    """Distance, turn and peak figures shown beside the journey drawing."""
    total = data.total
    return JourneyStats(
        distance=int(math.floor(total * 12.5 + 0.5)),
        turns=int(math.floor(total * 1.8 + 0.5)),
        peaks=len(data.technologies),
    )
