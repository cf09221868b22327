"""A small bouncing-balls simulation drawn onto a canvas-like context."""

from __future__ import annotations

import math
import random as _random
from dataclasses import dataclass
from typing import Protocol


class Canvas(Protocol):
    """The drawing calls a context must offer."""

    def begin_path(self) -> None: ...

    def set_fill_style(self, style: str) -> None: ...

    def arc(self, x: float, y: float, radius: float, start: float, end: float) -> None: ...

    def fill(self) -> None: ...

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...


@dataclass
class Ball:
    """A ball with a position, a velocity, a radius and a fill colour."""

    x: float
    y: float
    dx: float
    dy: float
    radius: float = 10.0
    color: str = "rgb(0, 0, 0)"

    @classmethod
    def random(
        cls, width: float, height: float, rng: _random.Random | None = None
    ) -> "Ball":
        """Place a ball at a random spot inside the area with a random velocity and colour."""
        rng = rng or _random.Random()
        x = rng.random() * width
        y = rng.random() * height
        dx = (rng.random() - 0.5) * 4.0
        dy = (rng.random() - 0.5) * 4.0
        red, green, blue = (int(rng.random() * 255.0) for _ in range(3))
        return cls(x=x, y=y, dx=dx, dy=dy, radius=10.0, color=f"rgb({red}, {green}, {blue})")

    def update(self, width: float, height: float) -> None:
        """Bounce off the edges of the area, then move one step."""
        if self.x + self.radius > width or self.x - self.radius < 0.0:
            self.dx = -self.dx
        if self.y + self.radius > height or self.y - self.radius < 0.0:
            self.dy = -self.dy
        self.x += self.dx
        self.y += self.dy

    def draw(self, ctx: Canvas) -> None:
        """Draw the ball as a filled circle."""
        ctx.begin_path()
        ctx.set_fill_style(self.color)
        ctx.arc(self.x, self.y, self.radius, 0.0, math.pi * 2.0)
        ctx.fill()


class World:
    """A rectangular area holding a set of balls."""

    def __init__(
        self,
        width: float,
        height: float,
        count: int,
        rng: _random.Random | None = None,
    ) -> None:
        rng = rng or _random.Random()
        self.width = width
        self.height = height
        self.balls = [Ball.random(width, height, rng) for _ in range(count)]

    def update(self) -> None:
        """Advance every ball one step."""
        for ball in self.balls:
            ball.update(self.width, self.height)

    def draw(self, ctx: Canvas) -> None:
        """Clear the area and draw every ball."""
        ctx.clear_rect(0.0, 0.0, self.width, self.height)
        for ball in self.balls:
            ball.draw(ctx)