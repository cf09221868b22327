import math
import random
import re

import pytest

from cosmiqnotz.balls import Ball, World


class RecordingCanvas:
    def __init__(self):
        self.calls = []

    def begin_path(self):
        self.calls.append(("begin_path",))

    def set_fill_style(self, style):
        self.calls.append(("set_fill_style", style))

    def arc(self, x, y, radius, start, end):
        self.calls.append(("arc", x, y, radius, start, end))

    def fill(self):
        self.calls.append(("fill",))

    def clear_rect(self, x, y, width, height):
        self.calls.append(("clear_rect", x, y, width, height))


COLOR = re.compile(r"^rgb\((\d+), (\d+), (\d+)\)$")


def test_random_ball_within_bounds():
    rng = random.Random(1)
    for _ in range(200):
        ball = Ball.random(300.0, 200.0, rng)
        assert 0.0 <= ball.x < 300.0
        assert 0.0 <= ball.y < 200.0
        assert -2.0 <= ball.dx < 2.0
        assert -2.0 <= ball.dy < 2.0
        assert ball.radius == 10.0
        match = COLOR.match(ball.color)
        assert match is not None
        assert all(0 <= int(part) <= 254 for part in match.groups())


def test_random_is_reproducible_with_seed():
    first = Ball.random(100, 100, random.Random(7))
    second = Ball.random(100, 100, random.Random(7))
    assert 0.0 <= first.x < 100.0
    assert 0.0 <= first.y < 100.0
    assert (first.x, first.y, first.dx, first.dy, first.color) == (
        second.x,
        second.y,
        second.dx,
        second.dy,
        second.color,
    )


def test_update_moves_inside():
    ball = Ball(x=50.0, y=50.0, dx=1.5, dy=-0.5)
    ball.update(100.0, 100.0)
    assert (ball.x, ball.y) == (51.5, 49.5)
    assert (ball.dx, ball.dy) == (1.5, -0.5)


def test_update_bounces_off_left_and_bottom():
    ball = Ball(x=5.0, y=95.0, dx=-1.0, dy=2.0)
    ball.update(100.0, 100.0)
    assert (ball.dx, ball.dy) == (1.0, -2.0)
    assert (ball.x, ball.y) == (6.0, 93.0)


def test_update_bounces_off_right_and_top():
    ball = Ball(x=95.0, y=5.0, dx=1.0, dy=-1.0)
    ball.update(100.0, 100.0)
    assert (ball.dx, ball.dy) == (-1.0, 1.0)


def test_ball_draw_calls():
    ball = Ball(x=1.0, y=2.0, dx=0.0, dy=0.0, color="rgb(1, 2, 3)")
    canvas = RecordingCanvas()
    ball.draw(canvas)
    assert canvas.calls == [
        ("begin_path",),
        ("set_fill_style", "rgb(1, 2, 3)"),
        ("arc", 1.0, 2.0, 10.0, 0.0, math.pi * 2.0),
        ("fill",),
    ]


@pytest.mark.parametrize("count", [0, 1, 5])
def test_world_holds_count_balls(count):
    world = World(200.0, 100.0, count, random.Random(3))
    assert len(world.balls) == count


def test_world_update_moves_every_ball():
    world = World(500.0, 500.0, 4, random.Random(2))
    for ball in world.balls:
        ball.x, ball.y = 250.0, 250.0
    world.update()
    for ball in world.balls:
        assert ball.x == pytest.approx(250.0 + ball.dx)
        assert ball.y == pytest.approx(250.0 + ball.dy)


def test_world_stays_near_area_over_time():
    world = World(200.0, 150.0, 10, random.Random(5))
    for _ in range(2000):
        world.update()
    for ball in world.balls:
        assert -ball.radius - 4 <= ball.x <= 200.0 + ball.radius + 4
        assert -ball.radius - 4 <= ball.y <= 150.0 + ball.radius + 4


def test_world_draw_clears_then_draws_each_ball():
    world = World(80.0, 60.0, 3, random.Random(9))
    canvas = RecordingCanvas()
    world.draw(canvas)
    assert canvas.calls[0] == ("clear_rect", 0.0, 0.0, 80.0, 60.0)
    assert len(canvas.calls) == 1 + 4 * 3
    assert [c[0] for c in canvas.calls].count("arc") == 3