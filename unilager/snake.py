"""Model and reducer of a snake game."""

from __future__ import annotations

import random as _random
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar

Point = tuple[int, int]


class Action(Enum):
    GO_LEFT = "go_left"
    GO_RIGHT = "go_right"
    GO_UP = "go_up"
    GO_DOWN = "go_down"
    RESET = "reset"
    TICK = "tick"


class Direction(Enum):
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


@dataclass(frozen=True)
class SnakeModel:
    body: tuple[Point, ...] = ()
    dir: Direction = Direction.LEFT


@dataclass(frozen=True)
class GameModel:
    snake: SnakeModel
    apple_pos: Point = (0, 0)
    over: bool = False

    WIDTH: ClassVar[int] = 25
    HEIGHT: ClassVar[int] = 25


@dataclass(frozen=True)
class AppModel:
    """The game together with the state of its random generator."""

    rng_state: Any
    game: GameModel

    def update(self, action: Action) -> AppModel:
        return update(self, action)


_VERTICAL = {Direction.UP, Direction.DOWN}
_HORIZONTAL = {Direction.LEFT, Direction.RIGHT}

# Turning only happens across the current axis; reversing is ignored.
_TURNS = {
    Action.GO_LEFT: (Direction.LEFT, _VERTICAL),
    Action.GO_RIGHT: (Direction.RIGHT, _VERTICAL),
    Action.GO_UP: (Direction.UP, _HORIZONTAL),
    Action.GO_DOWN: (Direction.DOWN, _HORIZONTAL),
}

_STEPS = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


def random_apple_pos(random: Callable[[], int]) -> Point:
    """Pick an apple position from two draws of ``random``."""
    return (random(), random())


def _step(pos: Point, direction: Direction) -> Point:
    dx, dy = _STEPS[direction]
    return (pos[0] + dx, pos[1] + dy)


def _move_forward(body: tuple[Point, ...], direction: Direction) -> tuple[Point, ...]:
    return (_step(body[0], direction),) + body[:-1]


def _in_bounds(p: Point) -> bool:
    x, y = p
    return 0 <= x < GameModel.WIDTH and 0 <= y < GameModel.HEIGHT


def _make_game(random: Callable[[], int]) -> GameModel:
    hx, hy = GameModel.WIDTH // 2, GameModel.HEIGHT // 2
    body = ((hx, hy), (hx - 1, hy), (hx - 2, hy))
    return GameModel(SnakeModel(body, Direction.RIGHT), random_apple_pos(random), False)


def _drawer(rng: _random.Random) -> Callable[[], int]:
    return lambda: rng.randint(0, GameModel.WIDTH - 1)


def make_initial(seed: int) -> AppModel:
    """Start a new game whose randomness is seeded with ``seed``."""
    rng = _random.Random(seed)
    game = _make_game(_drawer(rng))
    return AppModel(rng.getstate(), game)


def _tick(model: AppModel) -> AppModel:
    game = model.game
    prev_back = game.snake.body[-1]
    body = _move_forward(game.snake.body, game.snake.dir)
    head = body[0]
    if head in body[1:] or not _in_bounds(head):
        return replace(model, game=replace(game, over=True))
    rng_state = model.rng_state
    apple = game.apple_pos
    if prev_back == apple:
        body = body + (prev_back,)
        rng = _random.Random()
        rng.setstate(rng_state)
        apple = random_apple_pos(_drawer(rng))
        rng_state = rng.getstate()
    snake = replace(game.snake, body=body)
    return AppModel(rng_state, replace(game, snake=snake, apple_pos=apple))


def update(model: AppModel, action: Action) -> AppModel:
    """Return the model after ``action``."""
    if action in _TURNS:
        target, turnable = _TURNS[action]
        snake = model.game.snake
        if snake.dir in turnable:
            snake = replace(snake, dir=target)
        return replace(model, game=replace(model.game, snake=snake))
    if action is Action.TICK:
        return _tick(model)
    if action is Action.RESET:
        rng = _random.Random()
        rng.setstate(model.rng_state)
        game = _make_game(_drawer(rng))
        return AppModel(rng.getstate(), game)
    raise ValueError(f"unknown action {action!r}")