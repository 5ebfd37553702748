from dataclasses import replace

import pytest

from unilager.event_loops import ManualEventLoop
from unilager.snake import (
    Action,
    AppModel,
    Direction,
    GameModel,
    SnakeModel,
    make_initial,
    random_apple_pos,
    update,
)
from unilager.store import make_store


def with_snake(model, body, direction, apple=None):
    game = replace(
        model.game,
        snake=SnakeModel(tuple(body), direction),
        apple_pos=apple if apple is not None else model.game.apple_pos,
    )
    return replace(model, game=game)


def in_bounds(p):
    return 0 <= p[0] < GameModel.WIDTH and 0 <= p[1] < GameModel.HEIGHT


def test_initial_game_layout():
    model = make_initial(1)
    body = model.game.snake.body
    head = (GameModel.WIDTH // 2, GameModel.HEIGHT // 2)
    assert body[0] == head
    assert len(body) == 3
    assert [p[1] for p in body] == [head[1]] * 3
    assert model.game.snake.dir is Direction.RIGHT
    assert model.game.over is False
    assert in_bounds(model.game.apple_pos)


def test_initial_is_deterministic_per_seed():
    first = make_initial(7)
    assert first.game.snake.body == ((12, 12), (11, 12), (10, 12))
    assert make_initial(7).game.apple_pos == first.game.apple_pos


def test_random_apple_pos_draws_x_then_y():
    draws = iter([3, 9])
    assert random_apple_pos(lambda: next(draws)) == (3, 9)


def test_turn_across_axis():
    model = make_initial(1)
    assert update(model, Action.GO_UP).game.snake.dir is Direction.UP
    assert update(model, Action.GO_DOWN).game.snake.dir is Direction.DOWN


def test_reverse_turn_is_ignored():
    model = make_initial(1)
    assert update(model, Action.GO_LEFT).game.snake.dir is Direction.RIGHT
    up = update(model, Action.GO_UP)
    assert update(up, Action.GO_DOWN).game.snake.dir is Direction.UP


def test_tick_moves_forward_keeping_length():
    model = with_snake(make_initial(2), [(5, 5), (4, 5), (3, 5)], Direction.RIGHT, apple=(0, 0))
    after = update(model, Action.TICK)
    body = after.game.snake.body
    assert body[0] == (6, 5)
    assert body[1:] == ((5, 5), (4, 5))
    assert after.game.over is False


def test_tick_does_not_mutate_original():
    model = make_initial(3)
    before = model.game.snake.body
    update(model, Action.TICK)
    assert model.game.snake.body == before


def test_tick_into_wall_ends_game():
    model = with_snake(make_initial(1), [(0, 4), (1, 4), (2, 4)], Direction.LEFT)
    after = update(model, Action.TICK)
    assert after.game.over is True
    assert after.game.snake.body == model.game.snake.body


def test_tick_into_self_ends_game():
    body = [(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)]
    model = with_snake(make_initial(1), body, Direction.LEFT, apple=(0, 0))
    assert update(model, Action.TICK).game.over is True


def test_eating_apple_grows_snake():
    body = [(5, 5), (4, 5), (3, 5)]
    model = with_snake(make_initial(4), body, Direction.RIGHT, apple=(3, 5))
    after = update(model, Action.TICK)
    new_body = after.game.snake.body
    assert len(new_body) == len(body) + 1
    assert new_body[-1] == (3, 5)
    assert in_bounds(after.game.apple_pos)
    assert after.rng_state != model.rng_state


def test_reset_starts_fresh_game():
    model = with_snake(make_initial(5), [(0, 0), (1, 0), (2, 0)], Direction.LEFT)
    model = update(model, Action.TICK)
    assert model.game.over is True
    fresh = update(model, Action.RESET)
    assert fresh.game.over is False
    assert fresh.game.snake == make_initial(5).game.snake


def test_unknown_action_raises():
    with pytest.raises(ValueError):
        update(make_initial(1), "jump")


def test_store_drives_game_with_default_reducer():
    initial = make_initial(6)
    store = make_store(initial, ManualEventLoop())
    store.dispatch(Action.TICK)
    game = store.get().game
    assert isinstance(store.get(), AppModel)
    assert game.snake.body[1] == initial.game.snake.body[0]
    assert game.snake.body[0][0] == initial.game.snake.body[0][0] + 1