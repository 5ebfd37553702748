# unilager

unilager is a small framework for writing interactive programs in a
unidirectional data-flow style. It has these modules:

- `unilager.store`: `Store` holds the application model. Each action goes
  through a reducer, and watchers are told when a new model is published.
- `unilager.deps`: `Deps` is an immutable bag of keyed dependencies. Each
  dependency can be required, optional or provided through a callable.
- `unilager.context`: `Context` is handed to effects. Through it an effect can
  dispatch actions, reach the event loop and read dependencies.
- `unilager.event_loops`: event loops that decide when posted work runs.
- `unilager.lenses`: composable getter/setter pairs.
- `unilager.snake`: the model and reducer of a snake game, written as an
  example.

The package has no runtime dependencies.

## Installing

```
pip install unilager
```

## Stores

```python
from unilager.event_loops import ManualEventLoop
from unilager.store import make_store, with_reducer

def reducer(count, action):
    return count + 1 if action == "inc" else count

store = make_store(0, ManualEventLoop(), with_reducer(reducer))
unwatch = store.watch(lambda value: print("now", value))
store.dispatch("inc")   # prints "now 1"
print(store.get())      # 1
unwatch()
```

`make_store(init, loop, *enhancers, tag=None)` builds a `Store`. Enhancers are
applied outermost first:

- `with_reducer(reducer)` replaces the reducer. Without it, `default_reducer`
  calls the model's own `update(action)` method.
- `with_deps(*values)` adds dependencies. Values that are `Deps` bags are
  merged in as they are. Other values are keyed by their type.
- `with_tags(*tags)` adds `Tag` values. `with_futures` is
  `with_tags(Tag.ENABLE_FUTURES)`.

By default, the store publishes each new model and notifies watchers after
every action. If `Tag.TRANSACTIONAL` is among the tags, a new model becomes
visible only when `store.commit()` is called. Watchers are called only when
the model compares unequal to the previous one.

A reducer asks for a side effect by returning `(model, effect)`, where
`effect` is a callable or `None`. The effect is posted to the event loop and
called with the store's `Context`. When futures are enabled, `dispatch`
returns a `concurrent.futures.Future`. It completes once the action and its
effect are done. If the effect itself returns a `Future`, the dispatch future
waits for that one too. Without futures enabled, `dispatch` returns `None`.

## Contexts

`Context(dispatcher, loop, deps)` provides these methods:

- `dispatch(action)` sends an action through the dispatcher. It raises
  `TypeError` if the context has no dispatcher.
- `get(key)` and `has(key)` read dependencies.
- `derive(converter, specs)` returns a narrower context. Actions dispatched
  through it pass through `converter` first. Its dependencies are projected
  onto `specs`.

## Dependencies

```python
from unilager.deps import Deps, MissingDependencyError, key, make_deps, opt, val

bag = make_deps(42, "hello")
bag.get(int), bag.get(str)          # (42, 'hello')

specs = [key("db", str), opt("logger")]
full = Deps.with_values(specs, "main-db", None)
full.has("logger")                  # False; full.get("logger") raises MissingDependencyError

narrow = full.project(key("db", str))
narrow.get("db")                    # 'main-db'
```

A specification is built with these functions:

- `val(key)`: a required dependency.
- `opt(spec)`: an optional dependency. `None` given to `with_values` means
  the dependency is absent.
- `fn(spec)`: the stored value is a callable, called on every `get`.
- `key(tag, spec)`: the dependency is looked up under `tag`.

Duplicate keys raise `ValueError`. `project` raises `MissingDependencyError`
if the target requires a dependency that the source does not require.
`merge(other)` combines two bags, and `other` wins where keys clash. The
module-level functions `get`, `has` and `is_deps` are also available.

## Event loops

| class | `post(fn)` | `run_async(fn)` | `finish` / `pause` / `resume` |
|---|---|---|---|
| `ManualEventLoop` | runs now; work posted from inside running work is queued and run afterwards | raises `UnsupportedOperationError` | record the request in `finished` / `paused` |
| `QueueEventLoop` | queued until `step()` | raises | raise `UnsupportedOperationError` |
| `SafeQueueEventLoop` | queued from any thread; `step()` runs it on the owning thread (`adopt()` changes the owner) | raises | raise |
| `ExecutorEventLoop(executor, stop=None)` | submitted to the executor, which should have a single worker | runs on a new daemon thread | `finish` calls `stop`; `pause` / `resume` record `paused` |

## Lenses

```python
from unilager.lenses import getset, over, set, view

first = getset(lambda p: p[0], lambda p, v: (v, p[1]))
view(first, (1, 2))                   # 1
set(first, (1, 2), 9)                 # (9, 2)
over(first, (1, 2), lambda v: v + 1)  # (2, 2)
```

`Lens.compose(other)` focuses through one lens and then through `other`.

## The snake model

```python
from unilager.event_loops import ManualEventLoop
from unilager.snake import Action, make_initial
from unilager.store import make_store

store = make_store(make_initial(seed=1), ManualEventLoop())
store.dispatch(Action.GO_UP)
store.dispatch(Action.TICK)
store.get().game.snake.body
```

The board is 25 × 25. The snake starts as three cells in the middle, heading
right. Steering actions only turn across the current axis, so the snake
cannot reverse. On a `TICK` the snake moves one cell forward. The game is
over if the head leaves the board or hits the body. If the cell the tail just
left held the apple, the snake grows and a new apple is drawn. `RESET` starts
a new game. The random generator's state is kept in `AppModel`, so
`update(model, action)` is deterministic for a given seed.

## What is not included

The package has no observable cursors, readers or state objects beyond
`Store.watch`. It has no command-line program. It has no screen or user
interface: the snake game is only a model and a reducer, with nothing that
draws it or reads keys.

## Running the tests

```
pip install -e .[test]
pytest
```