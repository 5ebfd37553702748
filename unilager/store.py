"""A store that holds a data model and applies actions to it through a reducer."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Future
from enum import Enum
from typing import Any

from unilager.context import Context, EventLoop
from unilager.deps import Deps, make_deps

Reducer = Callable[[Any, Any], Any]
Effect = Callable[[Context], Any]
StoreCreator = Callable[[Any, Reducer, EventLoop, Deps, frozenset], "Store"]
Enhancer = Callable[[StoreCreator], StoreCreator]


class Tag(Enum):
    """Flags that change how a store publishes changes."""

    AUTOMATIC = "automatic"
    TRANSACTIONAL = "transactional"
    ENABLE_FUTURES = "enable_futures"


def _split_result(result: Any) -> tuple[Any, Effect | None]:
    """Separate a reducer result into the new model and an optional effect.

    A reducer asks for an effect by returning a pair whose second element is
    a callable (or ``None`` for no effect).
    """
    if (
        isinstance(result, tuple)
        and len(result) == 2
        and (result[1] is None or callable(result[1]))
    ):
        return result[0], result[1]
    return result, None


class Store:
    """Holds the model, runs actions through the reducer and notifies watchers.

    With ``Tag.TRANSACTIONAL`` among the tags, new models only become visible
    after ``commit``; otherwise they are published after every action.
    """

    def __init__(
        self,
        init: Any,
        reducer: Reducer,
        loop: EventLoop,
        deps: Deps | None = None,
        tags: Iterable[Tag] = (),
    ) -> None:
        self._current = init
        self._last = init
        self._needs_send_down = False
        self._needs_notify = False
        self._watchers: list[Callable[[Any], object]] = []
        self._reducer = reducer
        self._loop = loop
        self._tags = frozenset(tags)
        self._transactional = Tag.TRANSACTIONAL in self._tags
        self._futures = Tag.ENABLE_FUTURES in self._tags
        self._context = Context(self._dispatch, loop, deps if deps is not None else Deps())

    @property
    def context(self) -> Context:
        """The context handed to effects; it dispatches into this store."""
        return self._context

    @property
    def tags(self) -> frozenset:
        return self._tags

    def dispatch(self, action: Any) -> Future | None:
        """Schedule ``action`` on the event loop.

        Returns a future completed once the action and its effect are done when
        futures are enabled, ``None`` otherwise.
        """
        return self._dispatch(action)

    def get(self) -> Any:
        """Return the last published model."""
        return self._last

    def watch(self, callback: Callable[[Any], object]) -> Callable[[], None]:
        """Call ``callback`` with every newly published model.

        Returns a function that stops the watching.
        """
        self._watchers.append(callback)

        def unwatch() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unwatch

    def commit(self) -> None:
        """Publish the pending model and notify watchers."""
        self._send_down()
        self._notify()

    def _push_down(self, value: Any) -> None:
        if value != self._current:
            self._current = value
            self._needs_send_down = True

    def _send_down(self) -> None:
        if self._needs_send_down:
            self._last = self._current
            self._needs_send_down = False
            self._needs_notify = True

    def _notify(self) -> None:
        if self._needs_notify:
            self._needs_notify = False
            for watcher in list(self._watchers):
                watcher(self._last)

    def _publish(self) -> None:
        if not self._transactional:
            self._send_down()
            self._notify()

    def _dispatch(self, action: Any) -> Future | None:
        future: Future | None = Future() if self._futures else None

        def resolve(*_: Any) -> None:
            if future is not None and not future.done():
                future.set_result(None)

        def run_effect(effect: Effect) -> None:
            self._publish()
            outcome = effect(self._context)
            if future is None:
                return
            if isinstance(outcome, Future):
                outcome.add_done_callback(resolve)
            else:
                resolve()

        def publish_and_resolve() -> None:
            self._publish()
            resolve()

        def run() -> None:
            model, effect = _split_result(self._reducer(self._current, action))
            self._push_down(model)
            if effect is not None:
                self._loop.post(lambda: run_effect(effect))
            elif not self._transactional:
                self._loop.post(publish_and_resolve)
            else:
                resolve()

        self._loop.post(run)
        return future

    def __repr__(self) -> str:
        return f"Store({self._last!r})"


def default_reducer(model: Any, action: Any) -> Any:
    """Reduce by calling the model's own ``update`` method."""
    update = getattr(model, "update", None)
    if not callable(update):
        raise TypeError(f"{type(model).__name__} has no update() method to reduce with")
    return update(action)


def with_tags(*args: Tag) -> Enhancer:
    """Enhancer that adds ``args`` to the store's tags."""
    extra = frozenset(args)

    def enhancer(next_creator: StoreCreator) -> StoreCreator:
        def creator(model, reducer, loop, deps, tags):
            return next_creator(model, reducer, loop, deps, frozenset(tags) | extra)

        return creator

    return enhancer


with_futures = with_tags(Tag.ENABLE_FUTURES)


def with_deps(*args: Any) -> Enhancer:
    """Enhancer that adds dependencies to the store.

    ``Deps`` arguments are merged as they are; other values are keyed by type.
    """
    bags = [a for a in args if isinstance(a, Deps)]
    values = [a for a in args if not isinstance(a, Deps)]
    new_deps = make_deps(*values)
    for bag in bags:
        new_deps = new_deps.merge(bag)

    def enhancer(next_creator: StoreCreator) -> StoreCreator:
        def creator(model, reducer, loop, deps, tags):
            return next_creator(model, reducer, loop, deps.merge(new_deps), tags)

        return creator

    return enhancer


def with_reducer(reducer: Reducer) -> Enhancer:
    """Enhancer that replaces the reducer used by the store."""

    def enhancer(next_creator: StoreCreator) -> StoreCreator:
        def creator(model, _old_reducer, loop, deps, tags):
            return next_creator(model, reducer, loop, deps, tags)

        return creator

    return enhancer


def make_store(init: Any, loop: EventLoop, *args: Enhancer, tag: Tag | None = None) -> Store:
    """Build a store from an initial model, an event loop and enhancers.

    Enhancers apply outermost first. ``tag`` may be ``Tag.TRANSACTIONAL`` to
    require explicit commits; by default changes are published automatically.
    """

    def base(model, reducer, loop_, deps, tags):
        return Store(model, reducer, loop_, deps, tags)

    creator: StoreCreator = base
    for enhancer in reversed(args):
        creator = enhancer(creator)
    tags = frozenset() if tag is None else frozenset({tag})
    return creator(init, default_reducer, loop, Deps(), tags)