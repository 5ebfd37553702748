"""Context handed to effects: dispatching actions, the event loop and deps."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from unilager.deps import Deps


@runtime_checkable
class EventLoop(Protocol):
    """What a context needs from an event loop."""

    def post(self, fn: Callable[[], object]) -> None: ...

    def run_async(self, fn: Callable[[], object]) -> None: ...

    def finish(self) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...


@dataclass(frozen=True)
class Context:
    """Lets effects dispatch actions, control the event loop and read deps.

    A context without a dispatcher only provides dependencies and the loop.
    """

    dispatcher: Callable[[Any], Any] | None = None
    loop: EventLoop | None = None
    deps: Deps = field(default_factory=Deps)

    def dispatch(self, action: Any) -> Any:
        """Send ``action`` to the store; returns what the dispatcher returns."""
        if self.dispatcher is None:
            raise TypeError("this context cannot dispatch actions")
        return self.dispatcher(action)

    def derive(
        self,
        converter: Callable[[Any], Any] | None = None,
        specs: Iterable[Any] | None = None,
    ) -> Context:
        """Return a narrower context.

        Actions dispatched through it are passed through ``converter`` first;
        its dependencies are this context's projected onto ``specs``.
        """
        dispatcher = self.dispatcher
        if converter is not None and dispatcher is not None:
            inner = dispatcher

            def dispatcher(action: Any) -> Any:
                return inner(converter(action))

        deps = self.deps if specs is None else self.deps.project(*specs)
        return Context(dispatcher, self.loop, deps)

    def get(self, key: Hashable) -> Any:
        """Return the dependency under ``key``."""
        return self.deps.get(key)

    def has(self, key: Hashable) -> bool:
        """Whether the dependency under ``key`` is available."""
        return self.deps.has(key)