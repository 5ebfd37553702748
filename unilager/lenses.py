"""Composable lenses for focusing on parts of immutable values."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Lens:
    """A getter paired with a setter that returns an updated whole."""

    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], Any]

    def compose(self, other: Lens) -> Lens:
        """Focus through this lens first and then through ``other``."""
        outer, inner = self, other

        def get(whole: Any) -> Any:
            return inner.getter(outer.getter(whole))

        def put(whole: Any, value: Any) -> Any:
            return outer.setter(whole, inner.setter(outer.getter(whole), value))

        return Lens(get, put)


def view(lens: Lens, x: Any) -> Any:
    """Return the part of ``x`` that ``lens`` focuses on."""
    return lens.getter(x)


def set(lens: Lens, x: Any, v: Any) -> Any:  # noqa: A001
    """Return ``x`` with the focused part replaced by ``v``."""
    return lens.setter(x, v)


def over(lens: Lens, x: Any, fn: Callable[[Any], Any]) -> Any:
    """Return ``x`` with ``fn`` applied to the focused part."""
    return lens.setter(x, fn(lens.getter(x)))


def getset(getter: Callable[[Any], Any], setter: Callable[[Any, Any], Any]) -> Lens:
    """Build a lens from a getter and a setter ``(whole, part) -> whole``."""
    return Lens(getter, setter)