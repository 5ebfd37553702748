"""Bags of keyed dependencies that convert structurally between each other."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, replace
from typing import Any


class MissingDependencyError(RuntimeError):
    """A dependency was requested or required but is not available."""


@dataclass(frozen=True)
class Spec:
    """Describes one dependency: the key it is found under and how it is held.

    ``required`` is false for optional dependencies, which may be absent.
    ``provided`` is true when the stored value is a callable producing the
    dependency on every access.
    """

    key: Hashable
    required: bool = True
    provided: bool = False


_MISSING = object()


def _to_spec(spec_or_key: Any) -> Spec:
    return spec_or_key if isinstance(spec_or_key, Spec) else val(spec_or_key)


def val(key: Hashable) -> Spec:
    """Specify a required dependency stored under ``key``."""
    if isinstance(key, Spec):
        raise TypeError("val() must be the innermost descriptor")
    return Spec(key)


def opt(spec: Any) -> Spec:
    """Make a specification (or plain key) optional."""
    return replace(_to_spec(spec), required=False)


def fn(spec: Any) -> Spec:
    """Make a specification (or plain key) provided through a callable."""
    return replace(_to_spec(spec), provided=True)


def key(tag: Hashable, spec: Any) -> Spec:
    """Associate a specification (or plain key) with the lookup key ``tag``."""
    if isinstance(tag, Spec):
        raise TypeError("a key tag cannot be a specification")
    return replace(_to_spec(spec), key=tag)


def _check_unique(specs: Iterable[Spec]) -> None:
    seen: set = set()
    for spec in specs:
        if spec.key in seen:
            raise ValueError(
                f"duplicate dependency key {spec.key!r}; use key() to disambiguate"
            )
        seen.add(spec.key)


def _convert(source: tuple[Spec, Any] | None, target: Spec) -> Any:
    if source is None:
        return _MISSING
    source_spec, stored = source
    if stored is _MISSING:
        return _MISSING
    if source_spec.provided and not target.provided:
        return stored()
    if target.provided and not source_spec.provided:
        raise TypeError(
            f"dependency {target.key!r} must be provided by a callable in the source"
        )
    return stored


class Deps:
    """An immutable bag of dependencies looked up by key.

    A bag can be projected onto another set of specifications as long as every
    dependency the target requires is required by this bag too.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[Hashable, tuple[Spec, Any]] = {}

    @classmethod
    def _from_entries(cls, entries: dict[Hashable, tuple[Spec, Any]]) -> Deps:
        deps = cls.__new__(cls)
        deps._entries = dict(entries)
        return deps

    @classmethod
    def with_values(cls, specs: Iterable[Any], *args: Any) -> Deps:
        """Build a bag pairing each specification with the value in the same position.

        For optional dependencies ``None`` means the dependency is absent.
        """
        spec_list = [_to_spec(s) for s in specs]
        if len(spec_list) != len(args):
            raise TypeError("a value must be provided for each specified dependency")
        _check_unique(spec_list)
        entries: dict[Hashable, tuple[Spec, Any]] = {}
        for spec, value in zip(spec_list, args):
            if not spec.required and value is None:
                value = _MISSING
            elif spec.provided and not callable(value):
                raise TypeError(f"dependency {spec.key!r} must be given as a callable")
            entries[spec.key] = (spec, value)
        return cls._from_entries(entries)

    def project(self, *args: Any) -> Deps:
        """Return a bag with the given specifications, picking values from this one."""
        targets = [_to_spec(s) for s in args]
        _check_unique(targets)
        entries: dict[Hashable, tuple[Spec, Any]] = {}
        for spec in targets:
            source = self._entries.get(spec.key)
            if spec.required and (source is None or not source[0].required):
                raise MissingDependencyError(
                    f"required dependency {spec.key!r} is not required by the source"
                )
            entries[spec.key] = (spec, _convert(source, spec))
        return Deps._from_entries(entries)

    def _entry(self, key: Hashable) -> tuple[Spec, Any]:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"no dependency declared with key {key!r}") from None

    def get(self, key: Hashable) -> Any:
        """Return the dependency stored under ``key``."""
        spec, stored = self._entry(key)
        if stored is _MISSING:
            raise MissingDependencyError("missing dependency")
        return stored() if spec.provided else stored

    def has(self, key: Hashable) -> bool:
        """Whether the dependency under ``key`` is available."""
        _, stored = self._entry(key)
        return stored is not _MISSING

    def merge(self, other: Deps) -> Deps:
        """Return a bag with the dependencies of both; ``other`` wins on clashes."""
        if not isinstance(other, Deps):
            raise TypeError("can only merge with another Deps")
        return Deps._from_entries({**self._entries, **other._entries})

    @property
    def specs(self) -> tuple[Spec, ...]:
        return tuple(spec for spec, _ in self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        keys = ", ".join(repr(k) for k in self._entries)
        return f"Deps({keys})"


def make_deps(*args: Any) -> Deps:
    """Return a bag holding each argument, keyed by its type."""
    return Deps.with_values([type(a) for a in args], *args)


def get(deps: Deps, key: Hashable) -> Any:
    """Return the dependency under ``key`` from ``deps``."""
    return deps.get(key)


def has(deps: Deps, key: Hashable) -> bool:
    """Whether ``deps`` holds an available dependency under ``key``."""
    return deps.has(key)


def is_deps(value: Any) -> bool:
    """Whether ``value`` is a dependency bag."""
    return isinstance(value, Deps)