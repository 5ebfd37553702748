"""Unidirectional data-flow stores, dependency bags, contexts, lenses, event loops and a snake game model."""

__version__ = "0.1.0"

__all__ = ["deps", "lenses", "event_loops", "context", "store", "snake"]