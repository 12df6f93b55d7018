"""Synthetic id generation for parsed elements and choices."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable

# Called with a kind ("element", "choice") and returns a fresh id.
IdFactory = Callable[[str], str]


class SequentialIds:
    """Deterministic ``<kind>-<n>`` ids, one counter per kind starting at 0.

    A single instance must not be shared between concurrent parses.
    """

    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)

    def __call__(self, kind: str) -> str:
        n = self._counters[kind]
        self._counters[kind] = n + 1
        return f"{kind}-{n}"
