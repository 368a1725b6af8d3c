"""Counting of generated and evaluated search nodes and thinking time."""

from __future__ import annotations

import sys
import time
from typing import Callable, ClassVar, TextIO

_RED = "\033[1;31m"
_YELLOW = "\033[1;33m"
_GREEN = "\033[1;32m"
_WHITE = "\033[1;37m"
_RESET = "\033[0m"


class NodeCounter:
    """Tracks nodes and time spent by a player while thinking one move."""

    MAX_NODES: ClassVar[int] = 1_000_000
    NODE_MARGIN: ClassVar[int] = 1_000
    MAX_TIME: ClassVar[float] = 6000.0
    TIME_MARGIN: ClassVar[float] = 1.0

    _instance: ClassVar[NodeCounter | None] = None

    def __init__(
        self,
        max_nodes: int | None = None,
        node_margin: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_nodes = self.MAX_NODES if max_nodes is None else max_nodes
        self.node_margin = self.NODE_MARGIN if node_margin is None else node_margin
        self._clock = clock
        self._start = 0.0
        self.generated = 0
        self.evaluated = 0
        self.elapsed = 0.0
        self.running = False

    @classmethod
    def get_instance(cls) -> NodeCounter:
        """Return the shared counter, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def incr_generated(self, n: int = 1) -> None:
        self.generated += n

    def incr_evaluated(self, n: int = 1) -> None:
        self.evaluated += n

    def reset(self) -> None:
        self.generated = 0
        self.evaluated = 0
        self.elapsed = 0.0
        self.running = False

    def limit_reached(self) -> bool:
        return self.node_limit_reached() or self.time_limit_reached()

    def node_limit_reached(self) -> bool:
        return self.generated + self.evaluated >= self.max_nodes

    def time_limit_reached(self) -> bool:
        return self.elapsed >= self.MAX_TIME

    def begin_timer(self) -> None:
        """Start timing unless already running."""
        if not self.running:
            self._start = self._clock()
            self.running = True

    def end_timer(self) -> None:
        """Stop timing and add the interval to the accumulated time."""
        if self.running:
            self.elapsed += self._clock() - self._start
            self.running = False

    def limit_exceeded(self) -> bool:
        return self.node_limit_exceeded() or self.time_exceeded()

    def node_limit_exceeded(self) -> bool:
        return self.generated + self.evaluated >= self.max_nodes + self.node_margin

    def time_exceeded(self) -> bool:
        return self.elapsed >= self.MAX_TIME + self.TIME_MARGIN

    def print_results(self, out: TextIO | None = None) -> None:
        """Write a coloured summary of the counters to ``out``."""
        out = sys.stdout if out is None else out
        limit_colour = (
            _RED if self.limit_exceeded() else _YELLOW if self.limit_reached() else _GREEN
        )
        time_colour = (
            _RED if self.time_exceeded() else _YELLOW if self.time_limit_reached() else _GREEN
        )
        out.write(f"{_WHITE}Nodos generados: {self.generated}{_RESET}\n")
        out.write(f"{_WHITE}Nodos evaluados: {self.evaluated}{_RESET}\n")
        out.write(f"{limit_colour}Total de nodos: {self.generated + self.evaluated}{_RESET}\n")
        out.write(f"{time_colour}Tiempo de generación+evaluación: {self.elapsed:g}{_RESET}\n")