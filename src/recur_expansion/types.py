"""Shared types: ExpansionSnapshot and UnsatisfiableExpansionError."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from recur_expansion.instants import Instant, dump_instant, load_instant


@dataclass(frozen=True)
class ExpansionSnapshot:
    """Immutable capture of every piece of mutable expansion state.

    Invariants:
        - extra_dates and excluded_dates are strictly ascending
        - 0 <= extra_cursor <= len(extra_dates)
        - 0 <= exclude_cursor <= len(excluded_dates)
        - generators holds only live (not completed) generator states
    """

    start: Instant
    last: Instant
    generators: tuple[dict[str, Any], ...]
    extra_dates: tuple[Instant, ...]
    extra_cursor: int
    excluded_dates: tuple[Instant, ...]
    exclude_cursor: int
    done: bool

    def __post_init__(self) -> None:
        for name in ("extra_dates", "excluded_dates"):
            values = getattr(self, name)
            for prev, curr in zip(values, values[1:]):
                if not prev < curr:
                    raise ValueError(
                        f"{name} must be strictly ascending: {prev} then {curr}"
                    )
        if not 0 <= self.extra_cursor <= len(self.extra_dates):
            raise ValueError(
                f"extra_cursor {self.extra_cursor} outside "
                f"[0, {len(self.extra_dates)}]"
            )
        if not 0 <= self.exclude_cursor <= len(self.excluded_dates):
            raise ValueError(
                f"exclude_cursor {self.exclude_cursor} outside "
                f"[0, {len(self.excluded_dates)}]"
            )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form. Generator states are passed through as-is."""
        return {
            "start": dump_instant(self.start),
            "last": dump_instant(self.last),
            "generators": [dict(g) for g in self.generators],
            "extra_dates": [dump_instant(d) for d in self.extra_dates],
            "extra_cursor": self.extra_cursor,
            "excluded_dates": [dump_instant(d) for d in self.excluded_dates],
            "exclude_cursor": self.exclude_cursor,
            "done": self.done,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExpansionSnapshot:
        """Rebuild from to_dict() output. Missing keys raise KeyError."""
        return cls(
            start=load_instant(data["start"]),
            last=load_instant(data["last"]),
            generators=tuple(dict(g) for g in data.get("generators", [])),
            extra_dates=tuple(load_instant(d) for d in data.get("extra_dates", [])),
            extra_cursor=int(data.get("extra_cursor", 0)),
            excluded_dates=tuple(
                load_instant(d) for d in data.get("excluded_dates", [])
            ),
            exclude_cursor=int(data.get("exclude_cursor", 0)),
            done=bool(data.get("done", False)),
        )


class UnsatisfiableExpansionError(Exception):
    """Raised when next() cannot accept an instant within its attempt bound."""

    def __init__(
        self,
        start: Instant,
        last: Instant,
        attempts: int,
    ) -> None:
        self.start = start
        self.last = last
        self.attempts = attempts
        super().__init__(
            f"Unsatisfiable: expansion anchored at {start.isoformat()} "
            f"produced no acceptable instant after {attempts} attempts "
            f"(last candidate: {last.isoformat()})"
        )
