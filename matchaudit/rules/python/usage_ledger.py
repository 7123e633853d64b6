"""Layered per-depth counters for variable usages in conditions.

A ledger maps ``depth -> {name: count}``. A count recorded at depth ``d`` is
the starting point for the same name at any deeper level until that deeper
level is invalidated, so nested conditions accumulate on top of the nearest
enclosing condition that tested the name.
"""


class VariableUsageLedger:
    """Cumulative usage counts of variable names, one layer per nesting depth."""

    def __init__(self):
        self._levels: dict[int, dict[str, int]] = {}

    def __contains__(self, depth: int) -> bool:
        return depth in self._levels

    def __repr__(self) -> str:
        return f"VariableUsageLedger({self._levels!r})"

    @property
    def depths(self) -> list[int]:
        """Recorded depths, shallowest first."""
        return sorted(self._levels)

    def nearest_usage(self, name: str, depth: int) -> int | None:
        """Count of ``name`` at ``depth`` or the nearest shallower level recording it.

        Levels that were never populated are skipped. Returns None when no
        level from ``depth`` down to 0 has seen the name.
        """
        for level in range(depth, -1, -1):
            counts = self._levels.get(level)
            if counts is not None and name in counts:
                return counts[name]
        return None

    def increment(self, name: str, depth: int) -> int:
        """Record one more usage of ``name`` at ``depth`` and return the new total.

        The first usage at a level starts from the nearest ancestor's count
        (0 if no ancestor has seen the name).
        """
        counts = self._levels.setdefault(depth, {})

        used = counts.get(name)
        if used is None:
            used = self.nearest_usage(name, depth - 1) or 0

        used += 1
        counts[name] = used
        return used

    def invalidate_from(self, depth: int) -> None:
        """Drop ``depth`` and every deeper level."""
        for level in [d for d in self._levels if d >= depth]:
            del self._levels[level]

    def snapshot(self, depth: int) -> dict[str, int]:
        """Copy of the counts recorded at exactly ``depth``, in first-seen order."""
        return dict(self._levels.get(depth, {}))
