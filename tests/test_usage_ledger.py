"""Tests for the layered variable usage ledger."""

from matchaudit.rules.python.usage_ledger import VariableUsageLedger


class TestIncrement:
    """Counting with inheritance from enclosing levels."""

    def test_first_usage_starts_at_one(self):
        ledger = VariableUsageLedger()
        assert ledger.increment("a", 0) == 1
        assert ledger.increment("a", 0) == 2
        assert ledger.increment("b", 0) == 1

    def test_deeper_level_inherits_nearest_ancestor(self):
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)

        # Level 1 holds 2 (1 inherited + 1 own); level 2 builds on it
        assert ledger.increment("a", 1) == 2
        assert ledger.increment("a", 2) == 3
        assert ledger.snapshot(0) == {"a": 1}

    def test_own_count_wins_over_ancestor(self):
        ledger = VariableUsageLedger()
        ledger.increment("a", 1)
        ledger.increment("a", 0)
        ledger.increment("a", 0)

        assert ledger.increment("a", 1) == 2, "Level 1 already has its own count"

    def test_sparse_levels_are_skipped(self):
        """Unpopulated intermediate levels do not break the ancestor search."""
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)

        assert ledger.increment("a", 3) == 2
        assert ledger.depths == [0, 3]

    def test_unknown_name_in_ancestors_starts_fresh(self):
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)
        assert ledger.increment("b", 2) == 1


class TestNearestUsage:
    def test_searches_from_depth_down_to_zero(self):
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)
        ledger.increment("a", 2)

        assert ledger.nearest_usage("a", 3) == 2
        assert ledger.nearest_usage("a", 1) == 1
        assert ledger.nearest_usage("b", 3) is None
        assert ledger.nearest_usage("a", -1) is None


class TestInvalidate:
    """Dropping a level and everything below it."""

    def test_removes_level_and_deeper(self):
        ledger = VariableUsageLedger()
        for depth in range(4):
            ledger.increment("a", depth)

        ledger.invalidate_from(1)

        assert ledger.depths == [0]
        assert 1 not in ledger

    def test_missing_levels_are_a_no_op(self):
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)

        ledger.invalidate_from(5)

        assert ledger.depths == [0]

    def test_sparse_deeper_levels_are_removed(self):
        """A gap at the requested depth still clears the deeper levels."""
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)
        ledger.increment("a", 3)

        ledger.invalidate_from(1)

        assert ledger.depths == [0]
        assert ledger.increment("a", 3) == 2, "Stale level 3 must not be reused"


class TestSnapshot:
    def test_preserves_first_seen_order(self):
        ledger = VariableUsageLedger()
        for name in ("c", "a", "b", "a"):
            ledger.increment(name, 0)

        assert list(ledger.snapshot(0)) == ["c", "a", "b"]
        assert ledger.snapshot(0)["a"] == 2

    def test_absent_level_is_empty(self):
        assert VariableUsageLedger().snapshot(0) == {}

    def test_snapshot_is_a_copy(self):
        ledger = VariableUsageLedger()
        ledger.increment("a", 0)

        snap = ledger.snapshot(0)
        ledger.increment("b", 0)

        assert snap == {"a": 1}
