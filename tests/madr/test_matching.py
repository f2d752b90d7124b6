"""Tests for option title matching."""

import pytest

from adr_manager.madr import (
    ArchitecturalDecisionRecord,
    TitleMatcher,
    normalize_title,
    titles_match,
)


class TestNormalizeTitle:
    """Tests for normalize_title()."""

    def test_removes_whitespace_and_lowercases(self) -> None:
        """All whitespace is removed, not just spaces."""
        assert normalize_title(" Option\tA \n") == "optiona"

    def test_empty(self) -> None:
        """Empty title normalizes to empty string."""
        assert normalize_title("   ") == ""


class TestTitlesMatch:
    """Tests for titles_match()."""

    def test_equal_after_normalization(self) -> None:
        """Case and spacing differences still match."""
        assert titles_match("Option A", "option a ")

    def test_prefix_in_both_directions(self) -> None:
        """Either title may be the prefix."""
        assert titles_match("Postgres 14", "Postgres")
        assert titles_match("Postgres", "Postgres 14")

    def test_unrelated_titles(self) -> None:
        """Different titles do not match."""
        assert not titles_match("Postgres", "MySQL")

    def test_exact_strategy_rejects_prefix(self) -> None:
        """The exact strategy only accepts equal normalized titles."""
        assert titles_match("Option A", "optiona", strategy="exact")
        assert not titles_match("Postgres 14", "Postgres", strategy="exact")

    def test_unknown_strategy_raises(self) -> None:
        """Unknown strategies are rejected."""
        with pytest.raises(ValueError, match="Unknown title matching strategy"):
            titles_match("a", "b", strategy="fuzzy")


class TestTitleMatcherResolve:
    """Tests for TitleMatcher.resolve()."""

    def test_resolve_is_idempotent(self) -> None:
        """Normalized-equal titles resolve to the same Option."""
        record = ArchitecturalDecisionRecord()
        matcher = TitleMatcher(record)
        first = matcher.resolve("Option A")
        second = matcher.resolve("option a ")
        assert first is second
        assert len(record.considered_options) == 1

    def test_prefix_match_returns_existing_option(self) -> None:
        """A truncated heading resolves to the declared option."""
        record = ArchitecturalDecisionRecord()
        existing = record.add_option("Postgres 14")
        assert TitleMatcher(record).resolve("Postgres") is existing
        assert len(record.considered_options) == 1

    def test_unmatched_title_creates_option(self) -> None:
        """Pros/cons for an undeclared option add it to the record."""
        record = ArchitecturalDecisionRecord()
        record.add_option("Postgres")
        created = TitleMatcher(record).resolve("MongoDB")
        assert created.title == "MongoDB"
        assert record.considered_options[-1] is created
        assert len(record.considered_options) == 2

    def test_first_declared_option_wins(self) -> None:
        """Overlapping prefixes resolve to the first declared option."""
        record = ArchitecturalDecisionRecord()
        a = record.add_option("A")
        record.add_option("AB")
        record.add_option("ABC")
        assert TitleMatcher(record).resolve("AB") is a
        assert TitleMatcher(record).resolve("ABC") is a

    def test_exact_strategy_creates_for_prefix(self) -> None:
        """With exact matching a prefix-related heading is a new option."""
        record = ArchitecturalDecisionRecord()
        record.add_option("Postgres 14")
        created = TitleMatcher(record, strategy="exact").resolve("Postgres")
        assert created.title == "Postgres"
        assert len(record.considered_options) == 2

    def test_find_does_not_create(self) -> None:
        """find() is a pure lookup."""
        record = ArchitecturalDecisionRecord()
        assert TitleMatcher(record).find("anything") is None
        assert record.considered_options == []

    def test_invalid_strategy_rejected(self) -> None:
        """Constructing a matcher with an unknown strategy fails."""
        with pytest.raises(ValueError):
            TitleMatcher(ArchitecturalDecisionRecord(), strategy="levenshtein")
