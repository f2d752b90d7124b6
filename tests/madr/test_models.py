"""Tests for the MADR record model.

Tests cover:
- Empty defaults
- add_option() appends without duplicate checks
- Option.has_details()
- find_option() / chosen() lookups
- to_dict() / from_dict() conversion
"""

import pytest

from adr_manager.madr import ArchitecturalDecisionRecord, DecisionOutcome, Option


class TestRecordDefaults:
    """Tests for a freshly created record."""

    def test_all_fields_empty(self) -> None:
        """New record has empty strings and empty lists."""
        record = ArchitecturalDecisionRecord()
        assert record.title == ""
        assert record.status == ""
        assert record.deciders == ""
        assert record.date == ""
        assert record.technical_story == ""
        assert record.context_and_problem_statement == ""
        assert record.decision_drivers == []
        assert record.considered_options == []
        assert record.decision_outcome == DecisionOutcome()
        assert record.links == []

    def test_records_do_not_share_lists(self) -> None:
        """Mutable defaults are per instance."""
        first = ArchitecturalDecisionRecord()
        second = ArchitecturalDecisionRecord()
        first.links.append("x")
        first.decision_outcome.positive_consequences.append("y")
        assert second.links == []
        assert second.decision_outcome.positive_consequences == []


class TestAddOption:
    """Tests for add_option()."""

    def test_returns_appended_option(self) -> None:
        """add_option() returns the Option it appended."""
        record = ArchitecturalDecisionRecord()
        option = record.add_option("Postgres")
        assert record.considered_options == [option]
        assert option.title == "Postgres"
        assert option.description == ""
        assert option.pros == []
        assert option.cons == []

    def test_does_not_suppress_duplicates(self) -> None:
        """Duplicate suppression is the matcher's job, not the model's."""
        record = ArchitecturalDecisionRecord()
        first = record.add_option("Postgres")
        second = record.add_option("Postgres")
        assert len(record.considered_options) == 2
        assert first is not second

    def test_returned_option_is_owned_by_record(self) -> None:
        """Mutating the returned option mutates the record."""
        record = ArchitecturalDecisionRecord()
        record.add_option("Postgres").pros.append("fast")
        assert record.considered_options[0].pros == ["fast"]


class TestOptionHasDetails:
    """Tests for Option.has_details()."""

    @pytest.mark.parametrize(
        ("option", "expected"),
        [
            (Option(title="A"), False),
            (Option(title="A", description="text"), True),
            (Option(title="A", pros=["p"]), True),
            (Option(title="A", cons=["c"]), True),
        ],
    )
    def test_has_details(self, option: Option, expected: bool) -> None:
        """Description, pros or cons each count as details."""
        assert option.has_details() is expected


class TestLookups:
    """Tests for find_option() and chosen()."""

    def test_find_option_never_creates(self) -> None:
        """find_option() returns None without adding an option."""
        record = ArchitecturalDecisionRecord()
        record.add_option("Postgres")
        assert record.find_option("Oracle") is None
        assert len(record.considered_options) == 1

    def test_find_option_uses_prefix_matching(self) -> None:
        """find_option() matches like the title matcher."""
        record = ArchitecturalDecisionRecord()
        option = record.add_option("Postgres 14")
        assert record.find_option("postgres") is option
        assert record.find_option("postgres", strategy="exact") is None

    def test_chosen_returns_referenced_option(self) -> None:
        """chosen() resolves the outcome title to an option."""
        record = ArchitecturalDecisionRecord()
        record.add_option("MySQL")
        postgres = record.add_option("Postgres")
        record.decision_outcome.chosen_option = "Postgres"
        assert record.chosen() is postgres

    def test_chosen_dangling_title_is_none(self) -> None:
        """A chosen title that matches no option is not an error."""
        record = ArchitecturalDecisionRecord()
        record.add_option("MySQL")
        record.decision_outcome.chosen_option = "Oracle"
        assert record.chosen() is None

    def test_chosen_without_outcome_is_none(self) -> None:
        """No chosen option means chosen() is None."""
        record = ArchitecturalDecisionRecord()
        record.add_option("MySQL")
        assert record.chosen() is None


class TestDictConversion:
    """Tests for to_dict() and from_dict()."""

    def test_to_dict_shape(self, sqlite_record: ArchitecturalDecisionRecord) -> None:
        """to_dict() produces nested plain data."""
        data = sqlite_record.to_dict()
        assert data["title"] == "Use SQLite"
        assert data["considered_options"][0] == {
            "title": "SQLite",
            "description": "",
            "pros": ["it is embeddable"],
            "cons": [],
        }
        assert data["decision_outcome"]["chosen_option"] == "SQLite"
        assert data["links"] == ["https://sqlite.org"]

    def test_from_dict_restores_record(self, sqlite_record: ArchitecturalDecisionRecord) -> None:
        """from_dict(to_dict(r)) equals r."""
        assert ArchitecturalDecisionRecord.from_dict(sqlite_record.to_dict()) == sqlite_record

    def test_from_dict_missing_keys_default_to_empty(self) -> None:
        """Only a title is enough."""
        record = ArchitecturalDecisionRecord.from_dict({"title": "Use Redis"})
        assert record == ArchitecturalDecisionRecord(title="Use Redis")

    def test_from_dict_accepts_bare_option_titles(self) -> None:
        """Options may be given as plain strings."""
        record = ArchitecturalDecisionRecord.from_dict(
            {"title": "T", "considered_options": ["A", {"title": "B", "pros": ["p"]}]}
        )
        assert [o.title for o in record.considered_options] == ["A", "B"]
        assert record.considered_options[1].pros == ["p"]

    def test_from_dict_rejects_non_mapping(self) -> None:
        """A list is not a record."""
        with pytest.raises(TypeError, match="mapping"):
            ArchitecturalDecisionRecord.from_dict(["not", "a", "record"])  # type: ignore[arg-type]

    def test_from_dict_rejects_invalid_option(self) -> None:
        """Option entries must be strings or mappings."""
        with pytest.raises(TypeError, match="Invalid option"):
            ArchitecturalDecisionRecord.from_dict({"considered_options": [42]})

    @pytest.mark.parametrize(
        "data",
        [
            {"title": "T", "links": "https://x"},
            {"title": "T", "decision_drivers": "fast"},
            {"title": "T", "considered_options": "SQLite"},
            {"title": "T", "considered_options": [{"title": "A", "pros": "fast"}]},
            {"title": "T", "decision_outcome": {"positive_consequences": "p"}},
        ],
    )
    def test_from_dict_rejects_scalar_list_fields(self, data: dict) -> None:
        """A string where a list is expected is not split into characters."""
        with pytest.raises(TypeError, match="must be a list, got str"):
            ArchitecturalDecisionRecord.from_dict(data)

    def test_from_dict_null_list_field_is_empty(self) -> None:
        """An explicit null list is treated as absent."""
        record = ArchitecturalDecisionRecord.from_dict({"title": "T", "links": None})
        assert record.links == []
