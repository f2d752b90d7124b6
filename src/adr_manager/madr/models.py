"""Structured representation of a MADR architectural decision record.

The record is a plain mutable container. It is either filled field by
field by the generator while walking a syntax tree, or populated by caller
code before serialization. Nothing is validated on construction.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

__all__ = [
    "ArchitecturalDecisionRecord",
    "DecisionOutcome",
    "Option",
]


def _list_field(data: dict[str, Any], key: str) -> list[Any]:
    """Return data[key] as a list; missing or null values are empty.

    Raises:
        TypeError: If the value is present but not a list.

    """
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


@dataclass
class Option:
    """A considered option and its per-option details.

    Attributes:
        title: Option title, also the identity key for title matching.
        description: Free-text description, empty if never set.
        pros: Arguments in favour ("Good, because ...").
        cons: Arguments against ("Bad, because ...").

    """

    title: str
    description: str = ""
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)

    def has_details(self) -> bool:
        """Check whether the option has a description, pros or cons."""
        return bool(self.description) or bool(self.pros) or bool(self.cons)


@dataclass
class DecisionOutcome:
    """Outcome of the decision.

    Attributes:
        chosen_option: Title of the chosen option. Not required to match a
            considered option.
        explanation: Justification after ", because", may be empty.
        positive_consequences: Positive consequences in document order.
        negative_consequences: Negative consequences in document order.

    """

    chosen_option: str = ""
    explanation: str = ""
    positive_consequences: list[str] = field(default_factory=list)
    negative_consequences: list[str] = field(default_factory=list)


@dataclass
class ArchitecturalDecisionRecord:
    """An architectural decision record in MADR form.

    Empty strings and empty lists mean "absent"; the serializer omits the
    corresponding sections.

    Attributes:
        title: Decision title.
        status: Status text (e.g. "accepted").
        deciders: Raw deciders line, not split into names.
        date: Date text as written in the document.
        technical_story: Technical story reference.
        context_and_problem_statement: Context section text.
        decision_drivers: Decision drivers in document order.
        considered_options: Options owned by this record. Later sections
            mutate these entries in place, so identity is by reference.
        decision_outcome: Chosen option, explanation and consequences.
        links: Links in document order.

    """

    title: str = ""
    status: str = ""
    deciders: str = ""
    date: str = ""
    technical_story: str = ""
    context_and_problem_statement: str = ""
    decision_drivers: list[str] = field(default_factory=list)
    considered_options: list[Option] = field(default_factory=list)
    decision_outcome: DecisionOutcome = field(default_factory=DecisionOutcome)
    links: list[str] = field(default_factory=list)

    def add_option(self, title: str) -> Option:
        """Append a new empty option and return it.

        Duplicates are not checked here; use the title matcher to find an
        existing option first.

        Args:
            title: Title of the new option.

        Returns:
            The newly created Option.

        """
        option = Option(title=title)
        self.considered_options.append(option)
        return option

    def find_option(self, title: str, strategy: str = "prefix") -> Option | None:
        """Find the first option whose title matches title.

        Unlike TitleMatcher.resolve(), never creates an option.

        Args:
            title: Candidate title.
            strategy: Matching strategy ("prefix" or "exact").

        Returns:
            The matching option, or None.

        """
        from adr_manager.madr.matching import TitleMatcher

        return TitleMatcher(self, strategy).find(title)

    def chosen(self, strategy: str = "prefix") -> Option | None:
        """Return the considered option the outcome refers to.

        Returns None when no option is chosen or the chosen title is
        dangling.
        """
        if not self.decision_outcome.chosen_option:
            return None
        return self.find_option(self.decision_outcome.chosen_option, strategy)

    def to_dict(self) -> dict[str, Any]:
        """Convert the record to plain JSON/YAML-compatible data."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArchitecturalDecisionRecord:
        """Build a record from data produced by to_dict().

        Missing keys fall back to empty values. Option entries may be
        mappings or bare title strings.

        Args:
            data: Mapping with record fields.

        Returns:
            New ArchitecturalDecisionRecord.

        Raises:
            TypeError: If data or a nested entry has the wrong shape.

        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")

        options: list[Option] = []
        for entry in _list_field(data, "considered_options"):
            if isinstance(entry, str):
                options.append(Option(title=entry))
            elif isinstance(entry, dict):
                options.append(
                    Option(
                        title=str(entry.get("title") or ""),
                        description=str(entry.get("description") or ""),
                        pros=[str(p) for p in _list_field(entry, "pros")],
                        cons=[str(c) for c in _list_field(entry, "cons")],
                    )
                )
            else:
                raise TypeError(f"Invalid option entry: {entry!r}")

        outcome_data = data.get("decision_outcome") or {}
        if not isinstance(outcome_data, dict):
            raise TypeError("decision_outcome must be a mapping")
        outcome = DecisionOutcome(
            chosen_option=str(outcome_data.get("chosen_option") or ""),
            explanation=str(outcome_data.get("explanation") or ""),
            positive_consequences=[
                str(c) for c in _list_field(outcome_data, "positive_consequences")
            ],
            negative_consequences=[
                str(c) for c in _list_field(outcome_data, "negative_consequences")
            ],
        )

        return cls(
            title=str(data.get("title") or ""),
            status=str(data.get("status") or ""),
            deciders=str(data.get("deciders") or ""),
            date=str(data.get("date") or ""),
            technical_story=str(data.get("technical_story") or ""),
            context_and_problem_statement=str(data.get("context_and_problem_statement") or ""),
            decision_drivers=[str(d) for d in _list_field(data, "decision_drivers")],
            considered_options=options,
            decision_outcome=outcome,
            links=[str(link) for link in _list_field(data, "links")],
        )
