"""Render an ArchitecturalDecisionRecord as MADR markdown.

serialize() never fails: absent fields are omitted, and the output is
accepted again by parse_tree(). Blocks are separated by one blank line.
"""

from __future__ import annotations

from adr_manager.madr.grammar import CHOSEN_OPTION_PREFIX
from adr_manager.madr.models import ArchitecturalDecisionRecord, Option

__all__ = ["serialize"]


def _bullets(items: list[str]) -> str:
    return "\n".join(f"* {item}" for item in items)


def _metadata(record: ArchitecturalDecisionRecord) -> str:
    lines: list[str] = []
    if record.status and record.status != "null":
        lines.append(f"* Status: {record.status}")
    if record.deciders:
        lines.append(f"* Deciders: {record.deciders}")
    if record.date:
        lines.append(f"* Date: {record.date}")
    return "\n".join(lines)


def _outcome_line(record: ArchitecturalDecisionRecord) -> str:
    outcome = record.decision_outcome
    line = f'{CHOSEN_OPTION_PREFIX}"{outcome.chosen_option}"'
    if outcome.explanation.strip():
        line += f", because {outcome.explanation}"
    return line


def _option_blocks(option: Option) -> list[str]:
    blocks = [f"### {option.title}"]
    if option.description:
        blocks.append(option.description)
    arguments = [f"* Good, because {pro}" for pro in option.pros]
    arguments += [f"* Bad, because {con}" for con in option.cons]
    if arguments:
        blocks.append("\n".join(arguments))
    return blocks


def serialize(record: ArchitecturalDecisionRecord) -> str:
    """Render record as MADR markdown.

    Args:
        record: Record to render. Only title is emitted unconditionally;
            the "Decision Outcome" section is always present.

    Returns:
        Markdown text ending with a newline.

    Examples:
        >>> record = ArchitecturalDecisionRecord(title="Use SQLite")
        >>> record.decision_outcome.chosen_option = "SQLite"
        >>> print(serialize(record))
        # Use SQLite
        <BLANKLINE>
        ## Decision Outcome
        <BLANKLINE>
        Chosen option: "SQLite"
        <BLANKLINE>

    """
    blocks = [f"# {record.title}"]

    metadata = _metadata(record)
    if metadata:
        blocks.append(metadata)
    if record.technical_story:
        blocks.append(f"Technical Story: {record.technical_story}")

    if record.context_and_problem_statement:
        blocks += ["## Context and Problem Statement", record.context_and_problem_statement]

    if record.decision_drivers:
        blocks += ["## Decision Drivers", _bullets(record.decision_drivers)]

    if record.considered_options:
        titles = [option.title for option in record.considered_options]
        blocks += ["## Considered Options", _bullets(titles)]

    outcome = record.decision_outcome
    blocks += ["## Decision Outcome", _outcome_line(record)]
    if outcome.positive_consequences:
        blocks += ["### Positive Consequences", _bullets(outcome.positive_consequences)]
    if outcome.negative_consequences:
        blocks += ["### Negative Consequences", _bullets(outcome.negative_consequences)]

    detailed = [option for option in record.considered_options if option.has_details()]
    if detailed:
        blocks.append("## Pros and Cons of the Options")
        for option in detailed:
            blocks += _option_blocks(option)

    if record.links:
        blocks += ["## Links", _bullets(record.links)]

    return "\n\n".join(blocks) + "\n"
