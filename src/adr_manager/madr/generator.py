"""Build an ArchitecturalDecisionRecord from a MADR syntax tree.

MadrGenerator is a ParseTreeListener. walk() drives it over the tree and
calls enter_rule() for every node; each rule fills one part of the record.
The grammar yields option title, description, pros and cons as siblings,
so the option they belong to is carried in BuildContext.current_option,
set by the optionTitle rule and consumed by the rules that follow it.

All per-document state lives in BuildContext, so a single generator can be
shared between threads.

Usage:
    record = parse(markdown)
    result = parse_document(markdown)  # record plus warnings
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from adr_manager.core.config import MadrConfig
from adr_manager.madr.grammar import (
    CHOSEN_OPTION_PREFIX,
    ParseNode,
    ParseTreeListener,
    Rule,
    parse_tree,
    walk,
)
from adr_manager.madr.matching import TitleMatcher
from adr_manager.madr.models import ArchitecturalDecisionRecord, Option

__all__ = [
    "BuildContext",
    "MadrGenerator",
    "ParseResult",
    "ParseWarning",
    "build_record",
    "parse",
    "parse_document",
    "split_chosen_option",
    "unwrap_delimiters",
]

logger = logging.getLogger(__name__)

_BECAUSE_PATTERN = re.compile(r", because[ \t]*")
_DELIMITERS = ('"', "'", "`")


@dataclass(frozen=True)
class ParseWarning:
    """A recovered problem found while building a record.

    Attributes:
        rule: Name of the grammar rule being handled.
        message: Human-readable description.
        line: 1-based source line, if known.

    """

    rule: str
    message: str
    line: int | None = None

    def __str__(self) -> str:
        location = f"line {self.line}: " if self.line is not None else ""
        return f"{location}{self.message}"


@dataclass
class ParseResult:
    """Record built from a document plus any recovered problems.

    A document that is merely incomplete (missing sections) yields empty
    fields and no warnings.
    """

    record: ArchitecturalDecisionRecord
    warnings: list[ParseWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


@dataclass
class BuildContext:
    """Mutable state for one tree walk.

    Attributes:
        record: Record being populated.
        matcher: Title matcher bound to record.
        current_option: Option the next description/pros/cons belong to.
        warnings: Recovered problems, in document order.

    """

    record: ArchitecturalDecisionRecord
    matcher: TitleMatcher
    current_option: Option | None = None
    warnings: list[ParseWarning] = field(default_factory=list)

    @classmethod
    def create(cls, config: MadrConfig) -> BuildContext:
        record = ArchitecturalDecisionRecord()
        return cls(record=record, matcher=TitleMatcher(record, config.title_matching))


def unwrap_delimiters(text: str) -> str:
    """Remove one layer of identical quote characters around text.

    Examples:
        >>> unwrap_delimiters('"SQLite"')
        'SQLite'
        >>> unwrap_delimiters('"SQLite')
        '"SQLite'

    """
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _DELIMITERS:
        return text[1:-1]
    return text


def split_chosen_option(raw: str, policy: str = "first") -> tuple[str, str] | None:
    """Split a 'Chosen option: X, because Y' paragraph.

    Args:
        raw: Outcome paragraph text.
        policy: "first" splits on the first ", because" only. "legacy"
            splits on every occurrence and rejoins the explanation
            fragments with a single comma, dropping the repeated "because".

    Returns:
        (chosen option, explanation), or None if raw does not start with
        the "Chosen option: " prefix.

    Raises:
        ValueError: If policy is unknown.

    """
    if policy not in ("first", "legacy"):
        raise ValueError(f"Unknown explanation policy: {policy!r}")
    if not raw.startswith(CHOSEN_OPTION_PREFIX):
        return None

    remainder = raw[len(CHOSEN_OPTION_PREFIX) :]
    if policy == "legacy":
        fragments = _BECAUSE_PATTERN.split(remainder)
        explanation = ",".join(fragments[1:])
    else:
        fragments = _BECAUSE_PATTERN.split(remainder, maxsplit=1)
        explanation = fragments[1] if len(fragments) > 1 else ""

    return unwrap_delimiters(fragments[0].strip()), explanation


class MadrGenerator(ParseTreeListener):
    """Populates the record in a BuildContext from rule callbacks."""

    def __init__(self, config: MadrConfig | None = None) -> None:
        self.config = config or MadrConfig()

    def enter_rule(self, node: ParseNode, context: BuildContext) -> None:
        record = context.record
        outcome = record.decision_outcome

        match node.rule:
            case Rule.TITLE:
                record.title = node.text
            case Rule.STATUS:
                record.status = node.text
            case Rule.DECIDERS:
                record.deciders = node.text
            case Rule.DATE:
                record.date = node.text
            case Rule.TECHNICAL_STORY:
                record.technical_story = node.text
            case Rule.CONTEXT_AND_PROBLEM_STATEMENT:
                record.context_and_problem_statement = node.text
            case Rule.DECISION_DRIVERS:
                record.decision_drivers.extend(node.text_lines())
            case Rule.CONSIDERED_OPTIONS:
                # First declaration always creates, even for similar titles
                for title in node.text_lines():
                    record.add_option(title)
            case Rule.CHOSEN_OPTION:
                outcome.chosen_option = node.text
            case Rule.CHOSEN_OPTION_AND_EXPLANATION:
                self._enter_chosen_option_and_explanation(node, context)
            case Rule.POSITIVE_CONSEQUENCES:
                outcome.positive_consequences.extend(node.text_lines())
            case Rule.NEGATIVE_CONSEQUENCES:
                outcome.negative_consequences.extend(node.text_lines())
            case Rule.OPTION_TITLE:
                context.current_option = context.matcher.resolve(node.text)
            case Rule.OPTION_DESCRIPTION:
                if context.current_option is not None:
                    context.current_option.description = node.text
            case Rule.PROLIST:
                if context.current_option is not None:
                    context.current_option.pros.extend(node.text_lines())
            case Rule.CONLIST:
                if context.current_option is not None:
                    context.current_option.cons.extend(node.text_lines())
            case Rule.LINKS:
                record.links.extend(node.text_lines())
            case _:
                pass

    def _enter_chosen_option_and_explanation(
        self, node: ParseNode, context: BuildContext
    ) -> None:
        parts = split_chosen_option(node.text, self.config.explanation_policy)
        if parts is None:
            message = f"Couldn't find chosen option in {node.text[:80]!r}"
            logger.warning("%s (line %s)", message, node.line)
            context.warnings.append(ParseWarning(node.rule.value, message, node.line))
            return

        outcome = context.record.decision_outcome
        outcome.chosen_option, outcome.explanation = parts


def build_record(tree: ParseNode, config: MadrConfig | None = None) -> ParseResult:
    """Walk a syntax tree and build a record from it.

    Args:
        tree: Root node produced by parse_tree().
        config: Parsing settings, defaults to MadrConfig().

    Returns:
        ParseResult with the record and recovered warnings.

    """
    config = config or MadrConfig()
    context = BuildContext.create(config)
    walk(MadrGenerator(config), tree, context)
    logger.debug(
        "Built record %r: %d options, %d warnings",
        context.record.title,
        len(context.record.considered_options),
        len(context.warnings),
    )
    return ParseResult(record=context.record, warnings=context.warnings)


def parse_document(markdown: str, config: MadrConfig | None = None) -> ParseResult:
    """Parse MADR markdown into a record, collecting warnings.

    Raises:
        MadrSyntaxError: If the document does not conform to the grammar.

    """
    return build_record(parse_tree(markdown), config)


def parse(markdown: str, config: MadrConfig | None = None) -> ArchitecturalDecisionRecord:
    """Parse MADR markdown into an ArchitecturalDecisionRecord.

    Malformed "Chosen option" lines are logged and leave the outcome unset;
    use parse_document() to inspect them.

    Args:
        markdown: MADR document text.
        config: Parsing settings, defaults to MadrConfig().

    Returns:
        Populated record.

    Raises:
        MadrSyntaxError: If the document does not conform to the grammar.

    """
    return parse_document(markdown, config).record
