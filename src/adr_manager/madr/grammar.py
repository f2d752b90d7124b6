"""MADR grammar: raw markdown text to a concrete syntax tree.

The tree is made of ParseNode objects tagged with a Rule. Rules mirror the
sections of the MADR template; list-bearing rules carry their items as
direct TEXT_LINE children. Consumers never look at raw characters, they
walk the tree with walk() and react to rules in a ParseTreeListener.

Accepted document shape:

    # <title>

    * Status: <status>
    * Deciders: <deciders>
    * Date: <date>

    Technical Story: <text>

    ## Context and Problem Statement
    ## Decision Drivers
    ## Considered Options
    ## Decision Outcome
    ### Positive Consequences
    ### Negative Consequences
    ## Pros and Cons of the Options
    ### <option title>
    ## Links

Level-2 sections are optional but must appear at most once and in the
order above. Anything the grammar does not recognize raises
MadrSyntaxError; there is no partial recovery from a rejected document.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from adr_manager.core.exceptions import MadrSyntaxError

__all__ = [
    "CHOSEN_OPTION_PREFIX",
    "ParseNode",
    "ParseTreeListener",
    "Rule",
    "parse_tree",
    "walk",
]

logger = logging.getLogger(__name__)

CHOSEN_OPTION_PREFIX = "Chosen option: "


class Rule(str, Enum):
    """Grammar rules of the MADR dialect. Values are the rule names."""

    START = "start"
    TITLE = "title"
    STATUS = "status"
    DECIDERS = "deciders"
    DATE = "date"
    TECHNICAL_STORY = "technicalStory"
    CONTEXT_AND_PROBLEM_STATEMENT = "contextAndProblemStatement"
    DECISION_DRIVERS = "decisionDrivers"
    CONSIDERED_OPTIONS = "consideredOptions"
    DECISION_OUTCOME = "decisionOutcome"
    CHOSEN_OPTION = "chosenOption"
    CHOSEN_OPTION_AND_EXPLANATION = "chosenOptionAndExplanation"
    POSITIVE_CONSEQUENCES = "positiveConsequences"
    NEGATIVE_CONSEQUENCES = "negativeConsequences"
    PROS_AND_CONS_OF_OPTIONS = "prosAndConsOfOptions"
    OPTION_SECTION = "optionSection"
    OPTION_TITLE = "optionTitle"
    OPTION_DESCRIPTION = "optionDescription"
    PROLIST = "prolist"
    CONLIST = "conlist"
    LINKS = "links"
    TEXT_LINE = "textLine"


@dataclass
class ParseNode:
    """Node of the concrete syntax tree.

    Attributes:
        rule: Grammar rule this node was matched by.
        text: Matched source text (for list items: the item text only).
        children: Ordered child nodes.
        line: 1-based line number where the match starts.

    """

    rule: Rule
    text: str = ""
    children: list[ParseNode] = field(default_factory=list)
    line: int | None = None

    def text_lines(self) -> list[str]:
        """Return the text of all direct TEXT_LINE children in order."""
        return [child.text for child in self.children if child.rule is Rule.TEXT_LINE]

    def iter_nodes(self) -> Iterator[ParseNode]:
        """Iterate over this node and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find_all(self, rule: Rule) -> list[ParseNode]:
        """Return all nodes in this subtree matched by rule."""
        return [node for node in self.iter_nodes() if node.rule is rule]


class ParseTreeListener:
    """Receives one enter_rule() call per node during walk().

    Subclasses dispatch on node.rule. Per-walk state belongs in the context
    object passed to walk(), not on the listener.
    """

    def enter_rule(self, node: ParseNode, context: Any) -> None:
        """Handle entering node. Default does nothing."""


def walk(listener: ParseTreeListener, tree: ParseNode, context: Any = None) -> None:
    """Walk tree depth-first, calling listener.enter_rule() on every node.

    Args:
        listener: Listener to notify.
        tree: Root node.
        context: Opaque per-walk state handed to every callback.

    """
    stack = [tree]
    while stack:
        node = stack.pop()
        listener.enter_rule(node, context)
        stack.extend(reversed(node.children))


# =============================================================================
# Parser
# =============================================================================

_HEADING_PATTERN = re.compile(r"^(#{1,6})(?:[ \t]+(.*))?$")
_LIST_ITEM_PATTERN = re.compile(r"^[ \t]{0,3}[*+-](?:[ \t]+(.*))?$")
_METADATA_PATTERN = re.compile(r"^(status|deciders|date)[ \t]*:[ \t]*(.*)$", re.IGNORECASE)
_TECHNICAL_STORY_PATTERN = re.compile(r"^technical story[ \t]*:[ \t]*(.*)$", re.IGNORECASE)
_HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->")
_PRO_PATTERN = re.compile(r"^Good, because\b[ \t]*(.*)$")
_CON_PATTERN = re.compile(r"^Bad, because\b[ \t]*(.*)$")
_FENCE_MARKERS = ("```", "~~~")
_CHOSEN_OPTION_MARKER = "chosen option"

_METADATA_RULES: dict[str, Rule] = {
    "status": Rule.STATUS,
    "deciders": Rule.DECIDERS,
    "date": Rule.DATE,
}

# Level-2 sections in the only order the grammar accepts
_SECTIONS: tuple[tuple[str, Rule], ...] = (
    ("context and problem statement", Rule.CONTEXT_AND_PROBLEM_STATEMENT),
    ("decision drivers", Rule.DECISION_DRIVERS),
    ("considered options", Rule.CONSIDERED_OPTIONS),
    ("decision outcome", Rule.DECISION_OUTCOME),
    ("pros and cons of the options", Rule.PROS_AND_CONS_OF_OPTIONS),
    ("links", Rule.LINKS),
)
_SECTION_INDEX: dict[str, int] = {name: index for index, (name, _) in enumerate(_SECTIONS)}

_CONSEQUENCE_RULES: dict[str, Rule] = {
    "positive consequences": Rule.POSITIVE_CONSEQUENCES,
    "negative consequences": Rule.NEGATIVE_CONSEQUENCES,
}


@dataclass(frozen=True)
class _Line:
    """One source line, right-stripped."""

    number: int
    text: str
    fenced: bool = False

    @property
    def blank(self) -> bool:
        return not self.text.strip()


_Block = tuple[_Line, str, list[_Line]]


def _split_lines(text: str) -> list[_Line]:
    """Split text into numbered lines, marking fenced code block lines.

    Raises:
        MadrSyntaxError: If a code fence is still open at the end of text.

    """
    lines: list[_Line] = []
    fence_start: int | None = None
    for number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.rstrip()
        is_fence = stripped.lstrip().startswith(_FENCE_MARKERS)
        lines.append(_Line(number, stripped, fenced=fence_start is not None or is_fence))
        if is_fence:
            fence_start = number if fence_start is None else None
    if fence_start is not None:
        raise MadrSyntaxError("Unclosed code fence", fence_start)
    return lines


def _heading(line: _Line) -> tuple[int, str] | None:
    """Return (level, text) if line is an ATX heading outside code fences."""
    if line.fenced:
        return None
    match = _HEADING_PATTERN.match(line.text)
    if not match:
        return None
    return len(match.group(1)), (match.group(2) or "").strip()


def _list_item(line: _Line) -> str | None:
    """Return the item text if line is a bullet list item."""
    if line.fenced:
        return None
    match = _LIST_ITEM_PATTERN.match(line.text)
    if not match:
        return None
    return (match.group(1) or "").strip()


def _normalize_heading(text: str) -> str:
    """Normalize a section heading for lookup (comments, case, spacing)."""
    text = _HTML_COMMENT_PATTERN.sub("", text)
    return " ".join(text.split()).lower()


def _trim_blank(lines: list[_Line]) -> list[_Line]:
    """Drop leading and trailing blank lines."""
    start, end = 0, len(lines)
    while start < end and lines[start].blank:
        start += 1
    while end > start and lines[end - 1].blank:
        end -= 1
    return lines[start:end]


def _source(lines: list[_Line]) -> str:
    return "\n".join(line.text for line in _trim_blank(lines))


def _split_by_heading(lines: list[_Line], level: int) -> tuple[list[_Line], list[_Block]]:
    """Split lines at headings of the given level.

    Returns:
        Lines before the first heading, and (heading line, heading text,
        body lines) for every heading.

    Raises:
        MadrSyntaxError: If a heading of a higher level (fewer '#') appears.

    """
    before: list[_Line] = []
    blocks: list[_Block] = []
    current: _Block | None = None

    for line in lines:
        heading = _heading(line)
        if heading is not None and heading[0] <= level:
            if heading[0] < level:
                raise MadrSyntaxError(
                    f"Unexpected level-{heading[0]} heading {line.text!r}", line.number
                )
            current = (line, heading[1], [])
            blocks.append(current)
            continue
        if current is None:
            before.append(line)
        else:
            current[2].append(line)

    return before, blocks


class _TreeBuilder:
    """Recursive-descent builder for one document."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines = _split_lines(text)

    def build(self) -> ParseNode:
        lines = _trim_blank(self.lines)
        if not lines:
            raise MadrSyntaxError("Document is empty, expected a '# <title>' heading", line=1)

        first = lines[0]
        heading = _heading(first)
        if heading is None or heading[0] != 1:
            raise MadrSyntaxError(
                f"Expected a '# <title>' heading, got {first.text!r}", first.number
            )

        root = ParseNode(Rule.START, text=self.text, line=1)
        root.children.append(ParseNode(Rule.TITLE, heading[1], line=first.number))

        preamble, sections = _split_by_heading(lines[1:], level=2)
        root.children.extend(self._preamble(preamble))

        last_index = -1
        for heading_line, heading_text, body in sections:
            key = _normalize_heading(heading_text)
            index = _SECTION_INDEX.get(key)
            if index is None:
                raise MadrSyntaxError(
                    f"Unknown section '## {heading_text}'", heading_line.number
                )
            if index <= last_index:
                raise MadrSyntaxError(
                    f"Section '## {heading_text}' is duplicated or out of order",
                    heading_line.number,
                )
            last_index = index
            root.children.append(self._section(_SECTIONS[index][1], heading_line, body))

        logger.debug(
            "Parsed MADR tree: %d sections, %d nodes",
            len(sections),
            sum(1 for _ in root.iter_nodes()),
        )
        return root

    def _preamble(self, lines: list[_Line]) -> list[ParseNode]:
        nodes: list[ParseNode] = []
        for line in lines:
            if line.blank:
                continue
            item = _list_item(line)
            if item is not None:
                match = _METADATA_PATTERN.match(item)
                if match:
                    rule = _METADATA_RULES[match.group(1).lower()]
                    nodes.append(ParseNode(rule, match.group(2).strip(), line=line.number))
                    continue
            elif not line.fenced:
                match = _TECHNICAL_STORY_PATTERN.match(line.text.strip())
                if match:
                    nodes.append(
                        ParseNode(Rule.TECHNICAL_STORY, match.group(1).strip(), line=line.number)
                    )
                    continue
            raise MadrSyntaxError(
                f"Unexpected line before the first section: {line.text!r}", line.number
            )
        return nodes

    def _section(self, rule: Rule, heading_line: _Line, body: list[_Line]) -> ParseNode:
        if rule is Rule.CONTEXT_AND_PROBLEM_STATEMENT:
            return ParseNode(rule, _source(body), line=heading_line.number)
        if rule is Rule.DECISION_OUTCOME:
            return self._decision_outcome(heading_line, body)
        if rule is Rule.PROS_AND_CONS_OF_OPTIONS:
            return self._pros_and_cons(heading_line, body)
        return self._list(rule, heading_line, body)

    def _list(self, rule: Rule, heading_line: _Line, body: list[_Line]) -> ParseNode:
        node = ParseNode(rule, _source(body), line=heading_line.number)
        for line in body:
            if line.blank:
                continue
            item = _list_item(line)
            if item is None:
                raise MadrSyntaxError(
                    f"Expected a list item under {heading_line.text!r}, got {line.text!r}",
                    line.number,
                )
            node.children.append(ParseNode(Rule.TEXT_LINE, item, line=line.number))
        return node

    def _decision_outcome(self, heading_line: _Line, body: list[_Line]) -> ParseNode:
        before, subsections = _split_by_heading(body, level=3)
        paragraph = _trim_blank(before)
        node = ParseNode(Rule.DECISION_OUTCOME, _source(body), line=heading_line.number)

        if paragraph:
            node.children.append(self._chosen_option(paragraph))

        seen: set[Rule] = set()
        for sub_line, sub_text, sub_body in subsections:
            rule = _CONSEQUENCE_RULES.get(_normalize_heading(sub_text))
            if rule is None:
                raise MadrSyntaxError(
                    f"Unknown decision outcome subsection '### {sub_text}'", sub_line.number
                )
            if rule in seen:
                raise MadrSyntaxError(f"Duplicate subsection '### {sub_text}'", sub_line.number)
            seen.add(rule)
            node.children.append(self._list(rule, sub_line, sub_body))
        return node

    def _chosen_option(self, paragraph: list[_Line]) -> ParseNode:
        text = _source(paragraph)
        line = paragraph[0].number
        # A single plain line without a because-clause is the bare form
        if (
            len(paragraph) == 1
            and not text.lower().startswith(_CHOSEN_OPTION_MARKER)
            and ", because" not in text
        ):
            return ParseNode(Rule.CHOSEN_OPTION, text.strip(), line=line)
        return ParseNode(Rule.CHOSEN_OPTION_AND_EXPLANATION, text, line=line)

    def _pros_and_cons(self, heading_line: _Line, body: list[_Line]) -> ParseNode:
        before, options = _split_by_heading(body, level=3)
        for line in before:
            if not line.blank:
                raise MadrSyntaxError(
                    f"Expected a '### <option title>' heading, got {line.text!r}", line.number
                )

        node = ParseNode(Rule.PROS_AND_CONS_OF_OPTIONS, _source(body), line=heading_line.number)
        for sub_line, title, sub_body in options:
            node.children.append(self._option_section(sub_line, title, sub_body))
        return node

    def _option_section(self, heading_line: _Line, title: str, body: list[_Line]) -> ParseNode:
        section = ParseNode(Rule.OPTION_SECTION, _source(body), line=heading_line.number)
        section.children.append(ParseNode(Rule.OPTION_TITLE, title, line=heading_line.number))

        description: list[_Line] = []
        current: ParseNode | None = None
        current_lines: list[_Line] = []

        for line in body:
            argument = self._argument(line)
            if argument is None:
                if current is None:
                    description.append(line)
                    continue
                if line.blank:
                    continue
                raise MadrSyntaxError(
                    "Expected '* Good, because ...' or '* Bad, because ...', "
                    f"got {line.text!r}",
                    line.number,
                )

            if current is None:
                self._add_description(section, description)

            rule, text = argument
            if current is None or current.rule is not rule:
                current = ParseNode(rule, line=line.number)
                current_lines = []
                section.children.append(current)
            current_lines.append(line)
            current.text = _source(current_lines)
            current.children.append(ParseNode(Rule.TEXT_LINE, text, line=line.number))

        if current is None:
            self._add_description(section, description)
        return section

    @staticmethod
    def _add_description(section: ParseNode, lines: list[_Line]) -> None:
        trimmed = _trim_blank(lines)
        if trimmed:
            section.children.append(
                ParseNode(Rule.OPTION_DESCRIPTION, _source(trimmed), line=trimmed[0].number)
            )

    @staticmethod
    def _argument(line: _Line) -> tuple[Rule, str] | None:
        """Classify a pro/con bullet as (PROLIST|CONLIST, text)."""
        item = _list_item(line)
        if item is None:
            return None
        match = _PRO_PATTERN.match(item)
        if match:
            return Rule.PROLIST, match.group(1).strip()
        match = _CON_PATTERN.match(item)
        if match:
            return Rule.CONLIST, match.group(1).strip()
        return None


def parse_tree(text: str) -> ParseNode:
    """Parse MADR markdown into a concrete syntax tree.

    Args:
        text: Markdown document.

    Returns:
        Root node with rule Rule.START.

    Raises:
        MadrSyntaxError: If the document does not conform to the grammar.

    """
    return _TreeBuilder(text).build()
