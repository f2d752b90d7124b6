"""MADR document conversion.

Converts between MADR markdown and ArchitecturalDecisionRecord:

- grammar: markdown text to a syntax tree, plus the tree walker
- matching: option title normalization and matching
- generator: syntax tree to record
- serializer: record to markdown
- models: the record data model

Example usage:
    >>> from adr_manager.madr import parse, serialize
    >>> record = parse(markdown)
    >>> markdown = serialize(record)

"""

from .generator import (
    BuildContext,
    MadrGenerator,
    ParseResult,
    ParseWarning,
    build_record,
    parse,
    parse_document,
)
from .grammar import ParseNode, ParseTreeListener, Rule, parse_tree, walk
from .matching import TitleMatcher, normalize_title, titles_match
from .models import ArchitecturalDecisionRecord, DecisionOutcome, Option
from .serializer import serialize

# Short aliases for the conversion pair
md2adr = parse
adr2md = serialize

__all__ = [
    # models
    "ArchitecturalDecisionRecord",
    "DecisionOutcome",
    "Option",
    # grammar
    "ParseNode",
    "ParseTreeListener",
    "Rule",
    "parse_tree",
    "walk",
    # matching
    "TitleMatcher",
    "normalize_title",
    "titles_match",
    # generator
    "BuildContext",
    "MadrGenerator",
    "ParseResult",
    "ParseWarning",
    "build_record",
    "parse",
    "parse_document",
    # serializer
    "serialize",
    # aliases
    "adr2md",
    "md2adr",
]
