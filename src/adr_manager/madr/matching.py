"""Option title matching.

The "Considered Options" section lists terse option titles; the "Pros and
Cons of the Options" section repeats them as sub-headings, sometimes
truncated or elaborated. Titles are compared after removing all whitespace
and lower-casing, and (with the default "prefix" strategy) two titles also
match when either is a prefix of the other.

The prefix rule is a best-effort heuristic: with overlapping titles such as
"A", "AB" and "ABC" the first declared option wins. No error is raised for
ambiguity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adr_manager.madr.models import ArchitecturalDecisionRecord, Option

__all__ = [
    "MATCH_STRATEGIES",
    "TitleMatcher",
    "normalize_title",
    "titles_match",
]

logger = logging.getLogger(__name__)

MATCH_STRATEGIES: tuple[str, ...] = ("prefix", "exact")


def normalize_title(title: str) -> str:
    """Normalize an option title for comparison.

    Examples:
        >>> normalize_title(" Option  A ")
        'optiona'

    """
    return "".join(title.split()).lower()


def titles_match(first: str, second: str, strategy: str = "prefix") -> bool:
    """Check whether two option titles refer to the same option.

    Args:
        first: Title of an existing option.
        second: Candidate title.
        strategy: "prefix" (equal or prefix-related) or "exact" (equal only).

    Returns:
        True if the normalized titles match under strategy.

    Raises:
        ValueError: If strategy is unknown.

    """
    if strategy not in MATCH_STRATEGIES:
        raise ValueError(
            f"Unknown title matching strategy: {strategy!r}. "
            f"Valid options: {', '.join(MATCH_STRATEGIES)}"
        )

    norm_first = normalize_title(first)
    norm_second = normalize_title(second)
    if norm_first == norm_second:
        return True
    if strategy == "exact":
        return False
    return norm_first.startswith(norm_second) or norm_second.startswith(norm_first)


class TitleMatcher:
    """Resolves option headings to options of one record.

    Attributes:
        record: Record whose considered_options are searched and extended.
        strategy: Matching strategy passed to titles_match().

    """

    def __init__(self, record: ArchitecturalDecisionRecord, strategy: str = "prefix") -> None:
        if strategy not in MATCH_STRATEGIES:
            raise ValueError(f"Unknown title matching strategy: {strategy!r}")
        self.record = record
        self.strategy = strategy

    def find(self, title: str) -> Option | None:
        """Return the first existing option matching title, or None."""
        for option in self.record.considered_options:
            if titles_match(option.title, title, self.strategy):
                return option
        return None

    def resolve(self, title: str) -> Option:
        """Return the existing option for title, creating it if needed.

        Args:
            title: Candidate title as written in the document.

        Returns:
            The first matching option in declaration order, or a new option
            appended to the record.

        """
        option = self.find(title)
        if option is not None:
            logger.debug("Matched option heading %r to %r", title, option.title)
            return option

        logger.debug("No considered option matches %r, adding it", title)
        return self.record.add_option(title)
