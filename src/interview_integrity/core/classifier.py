"""
Question content classifier.

Decides whether a stored problem statement is complete or has degraded
into a bare link to an external site.

Known limitation: this is a heuristic, not a grammar check. A complete
verdict only means the body has non-link text. For imported categories
(config.STRUCTURED_CATEGORIES) a statement that cites a URL without
Input/Output/Example sections is also flagged, even if the prose is
otherwise fine, so audit output needs human review.
"""
import re
from typing import List, Optional, Sequence

from interview_integrity import config
from interview_integrity.models.question_models import (
    Classification,
    ContentStatus,
    Question,
)

_LINK_RE = re.compile("|".join(f"(?:{p})" for p in config.LINK_PATTERNS), re.IGNORECASE)


def _section_pattern(name: str) -> "re.Pattern[str]":
    # A heading line: "### Input", "**Output**", "Example 1:", "Input: ..."
    return re.compile(
        rf"^[ \t]*(?:#{{1,6}}[ \t]*)?(?:\*\*)?{re.escape(name)}s?(?:[ \t]*\d+)?"
        rf"(?:\*\*)?[ \t]*(?::.*)?$",
        re.IGNORECASE | re.MULTILINE,
    )


def find_links(text: str) -> List[str]:
    """Return every URL-like substring in the text."""
    return _LINK_RE.findall(text or "")


def link_fraction(text: str) -> float:
    """Share of the non-whitespace characters that belong to links."""
    compact = "".join((text or "").split())
    if not compact:
        return 0.0
    link_chars = sum(len(link) for link in find_links(text))
    return min(1.0, link_chars / len(compact))


def has_structured_sections(text: str, sections: Optional[Sequence[str]] = None) -> bool:
    """True if every required section heading appears in the text."""
    required = sections if sections is not None else config.STRUCTURED_SECTIONS
    return all(_section_pattern(name).search(text or "") for name in required)


def classify_text(
    text: str,
    threshold: Optional[float] = None,
    category: Optional[str] = None
) -> Classification:
    """
    Classify a raw problem statement.

    Args:
        text: The problem statement body.
        threshold: Link share at which the body counts as a bare link.
            Defaults to config.LINK_FRACTION_THRESHOLD.
        category: Question category. Bodies in config.STRUCTURED_CATEGORIES
            that cite a link must also carry the structured sections.
            Without a category only the link share is checked.

    Returns:
        Classification with status, reason and the links found.
    """
    if threshold is None:
        threshold = config.LINK_FRACTION_THRESHOLD

    if not text or not text.strip():
        return Classification(status=ContentStatus.DEGRADED, reason="empty")

    links = find_links(text)
    if not links:
        return Classification(status=ContentStatus.COMPLETE)

    fraction = link_fraction(text)
    if fraction >= threshold:
        return Classification(
            status=ContentStatus.DEGRADED,
            reason="link_only",
            links=links,
            link_fraction=fraction,
        )

    # Importer placeholders wrap the link in a sentence or two of prose
    if category in config.STRUCTURED_CATEGORIES and not has_structured_sections(text):
        return Classification(
            status=ContentStatus.DEGRADED,
            reason="link_reference",
            links=links,
            link_fraction=fraction,
        )

    return Classification(status=ContentStatus.COMPLETE, links=links, link_fraction=fraction)


def classify(question: Question, threshold: Optional[float] = None) -> Classification:
    """Classify a stored question by its problem statement."""
    return classify_text(
        question.problem_statement, threshold=threshold, category=question.category)


def is_degraded(question: Question) -> bool:
    return classify(question).is_degraded
