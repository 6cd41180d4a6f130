import logging
import re
from typing import Optional

from bs4 import Tag

from .config import FIELDS
from .dates import DATE_ONLY_RE, DATE_VALUE_SOURCE
from .dom import (
    collect_text_nodes,
    contains,
    element_text,
    is_text_node,
    normalize_whitespace,
    own_text,
    parent_element,
)
from .model import LabelMatcher

logger = logging.getLogger(__name__)

LABEL_PUNCTUATION_RE = re.compile(r"^[:\s-]+|[:\s-]+$")


def _inline_pattern(pattern: re.Pattern) -> re.Pattern:
    return re.compile(pattern.pattern + r"\s*:?\s*(.+)", re.IGNORECASE)


def _inline_date_pattern(pattern: re.Pattern) -> re.Pattern:
    return re.compile(pattern.pattern + r"\s*:?\s*(" + DATE_VALUE_SOURCE + ")", re.IGNORECASE)


def clean_value(text: Optional[str]) -> str:
    """Collapse whitespace and drop label punctuation left around a value."""
    return LABEL_PUNCTUATION_RE.sub("", normalize_whitespace(text))

def _is_other_label(text: str, matcher: LabelMatcher) -> bool:
    return any(other.matches(text) for other in FIELDS.values() if other.name != matcher.name)


def _acceptable(value: str, matcher: LabelMatcher) -> bool:
    # Date fields only take date-shaped values
    if not value:
        return False
    return not matcher.date_valued or DATE_ONLY_RE.search(value) is not None


def _node_value(node) -> str:
    if isinstance(node, Tag):
        return clean_value(element_text(node))
    if is_text_node(node):
        return clean_value(node)
    return ""


def extract_label_value(card: Optional[Tag], matcher: LabelMatcher) -> str:
    """
    Find the value that belongs to a label inside a card.

    Heuristics, most structurally reliable first:
    1. Date fields: "<label>: DD-MM-YYYY [H:MM AM]" anywhere in the card text
    2. An element whose text is "<label>: value"
    3. The first following sibling of a bare label element, bare text included
    4. Text node adjacency for flat label/value markup

    A value never comes from text carrying another field's label, and date
    fields only accept values containing a date.

    Returns:
        Collapsed value text, or "" when the card has no such field
    """
    if card is None:
        return ""

    # 1. Inline date fast path
    card_text = element_text(card)
    if matcher.date_valued and card_text:
        for pattern in matcher.patterns:
            match = _inline_date_pattern(pattern).search(card_text)
            if match and match.group(1):
                return normalize_whitespace(match.group(1))

    # 2./3. Label elements: the label must sit in the element's own text,
    # wrappers that only contain a label further down are skipped
    for el in card.find_all(True):
        label_text = own_text(el)
        if not label_text:
            continue

        for pattern in matcher.patterns:
            if not pattern.search(label_text):
                continue

            inline = _inline_pattern(pattern).search(element_text(el))
            if inline:
                value = clean_value(inline.group(1))
                if _acceptable(value, matcher):
                    return value

            sibling_value = find_value_from_sibling(el, matcher, card)
            if _acceptable(sibling_value, matcher):
                logger.debug(f"{matcher.name}: value taken from sibling")
                return sibling_value

    # 4. Text node adjacency
    text_nodes = collect_text_nodes(card)
    for i, (node, text) in enumerate(text_nodes):
        for pattern in matcher.patterns:
            if not pattern.search(text):
                continue

            inline = _inline_pattern(pattern).search(text)
            if inline:
                value = clean_value(inline.group(1))
                if _acceptable(value, matcher):
                    return value

            label_removed = clean_value(pattern.sub("", text, count=1))
            if label_removed:
                continue

            parent = parent_element(node)
            if parent is not None:
                sibling_values = [
                    t for n, t in collect_text_nodes(parent)
                    if n is not node and not matcher.matches(t) and not _is_other_label(t, matcher)
                ]
                # Flat groupings put the value after the label
                if sibling_values and _acceptable(sibling_values[-1], matcher):
                    return sibling_values[-1]

            for _, next_text in text_nodes[i + 1:]:
                if not next_text or matcher.matches(next_text):
                    continue
                if _is_other_label(next_text, matcher):
                    break
                if _acceptable(next_text, matcher):
                    logger.debug(f"{matcher.name}: value taken from next text node")
                    return next_text
                break

    return ""


def _scan_siblings(start, matcher: LabelMatcher) -> Optional[str]:
    """First value among the nodes after `start`, None when another field's label comes first."""
    for sibling in start.next_siblings:
        text = _node_value(sibling)
        if not text or matcher.matches(text):
            continue
        if _is_other_label(text, matcher):
            return None
        return text
    return ""


def find_value_from_sibling(label_element: Tag, matcher: LabelMatcher, card: Optional[Tag] = None) -> str:
    """
    Scan the nodes after a bare label element for its value.

    Bare text counts, so "<b>Bid No</b>: GEM/1" yields "GEM/1". Falls back to
    the parent's following siblings, as long as the parent is still inside
    the card. Reaching another field's label ends the search.
    """
    if label_element is None:
        return ""

    value = _scan_siblings(label_element, matcher)
    if value is None:
        return ""
    if value:
        return value

    parent = parent_element(label_element)
    if parent is None or parent is card:
        return ""
    if card is not None and not contains(card, parent):
        return ""

    return _scan_siblings(parent, matcher) or ""
