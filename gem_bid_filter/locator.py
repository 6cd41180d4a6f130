import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .config import BID_NO_LABEL, CARD_SELECTORS, PROMOTE_SELECTORS, START_DATE_LABEL
from .dom import (
    element_text,
    count_matches,
    find_text_nodes,
    is_document_root,
    parent_element,
    unique_elements,
)

logger = logging.getLogger(__name__)

START_DATE_RE = re.compile(START_DATE_LABEL, re.IGNORECASE)
BID_NO_RE = re.compile(BID_NO_LABEL, re.IGNORECASE)
FALLBACK_LABEL_RE = re.compile(rf"({START_DATE_LABEL}|{BID_NO_LABEL})", re.IGNORECASE)


def element_looks_like_card(element: Optional[Tag]) -> bool:
    """
    A card holds a start date label and exactly one bid number label.

    Two or more "Bid No" labels mean the element wraps several cards.
    """
    if element is None:
        return False
    text = element_text(element)
    if not text:
        return False
    if not START_DATE_RE.search(text):
        return False
    return count_matches(text, BID_NO_RE) == 1


def promote_card_element(element: Optional[Tag]) -> Optional[Tag]:
    """Return the card that owns a selector hit, or None."""
    if element is None:
        return None
    if element_looks_like_card(element):
        return element

    for selector in PROMOTE_SELECTORS:
        candidate = element.css.closest(selector)
        if candidate is not None and element_looks_like_card(candidate):
            return candidate

    return None


def find_card_container_from_node(element: Optional[Tag]) -> Optional[Tag]:
    el = element
    while el is not None and not is_document_root(el):
        if element_looks_like_card(el):
            return el
        el = parent_element(el)
    return None


def find_bid_cards(soup: BeautifulSoup) -> List[Tag]:
    """
    Locate bid cards on the page.

    Strategy 1: structural hints (card-like selectors), each hit promoted to its card.
    Strategy 2: scan text nodes for "Start Date" / "Bid No" and walk up to a card.

    Returns:
        Unique card elements in the order they were found; empty if the page
        is not recognised
    """
    cards = []
    for selector in CARD_SELECTORS:
        for node in soup.select(selector):
            candidate = promote_card_element(node)
            if candidate is not None and element_looks_like_card(candidate):
                cards.append(candidate)

    unique = unique_elements(cards)
    if unique:
        logger.debug(f"Found {len(unique)} bid cards via selectors")
        return unique

    # Fallback: text nodes carrying a card label
    root = soup.body or soup
    fallback_cards = []
    for node in find_text_nodes(root, FALLBACK_LABEL_RE):
        card = find_card_container_from_node(parent_element(node))
        if card is not None:
            fallback_cards.append(card)

    unique = unique_elements(fallback_cards)
    if unique:
        logger.debug(f"Found {len(unique)} bid cards via label text fallback")
    else:
        logger.info("No bid cards found on page")
    return unique
