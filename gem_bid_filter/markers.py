"""Named markers (CSS classes) on bid nodes: highlight, hide and their removal."""
import logging
from typing import List

from bs4 import BeautifulSoup

from .config import ALL_MARKERS, HIDE_CLASS, HIGHLIGHT_CLASS
from .dom import add_marker, is_attached, remove_markers
from .locator import find_bid_cards
from .model import BidItem
from .parser import GemParser

logger = logging.getLogger(__name__)


def highlight_bids(bids: List[BidItem], marker: str = HIGHLIGHT_CLASS) -> int:
    count = 0
    for bid in bids:
        target = bid.element or bid.sort_element
        if target is None or not is_attached(target):
            continue
        add_marker(target, marker)
        count += 1
    return count


def hide_bids(bids: List[BidItem]) -> int:
    count = 0
    for bid in bids:
        target = bid.target
        if target is None or not is_attached(target):
            continue
        add_marker(target, HIDE_CLASS)
        count += 1
    if count:
        logger.debug(f"Hid {count} bids")
    return count


def _clear(soup: BeautifulSoup, markers):
    cards = find_bid_cards(soup)
    common_ancestor = GemParser.find_common_ancestor(cards)
    for card in cards:
        remove_markers(card, *markers)
        sort_element = GemParser.get_sort_element(card, common_ancestor)
        if sort_element is not None and sort_element is not card:
            remove_markers(sort_element, *markers)


def show_all_bids(soup: BeautifulSoup):
    _clear(soup, ALL_MARKERS)


def show_hidden_bids(soup: BeautifulSoup):
    _clear(soup, (HIDE_CLASS,))
