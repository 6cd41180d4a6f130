from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .config import FIELDS, START_DATE_ATTR
from .dates import from_timestamp, parse_gem_date, to_timestamp
from .dom import contains, is_attached, is_safe_container, parent_element
from .extractor import extract_label_value
from .locator import find_bid_cards
from .model import BidItem
from .order import cache_original_order, read_or_none
import logging

logger = logging.getLogger(__name__)


def parse_html(html_content: str) -> BeautifulSoup:
    return BeautifulSoup(html_content, 'lxml')


class GemParser:
    def parse_bid_card(self, card_element: Optional[Tag], common_ancestor: Optional[Tag] = None) -> Optional[BidItem]:
        """
        Extract the fields of one bid card.

        Labels and values come in several shapes on GeM pages:
            <span>Bid No:</span> <a>GEM/2024/B/4512345</a>
            <div>Start Date: 05-03-2024 11:45 AM</div>

        Args:
            card_element: Anchor node of the card
            common_ancestor: Shared ancestor of all cards, used to pick the ordering node

        Returns:
            BidItem, or None if the card is gone from the tree
        """
        if card_element is None or not is_attached(card_element):
            logger.debug("Skipping card that is no longer in the document")
            return None

        values = {name: extract_label_value(card_element, matcher) for name, matcher in FIELDS.items()}
        start_date_text = values["start_date"]
        end_date_text = values["end_date"]

        start_date = None
        cached_ts = card_element.get(START_DATE_ATTR)
        if cached_ts and not start_date_text:
            start_date = from_timestamp(cached_ts)

        if start_date is None and start_date_text:
            start_date = parse_gem_date(start_date_text)
            if start_date is not None:
                card_element[START_DATE_ATTR] = to_timestamp(start_date)
            else:
                logger.debug(f"Unparseable start date {start_date_text!r} for bid {values['bid_no']!r}")

        end_date = parse_gem_date(end_date_text) if end_date_text else None

        return BidItem(
            bid_no=values["bid_no"],
            items=values["items"],
            quantity=values["quantity"],
            department=values["department"],
            start_date=start_date,
            start_date_raw=start_date_text,
            end_date=end_date,
            end_date_raw=end_date_text,
            element=card_element,
            sort_element=self.get_sort_element(card_element, common_ancestor),
        )

    def parse_all_bids(self, soup: BeautifulSoup) -> List[BidItem]:
        """Parse every bid on the page and stamp the original order of their ordering nodes."""
        cards = find_bid_cards(soup)
        common_ancestor = self.find_common_ancestor(cards)

        bids = []
        for card in cards:
            bid = self.parse_bid_card(card, common_ancestor)
            if bid is not None:
                bids.append(bid)

        cache_original_order(bid.target for bid in bids)
        for bid in bids:
            bid.original_order = read_or_none(bid.target)

        dated = sum(1 for bid in bids if bid.has_start_date)
        logger.info(f"Parsed {len(bids)} bids ({dated} with start date)")
        return bids

    @staticmethod
    def find_common_ancestor(elements: List[Tag]) -> Optional[Tag]:
        if not elements:
            return None

        path = [elements[0]] + list(elements[0].parents)
        for candidate in path:
            if all(contains(candidate, el) for el in elements):
                return candidate
        return None

    @staticmethod
    def get_sort_element(card_element: Optional[Tag], common_ancestor: Optional[Tag]) -> Optional[Tag]:
        """Ancestor-or-self of the card that is a direct child of the common ancestor."""
        if card_element is None:
            return None
        if common_ancestor is None or not is_safe_container(common_ancestor):
            return card_element
        # A single card is its own common ancestor
        if card_element is common_ancestor:
            return card_element

        el = card_element
        parent = parent_element(el)
        while parent is not None and parent is not common_ancestor:
            el = parent
            parent = parent_element(el)
        return el
