import logging
from datetime import date
from typing import List, Optional

from bs4 import BeautifulSoup

from . import filters, markers
from .config import HIGHLIGHT_CLASS, OLD_BID_DAYS, WEEK_HIGHLIGHT_CLASS
from .dates import DateLike, current_date
from .model import BidItem, StatusUpdate
from .parser import GemParser
from .reorder import find_best_container
from .reorder import reorder as reorder_bids
from .reorder import restore_original_order as restore_bids
from .state import FilterSession

logger = logging.getLogger(__name__)


class BidFilterController:
    """
    Operations behind the filter panel: extract, filter, highlight, sort, reset.

    Every operation starts from a fresh extraction of the current document and
    leaves a StatusUpdate in ``self.status`` for the caller to render.
    """

    def __init__(self, soup: Optional[BeautifulSoup] = None, session: Optional[FilterSession] = None, today: Optional[date] = None):
        self.parser = GemParser()
        self.soup = soup
        self.session = session or FilterSession()
        self._today = today
        self.status = StatusUpdate("Ready")

    @property
    def today(self) -> date:
        return self._today or current_date()

    @property
    def settings(self):
        return self.session.settings

    def load_document(self, soup: BeautifulSoup):
        self.soup = soup

    def _update_status(self, message: str, level: str = "info"):
        self.status = StatusUpdate(message, level)
        if level == "warning":
            logger.warning(message)
        else:
            logger.info(message)

    def _enforce_hide_old(self):
        if self.settings.hide_old_bids:
            self.hide_bids_older_than(OLD_BID_DAYS)

    # Extraction and pure filters

    def extract_all(self) -> List[BidItem]:
        if self.soup is None:
            return []
        return self.parser.parse_all_bids(self.soup)

    def filter_today(self) -> List[BidItem]:
        return filters.filter_today(self.extract_all(), self.today)

    def filter_this_week(self) -> List[BidItem]:
        return filters.filter_this_week(self.extract_all(), self.today)

    def filter_date_range(self, from_date: Optional[DateLike] = None, to_date: Optional[DateLike] = None) -> List[BidItem]:
        return filters.filter_date_range(self.extract_all(), from_date, to_date)

    # Highlight views

    def show_todays_bids(self, hide_others: bool = False, set_active: bool = True, reset_view: bool = True, status_message: Optional[str] = None) -> List[BidItem]:
        all_bids = self.extract_all()
        todays_bids = filters.filter_today(all_bids, self.today)

        if reset_view:
            self._show_all()

        if todays_bids:
            markers.highlight_bids(todays_bids, HIGHLIGHT_CLASS)
            if hide_others:
                keep = {id(bid) for bid in todays_bids}
                markers.hide_bids([bid for bid in all_bids if id(bid) not in keep])

        message = status_message or f"Found {len(todays_bids)} bids from today"
        self._update_status(message, "info" if todays_bids else "warning")

        if set_active:
            self.session.active_filter = "today"

        self._enforce_hide_old()
        return todays_bids

    def show_this_week_bids(self, set_active: bool = True, reset_view: bool = True) -> List[BidItem]:
        week_bids = filters.filter_this_week(self.extract_all(), self.today)

        if reset_view:
            self._show_all()

        if week_bids:
            markers.highlight_bids(week_bids, WEEK_HIGHLIGHT_CLASS)

        self._update_status(f"Found {len(week_bids)} bids from this week", "info" if week_bids else "warning")

        if set_active:
            self.session.active_filter = "week"

        self._enforce_hide_old()
        return week_bids

    def show_date_range_bids(self, from_date: Optional[DateLike] = None, to_date: Optional[DateLike] = None, reset_view: bool = True) -> List[BidItem]:
        range_bids = self.filter_date_range(from_date, to_date)

        if reset_view:
            self._show_all()

        if range_bids:
            markers.highlight_bids(range_bids, WEEK_HIGHLIGHT_CLASS)

        self._update_status(f"Found {len(range_bids)} bids in range", "info" if range_bids else "warning")
        self._enforce_hide_old()
        return range_bids

    # Ordering

    def sort_by_newest(self, set_active: bool = True) -> bool:
        all_bids = self.extract_all()
        sorted_bids = filters.sort_by_newest(all_bids)

        if find_best_container(sorted_bids) is None:
            self._update_status("Unable to locate bid list to sort", "warning")
            return False

        if not any(bid.has_start_date for bid in sorted_bids):
            self._update_status("No start dates found to sort", "warning")
            return False

        if not reorder_bids(sorted_bids):
            self._update_status("Unable to locate bid list to sort", "warning")
            return False

        self._update_status("Sorted by newest first")

        if set_active:
            self.session.active_filter = "sort"

        self._enforce_hide_old()
        return True

    def reorder(self, bids: List[BidItem]) -> bool:
        applied = reorder_bids(bids)
        if not applied:
            self._update_status("Unable to locate bid list to reorder", "warning")
        return applied

    def restore_original_order(self) -> bool:
        return restore_bids(self.extract_all())

    def reset(self):
        self._show_all()
        self.restore_original_order()
        self.session.active_filter = None
        self._update_status("Filters reset")
        self._enforce_hide_old()

    # Settings

    def hide_bids_older_than(self, days: int) -> int:
        to_hide = filters.filter_older_than(self.extract_all(), days, self.today)
        if not to_hide:
            return 0
        return markers.hide_bids(to_hide)

    def apply_settings(self):
        if not self.session.active_filter and self.settings.auto_highlight:
            self.show_todays_bids(
                hide_others=False,
                set_active=False,
                reset_view=True,
                status_message="Auto-highlighted today's bids",
            )

        self._enforce_hide_old()

    def update_settings(self, **changes) -> bool:
        updated = False
        for key, value in changes.items():
            if not hasattr(self.settings, key):
                logger.warning(f"Ignoring unknown setting {key!r}")
                continue
            setattr(self.settings, key, bool(value))
            updated = True

        if updated:
            self.reapply_active_filter("settings-change")
        return updated

    def reapply_active_filter(self, reason: str):
        logger.debug(f"Reapplying filter {self.session.active_filter!r} ({reason})")
        active = self.session.active_filter
        if active == "today":
            self.show_todays_bids(set_active=False, reset_view=True)
        elif active == "week":
            self.show_this_week_bids(set_active=False, reset_view=True)
        elif active == "sort":
            self.sort_by_newest(set_active=False)
        else:
            if reason == "settings-change" and not self.settings.hide_old_bids and self.soup is not None:
                markers.show_hidden_bids(self.soup)
            self.apply_settings()

        self._enforce_hide_old()

    def refresh(self):
        """Re-apply the active view after the document changed."""
        if self.soup is None:
            return
        self.reapply_active_filter("mutation")

    def _show_all(self):
        if self.soup is not None:
            markers.show_all_bids(self.soup)
