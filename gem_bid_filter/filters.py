"""Filtering and sorting over parsed bids. No tree access happens here."""
from datetime import date
from typing import List, Optional

from .dates import DateLike, is_today, is_within_days, strip_time
from .model import BidItem


def _order_index(bid: BidItem) -> int:
    return bid.original_order if bid.original_order is not None else 0


def sort_by_newest(bids: List[BidItem]) -> List[BidItem]:
    """
    Newest start date first. Undated bids follow all dated ones, in their
    original page order.
    """
    with_date = [bid for bid in bids if bid.has_start_date]
    without_date = [bid for bid in bids if not bid.has_start_date]

    with_date.sort(key=lambda bid: bid.start_date, reverse=True)
    without_date.sort(key=_order_index)

    return with_date + without_date


def filter_today(bids: List[BidItem], today: Optional[date] = None) -> List[BidItem]:
    return [bid for bid in bids if is_today(bid.start_date, today)]


def filter_this_week(bids: List[BidItem], today: Optional[date] = None) -> List[BidItem]:
    return [bid for bid in bids if is_within_days(bid.start_date, 7, today)]


def filter_date_range(bids: List[BidItem], from_date: Optional[DateLike] = None, to_date: Optional[DateLike] = None) -> List[BidItem]:
    """Bids whose start day lies in [from_date, to_date]. Either bound may be open."""
    start = strip_time(from_date) if from_date else None
    end = strip_time(to_date) if to_date else None

    result = []
    for bid in bids:
        if not bid.has_start_date:
            continue
        target = strip_time(bid.start_date)
        if start and target < start:
            continue
        if end and target > end:
            continue
        result.append(bid)
    return result


def filter_older_than(bids: List[BidItem], days: int, today: Optional[date] = None) -> List[BidItem]:
    """Dated bids that fall outside the last `days` days."""
    return [
        bid for bid in bids
        if bid.has_start_date and not is_within_days(bid.start_date, days, today)
    ]
