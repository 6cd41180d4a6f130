from datetime import date
from typing import List, Optional

import pandas as pd

from .dates import format_relative
from .model import BidItem

import logging
logger = logging.getLogger(__name__)

COLUMNS = ['Bid No', 'Items', 'Quantity', 'Department', 'Start Date', 'End Date', 'Posted']
MAX_CELL_WIDTH = 60


def _cell(value: str) -> str:
    cleaned = " ".join(value.split())
    if len(cleaned) > MAX_CELL_WIDTH:
        return cleaned[:MAX_CELL_WIDTH - 3] + "..."
    return cleaned


def bids_to_frame(bids: List[BidItem], today: Optional[date] = None) -> pd.DataFrame:
    """
    Tabular view of bids in the order given.

    Dates are shown as their source text; "Posted" is the start date relative to today.
    """
    rows = []
    for bid in bids:
        rows.append({
            'Bid No': _cell(bid.bid_no),
            'Items': _cell(bid.items),
            'Quantity': _cell(bid.quantity),
            'Department': _cell(bid.department),
            'Start Date': bid.start_date_raw,
            'End Date': bid.end_date_raw,
            'Posted': format_relative(bid.start_date, today),
        })
    return pd.DataFrame(rows, columns=COLUMNS)


def render_table(bids: List[BidItem], today: Optional[date] = None) -> str:
    if not bids:
        return "No bids found."
    df = bids_to_frame(bids, today)
    # Drop columns that are empty for every bid
    df = df.loc[:, (df != '').any(axis=0)]
    logger.debug(f"Rendering {len(df)} rows, columns {list(df.columns)}")
    return df.to_string(index=False)
