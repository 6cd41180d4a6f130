"""Tests for the tabular bid view."""
from gem_bid_filter.parser import GemParser
from gem_bid_filter.report import COLUMNS, bids_to_frame, render_table


class TestReport:
    def test_frame_columns_and_order(self, listing, today) -> None:
        bids = GemParser().parse_all_bids(listing)
        df = bids_to_frame(bids, today)
        assert list(df.columns) == COLUMNS
        assert list(df['Bid No']) == [bid.bid_no for bid in bids]
        assert list(df['Posted']) == ["9 days ago", "Today", "", "2 days ago"]

    def test_long_values_truncated(self, make_page) -> None:
        bids = GemParser().parse_all_bids(make_page([("GEM/1", "01-03-2024")]))
        bids[0].items = "x" * 200
        assert len(bids_to_frame(bids).loc[0, 'Items']) == 60

    def test_render(self, listing, today) -> None:
        text = render_table(GemParser().parse_all_bids(listing), today)
        assert "GEM/2024/B/1004" in text
        assert "Office Chairs" in text

    def test_render_empty(self) -> None:
        assert render_table([]) == "No bids found."
