"""Tests for marker application and removal."""
from gem_bid_filter.config import DIM_CLASS, HIDE_CLASS, HIGHLIGHT_CLASS, WEEK_HIGHLIGHT_CLASS
from gem_bid_filter.dom import add_marker, has_marker, remove_markers
from gem_bid_filter.markers import hide_bids, highlight_bids, show_all_bids, show_hidden_bids
from gem_bid_filter.parser import GemParser, parse_html


class TestMarkerPrimitives:
    def test_add_keeps_existing_classes(self) -> None:
        tag = parse_html('<div class="card shadow"></div>').div
        add_marker(tag, HIGHLIGHT_CLASS)
        add_marker(tag, HIGHLIGHT_CLASS)
        assert tag["class"] == ["card", "shadow", HIGHLIGHT_CLASS]

    def test_remove_last_class_drops_attribute(self) -> None:
        tag = parse_html("<div></div>").div
        add_marker(tag, HIDE_CLASS)
        remove_markers(tag, HIDE_CLASS)
        assert not tag.has_attr("class")

    def test_remove_absent_marker(self) -> None:
        tag = parse_html('<div class="card"></div>').div
        remove_markers(tag, HIDE_CLASS)
        assert tag["class"] == ["card"]


class TestBidMarkers:
    def test_highlight_and_clear(self, listing) -> None:
        bids = GemParser().parse_all_bids(listing)
        assert highlight_bids(bids[:2]) == 2
        assert has_marker(bids[0].element, HIGHLIGHT_CLASS)

        show_all_bids(listing)
        assert not any(has_marker(bid.element, HIGHLIGHT_CLASS) for bid in bids)

    def test_show_hidden_keeps_highlight(self, listing) -> None:
        bids = GemParser().parse_all_bids(listing)
        highlight_bids(bids[:1], WEEK_HIGHLIGHT_CLASS)
        hide_bids(bids[1:])

        show_hidden_bids(listing)
        assert has_marker(bids[0].element, WEEK_HIGHLIGHT_CLASS)
        assert not any(has_marker(bid.sort_element, HIDE_CLASS) for bid in bids)

    def test_clears_ordering_node_markers(self) -> None:
        soup = parse_html("""
        <html><body><div id="results">
          <div class="wrap"><div class="card"><p>Bid No: 1</p><p>Start Date: 01-01-2024</p></div></div>
          <div class="wrap"><div class="card"><p>Bid No: 2</p><p>Start Date: 02-01-2024</p></div></div>
        </div></body></html>
        """)
        bids = GemParser().parse_all_bids(soup)
        hide_bids(bids)
        for bid in bids:
            add_marker(bid.element, DIM_CLASS)
        assert all(has_marker(bid.sort_element, HIDE_CLASS) for bid in bids)

        show_all_bids(soup)
        assert not any(has_marker(bid.sort_element, HIDE_CLASS) for bid in bids)
        assert not any(has_marker(bid.element, DIM_CLASS) for bid in bids)

    def test_detached_bid_is_skipped(self, listing) -> None:
        bids = GemParser().parse_all_bids(listing)
        bids[0].element.extract()
        assert highlight_bids(bids) == len(bids) - 1
