from datetime import date

import pytest

from gem_bid_filter.parser import parse_html

CARD_TEMPLATE = """
<div class="card">
  <div class="block_header">
    <p class="bid_no pull-left"><span class="bid_title">BID NO:</span> <a class="bid_no_hover">{bid_no}</a></p>
  </div>
  <div class="card-body">
    <div class="col-md-4">
      <div class="row"><strong>Items:</strong> <a>{items}</a></div>
      <div class="row"><strong>Quantity:</strong> {quantity}</div>
    </div>
    <div class="col-md-5">
      <div class="row"><strong>Department Name And Address:</strong></div>
      <div class="row">{department}</div>
    </div>
    <div class="col-md-3">
      <div class="start_block"><span>Start Date:</span> <span class="start_date">{start}</span></div>
      <div class="end_block"><span>End Date:</span> <span>{end}</span></div>
    </div>
  </div>
</div>
"""


def render_card(bid_no, start="", end="", items="Office Chairs", quantity="25", department="Indian Railways Northern Zone"):
    return CARD_TEMPLATE.format(
        bid_no=bid_no, items=items, quantity=quantity, department=department, start=start, end=end,
    )


@pytest.fixture
def today():
    return date(2024, 3, 10)


@pytest.fixture
def make_page():
    """Build a GeM-like listing page from (bid_no, start_date_text) pairs."""
    def _make(cards):
        body = "".join(render_card(bid_no, start) for bid_no, start in cards)
        return parse_html(f'<html><body><div id="pagi_content">{body}</div></body></html>')
    return _make


@pytest.fixture
def listing(make_page):
    return make_page([
        ("GEM/2024/B/1001", "01-03-2024 10:00 AM"),
        ("GEM/2024/B/1002", "10-03-2024 09:15 AM"),
        ("GEM/2024/B/1003", ""),
        ("GEM/2024/B/1004", "08-03-2024"),
    ])


@pytest.fixture
def simple_list():
    return parse_html("""
    <html><body>
      <ul class="bid-list">
        <li class="list-group-item"><span>Bid No: 1</span> <span>Start Date: 01-01-2099</span></li>
        <li class="list-group-item"><span>Bid No: 2</span> <span>Start Date:</span></li>
        <li class="list-group-item"><span>Bid No: 3</span> <span>Start Date: 01-01-2000</span></li>
      </ul>
    </body></html>
    """)


@pytest.fixture
def card_html():
    return render_card
