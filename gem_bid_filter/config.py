from .model import LabelMatcher

# Selectors
# Ordered structural hints for bid cards. Earlier hints are more specific.
CARD_SELECTORS = [
    ".bid-card",
    ".bid-card-list .card",
    ".search-bid-results .card",
    ".card",
    ".search-result",
    ".bid-listing",
    ".list-group-item",
    ".result-item",
    ".search-result-item",
]

# Used when a selector hit is a fragment of a card (e.g. a row inside it)
PROMOTE_SELECTORS = [
    ".bid-card",
    ".card",
    ".list-group-item",
    ".search-result",
    ".bid-listing",
    ".result-item",
    ".search-result-item",
]

# Labels
FIELDS = {
    "bid_no": LabelMatcher("bid_no", ("bid no", "bid number")),
    "items": LabelMatcher("items", ("items", "item", "description")),
    "quantity": LabelMatcher("quantity", ("quantity",)),
    "department": LabelMatcher(
        "department",
        ("department name and address", "department", "ministry"),
    ),
    "start_date": LabelMatcher("start_date", ("start date",), date_valued=True),
    "end_date": LabelMatcher("end_date", ("end date",), date_valued=True),
}

# Card predicate / fallback scan labels
START_DATE_LABEL = r"start\s*date"
BID_NO_LABEL = r"bid\s*no"

# Node attributes (persisted on the tree)
ORIGINAL_ORDER_ATTR = "data-gem-original-order"
START_DATE_ATTR = "data-gem-start-date-ts"

# Markers
HIGHLIGHT_CLASS = "gem-bid-highlight-today"
WEEK_HIGHLIGHT_CLASS = "gem-bid-highlight-week"
HIDE_CLASS = "gem-bid-hidden"
DIM_CLASS = "gem-bid-dimmed"
ALL_MARKERS = (HIGHLIGHT_CLASS, WEEK_HIGHLIGHT_CLASS, HIDE_CLASS, DIM_CLASS)

# Dates
TIMEZONE = "Asia/Kolkata"  # GeM publishes in IST
OLD_BID_DAYS = 7

# Refresh Configuration
DEBOUNCE_SECONDS = 0.3  # Quiet period before re-extracting after a change
POLL_INTERVAL = 0.5  # Seconds between file checks in watch mode

# Settings
SETTINGS_FILE = "data/settings.json"
DEFAULT_SETTINGS = {
    "auto_highlight": True,
    "hide_old_bids": False,
}
