import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from bs4 import Tag


@dataclass(frozen=True)
class LabelMatcher:
    """Declarative label for one field.

    ``labels`` are literal alternatives tried in order ("bid no", "bid number").
    Inner whitespace is flexible and a word boundary closes the label, so
    "Bid No." and "BidNo:" both match "bid no".
    """
    name: str
    labels: Tuple[str, ...]
    date_valued: bool = False
    patterns: Tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        compiled = tuple(
            re.compile(label_source(label), re.IGNORECASE) for label in self.labels
        )
        object.__setattr__(self, "patterns", compiled)

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self.patterns)


def label_source(label: str) -> str:
    """Regex source for a literal label, e.g. 'bid no' -> 'bid\\s*no\\b'."""
    return r"\s*".join(re.escape(word) for word in label.split()) + r"\b"


@dataclass(eq=False)
class BidItem:
    """Data model for a single bid card on the listing page"""
    bid_no: str = ""
    items: str = ""
    quantity: str = ""
    department: str = ""
    start_date: Optional[datetime] = None
    start_date_raw: str = ""
    end_date: Optional[datetime] = None
    end_date_raw: str = ""

    # Tree handles
    element: Optional[Tag] = field(default=None, repr=False)  # anchor node
    sort_element: Optional[Tag] = field(default=None, repr=False)  # ordering node
    original_order: Optional[int] = None

    @property
    def has_start_date(self) -> bool:
        return self.start_date is not None

    @property
    def target(self) -> Optional[Tag]:
        """Node moved or hidden for this bid."""
        return self.sort_element or self.element

    def to_dict(self):
        return {
            "bid_no": self.bid_no,
            "items": self.items,
            "quantity": self.quantity,
            "department": self.department,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "start_date_raw": self.start_date_raw,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "end_date_raw": self.end_date_raw,
            "original_order": self.original_order,
        }


@dataclass
class StatusUpdate:
    message: str
    level: str = "info"  # info | warning

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"
