import logging
from typing import Iterable, Optional

from bs4 import Tag

from .config import ORIGINAL_ORDER_ATTR

logger = logging.getLogger(__name__)


def read_or_none(node: Optional[Tag]) -> Optional[int]:
    if node is None:
        return None
    raw = node.get(ORIGINAL_ORDER_ATTR)
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed order stamp {raw!r}")
        return None


def stamp_if_absent(node: Optional[Tag], index: int) -> bool:
    """Stamp the first-seen position on a node. Existing stamps are never touched."""
    if node is None or node.has_attr(ORIGINAL_ORDER_ATTR):
        return False
    node[ORIGINAL_ORDER_ATTR] = str(index)
    return True


def cache_original_order(nodes: Iterable[Tag]) -> int:
    """Stamp each node with its position in the list. Returns the number of new stamps."""
    stamped = 0
    for index, node in enumerate(nodes):
        if stamp_if_absent(node, index):
            stamped += 1
    if stamped:
        logger.debug(f"Stamped original order on {stamped} nodes")
    return stamped
