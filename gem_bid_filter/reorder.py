import logging
from typing import List, Optional

from bs4 import Tag

from .dom import is_attached, is_safe_container, parent_element, unique_elements
from .model import BidItem
from .order import read_or_none
from .parser import GemParser

logger = logging.getLogger(__name__)


def _targets(items) -> List[Tag]:
    """Ordering nodes still in the document, each once."""
    elements = []
    for item in items or []:
        if isinstance(item, BidItem):
            item = item.target
        if item is not None and is_attached(item):
            elements.append(item)
    return unique_elements(elements)


def find_best_container(items) -> Optional[Tag]:
    """
    Pick the node whose children can be reordered.

    The common ancestor wins when it is below <body> and every ordering node
    is its direct child; otherwise a parent shared by all ordering nodes.
    """
    elements = _targets(items)
    if not elements:
        return None

    common_ancestor = GemParser.find_common_ancestor(elements)
    if is_safe_container(common_ancestor) and all(parent_element(el) is common_ancestor for el in elements):
        return common_ancestor

    parent = parent_element(elements[0])
    if parent is not None and all(parent_element(el) is parent for el in elements):
        return parent

    return None


def reorder(bids: List[BidItem]) -> bool:
    """
    Move the ordering nodes of `bids` into the given sequence.

    Returns:
        False, with the tree untouched, when no safe container exists
    """
    elements = _targets(bids)
    container = find_best_container(elements)
    if container is None:
        logger.warning(f"No common container for {len(elements)} bids; leaving order unchanged")
        return False

    moved = 0
    for el in elements:
        # Nodes moved or removed since parsing are skipped
        if parent_element(el) is container:
            container.append(el)
            moved += 1
        else:
            logger.debug("Skipping bid node that left its container")

    logger.info(f"Reordered {moved} bid nodes")
    return True


def restore_original_order(bids: List[BidItem]) -> bool:
    ordered = sorted(_targets(bids), key=lambda el: read_or_none(el) or 0)
    if not ordered:
        return False
    return reorder(ordered)
