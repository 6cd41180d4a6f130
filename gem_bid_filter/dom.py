"""Small tree-query layer over BeautifulSoup.

bs4 compares tags by value (two empty ``<div>`` are ``==``), so every
membership, containment and dedupe check here goes through identity.
"""
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

WHITESPACE_RE = re.compile(r"\s+")

UNSAFE_CONTAINERS = ("html", "body", "[document]")


def normalize_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def element_text(element) -> str:
    """Collapsed text content of a node (tag or text node)."""
    if element is None:
        return ""
    if isinstance(element, NavigableString):
        return normalize_whitespace(str(element))
    return normalize_whitespace(element.get_text())


def own_text(element: Tag) -> str:
    """Collapsed text of the element's direct text children only."""
    return normalize_whitespace(" ".join(str(child) for child in element.children if is_text_node(child)))


def is_text_node(node) -> bool:
    # Comments, doctypes and CDATA are PreformattedString subclasses
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def collect_text_nodes(root: Tag) -> List[tuple]:
    """All non-empty text leaves under root in document order, as (node, text)."""
    nodes = []
    for node in root.descendants:
        if not is_text_node(node):
            continue
        text = normalize_whitespace(str(node))
        if text:
            nodes.append((node, text))
    return nodes


def find_text_nodes(root: Tag, regex: re.Pattern) -> List[NavigableString]:
    return [node for node in root.descendants if is_text_node(node) and regex.search(str(node))]


def count_matches(text: str, regex: re.Pattern) -> int:
    if not text:
        return 0
    return len(regex.findall(text))


def unique_elements(elements: Iterable) -> list:
    seen = set()
    result = []
    for el in elements:
        if id(el) in seen:
            continue
        seen.add(id(el))
        result.append(el)
    return result


def element_children(element: Tag) -> List[Tag]:
    return [child for child in element.children if isinstance(child, Tag)]


def parent_element(node) -> Optional[Tag]:
    """Parent tag, or None at the document level."""
    parent = node.parent if node is not None else None
    if parent is None or isinstance(parent, BeautifulSoup):
        return None
    return parent


def contains(ancestor, node) -> bool:
    """Ancestor-or-self test by identity."""
    if node is ancestor:
        return True
    return any(parent is ancestor for parent in node.parents)


def is_document_root(element) -> bool:
    return element is None or element.name in UNSAFE_CONTAINERS


def is_safe_container(container) -> bool:
    return container is not None and container.name not in UNSAFE_CONTAINERS


def is_attached(node) -> bool:
    """False for nodes that were extracted or decomposed since they were found."""
    if node is None or getattr(node, "decomposed", False):
        return False
    return any(isinstance(parent, BeautifulSoup) for parent in node.parents)


# Markers

def _classes(element: Tag) -> List[str]:
    value = element.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return list(value)


def has_marker(element: Tag, marker: str) -> bool:
    return marker in _classes(element)


def add_marker(element: Tag, marker: str):
    classes = _classes(element)
    if marker not in classes:
        classes.append(marker)
        element["class"] = classes


def remove_markers(element: Tag, *markers: str):
    classes = _classes(element)
    remaining = [c for c in classes if c not in markers]
    if len(remaining) == len(classes):
        return
    if remaining:
        element["class"] = remaining
    else:
        del element["class"]
