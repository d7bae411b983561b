"""Label extraction from rendered backlink entries."""

import logging
from typing import Iterator, Optional

from ..models.common import BacklinkEntry, ElementNode

logger = logging.getLogger(__name__)

SELF_CLASS = "tree-item-self"
INNER_CLASS = "tree-item-inner"
FILE_TITLE_CLASS = "search-result-file-title"
MATCHES_CLASS = "search-result-file-matches"


def extract_label(element: Optional[ElementNode], debug: bool = False) -> str:
    """Best-effort title of a backlink entry.

    Strategy (first non-empty text wins):
    1. ``.tree-item-inner`` under a direct ``.tree-item-self`` child
    2. the first ``.search-result-file-title``
    3. the first ``.tree-item-inner`` outside ``.search-result-file-matches``,
       so match previews are never mistaken for the title

    Returns "" when nothing is found.
    """
    if element is None:
        return ""

    self_nodes = (
        node
        for child in element.children
        if child.has_class(SELF_CLASS)
        for node in _descendants(child)
    )
    inner = _first(self_nodes, INNER_CLASS)
    if inner is not None:
        text = inner.text_content().strip()
        if text:
            if debug:
                logger.debug(f'Extracted from {SELF_CLASS}: "{text}"')
            return text

    title = _first(_descendants(element), FILE_TITLE_CLASS)
    if title is not None:
        text = title.text_content().strip()
        if text:
            if debug:
                logger.debug(f'Extracted from file-title: "{text}"')
            return text

    for node in _descendants(element, skip_class=MATCHES_CLASS):
        if not node.has_class(INNER_CLASS):
            continue
        text = node.text_content().strip()
        if text:
            if debug:
                logger.debug(f'Extracted from filtered {INNER_CLASS}: "{text}"')
            return text

    if debug:
        logger.debug("Could not extract label from entry")
    return ""


def entry_label(entry: BacklinkEntry, debug: bool = False) -> str:
    """Label supplied by the host, or extracted from the entry's element tree."""
    if entry.label is not None:
        return entry.label.strip()
    return extract_label(entry.element, debug=debug)


def _descendants(node: ElementNode, skip_class: Optional[str] = None) -> Iterator[ElementNode]:
    """Depth-first, document-order walk below ``node`` (excluding it).

    Subtrees rooted at an element carrying ``skip_class`` are not entered.
    """
    for child in node.children:
        if skip_class and child.has_class(skip_class):
            continue
        yield child
        yield from _descendants(child, skip_class)


def _first(nodes: Iterator[ElementNode], class_name: str) -> Optional[ElementNode]:
    return next((n for n in nodes if n.has_class(class_name)), None)
