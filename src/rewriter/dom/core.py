# src/rewriter/dom/core.py
from enum import Enum
from typing import Any, FrozenSet, Iterable, Iterator

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

# Raw-text elements whose content is never rendered as page text.
DEFAULT_SKIP_TAGS: FrozenSet[str] = frozenset({"script", "style"})


class NodeKind(str, Enum):
    """Coarse classification of a node in the parsed tree."""
    ELEMENT = "element"
    TEXT = "text"
    OTHER = "other"


def node_kind(node: Any, skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS) -> NodeKind:
    """
    Classifies a BeautifulSoup node.

    Comments, doctypes, CDATA sections, processing instructions and
    declarations are all PreformattedString subclasses and count as OTHER,
    as does any string living directly inside one of `skip_tags`.
    """
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, PreformattedString) or not isinstance(node, NavigableString):
        return NodeKind.OTHER
    parent = node.parent
    if parent is not None and parent.name in skip_tags:
        return NodeKind.OTHER
    return NodeKind.TEXT


def is_text_node(node: Any, skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS) -> bool:
    return node_kind(node, skip_tags) is NodeKind.TEXT


def iter_text_nodes(root: Tag, skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS) -> Iterator[NavigableString]:
    """
    Yields every text node below `root` in document order.

    The list of descendants is materialized first so callers may replace the
    yielded nodes while iterating.
    """
    skip = frozenset(skip_tags)
    for node in list(root.descendants):
        if node_kind(node, skip) is NodeKind.TEXT:
            yield node
