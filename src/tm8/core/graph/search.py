"""Node search and visibility filtering helpers."""

import json
from dataclasses import dataclass, field
from typing import List, Sequence, Set

from ..enums import NodeType
from ..models import Node

SEARCH_FIELD_NAME = "name"
SEARCH_FIELD_PROPERTIES = "properties"


@dataclass
class SearchOptions:
    """
    Parameters of a node search.

    Attributes:
        query (str): Text to look for, matched case-insensitively
        fuzzy_match (bool): Use subsequence matching instead of substring
        search_fields (Sequence[str]): Any of "name" and "properties"
        node_types (Sequence[NodeType]): Restrict to these types; empty means all
    """

    query: str
    fuzzy_match: bool = False
    search_fields: Sequence[str] = (SEARCH_FIELD_NAME, SEARCH_FIELD_PROPERTIES)
    node_types: Sequence[NodeType] = ()


@dataclass
class VisibilityState:
    """
    Which nodes a view should show.

    Attributes:
        hidden_nodes (Set[str]): Ids never shown
        focused_nodes (Set[str]): When non-empty, only these ids are shown
        show_only_connected (bool): Also show nodes adjacent to focused ones
    """

    hidden_nodes: Set[str] = field(default_factory=set)
    focused_nodes: Set[str] = field(default_factory=set)
    show_only_connected: bool = False


def fuzzy_match(text: str, query: str) -> bool:
    """Whether the characters of ``query`` appear in ``text`` in order."""
    position = 0
    for char in text:
        if position < len(query) and char == query[position]:
            position += 1
    return position == len(query)


def properties_text(node: Node) -> str:
    """Lower-cased JSON rendering of a node's properties, used for matching."""
    return json.dumps(node.properties, default=str).lower()


def matches_search(node: Node, options: SearchOptions) -> bool:
    """Apply type filter and text match of a search to one node."""
    if options.node_types and node.type not in options.node_types:
        return False

    term = options.query.lower()
    haystacks: List[str] = []
    if SEARCH_FIELD_NAME in options.search_fields:
        haystacks.append(node.name.lower())
    if SEARCH_FIELD_PROPERTIES in options.search_fields:
        haystacks.append(properties_text(node))

    if options.fuzzy_match:
        return any(fuzzy_match(text, term) for text in haystacks)
    return any(term in text for text in haystacks)
