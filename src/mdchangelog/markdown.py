"""Parse Markdown into a tree of typed nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

import mistune


class NodeKind(str, Enum):
    """Kinds of Markdown nodes the changelog parser distinguishes."""

    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    CODE = "code"
    ITEM = "item"
    LINK = "link"
    LIST = "list"
    BLOCK_QUOTE = "block_quote"
    OTHER = "other"


_TOKEN_KINDS = {
    "heading": NodeKind.HEADING,
    "paragraph": NodeKind.PARAGRAPH,
    "block_text": NodeKind.PARAGRAPH,
    "text": NodeKind.TEXT,
    "codespan": NodeKind.CODE,
    "list_item": NodeKind.ITEM,
    "link": NodeKind.LINK,
    "list": NodeKind.LIST,
    "block_quote": NodeKind.BLOCK_QUOTE,
}

# Node kinds searched for headings. Lists are not, so headings inside list items stay
# part of the list.
HEADING_CONTAINERS = frozenset({NodeKind.DOCUMENT, NodeKind.BLOCK_QUOTE})


@dataclass(eq=False)
class MarkdownNode:
    """A node of the Markdown tree.

    Nodes compare and hash by identity, so they can be tracked in sets while
    walking the tree.

    Attributes:
        kind: The node kind.
        children: Child nodes in document order.
        parent: The parent node (None for the document).
        text: Literal text for TEXT nodes, code for CODE nodes.
        level: Heading depth (1-6) for HEADING nodes.
        url: Link destination for LINK nodes.
        token_type: The mistune token type the node was built from.
    """

    kind: NodeKind
    children: list[MarkdownNode] = field(default_factory=list)
    parent: MarkdownNode | None = field(default=None, repr=False)
    text: str = ""
    level: int = 0
    url: str | None = None
    token_type: str = ""

    def append(self, child: MarkdownNode) -> None:
        child.parent = self
        self.children.append(child)


def parse_markdown(text: str) -> MarkdownNode:
    """Parse Markdown text into a DOCUMENT node.

    A fresh mistune instance is created per call, with footnotes enabled.
    """
    md = mistune.create_markdown(renderer="ast", plugins=["footnotes"])
    tokens = md(text)
    document = MarkdownNode(kind=NodeKind.DOCUMENT, token_type="document")
    _append_tokens(document, tokens or [])
    return document


def _append_tokens(parent: MarkdownNode, tokens: Iterable[dict[str, Any]]) -> None:
    for token in tokens:
        node = _convert_token(token)
        previous = parent.children[-1] if parent.children else None
        # mistune can split one run of text where inline markup failed to match
        if node.kind is NodeKind.TEXT and previous is not None and previous.kind is NodeKind.TEXT:
            previous.text += node.text
            continue
        parent.append(node)


def _convert_token(token: dict[str, Any]) -> MarkdownNode:
    token_type = token.get("type", "")
    kind = _TOKEN_KINDS.get(token_type, NodeKind.OTHER)
    attrs = token.get("attrs") or {}
    node = MarkdownNode(kind=kind, token_type=token_type)

    if kind in (NodeKind.TEXT, NodeKind.CODE):
        node.text = token.get("raw", "")
    elif kind is NodeKind.HEADING:
        node.level = int(attrs.get("level", 1))
    elif kind is NodeKind.LINK:
        node.url = attrs.get("url")

    children = token.get("children")
    if isinstance(children, list):
        _append_tokens(node, children)
    return node
