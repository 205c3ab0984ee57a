"""Extract plain text and change lists from Markdown nodes."""

from __future__ import annotations

from typing import Sequence

from mdchangelog.markdown import MarkdownNode, NodeKind

# Node kinds that hold one change: a bullet, or a run of prose.
CHANGE_KINDS = frozenset({NodeKind.ITEM, NodeKind.TEXT})


def text_content(node: MarkdownNode) -> str:
    """Flatten a node into text, keeping inline code in backticks."""
    if node.kind is NodeKind.TEXT:
        return node.text
    if node.kind is NodeKind.CODE:
        return f"`{node.text}`"
    if node.children:
        return "".join(text_content(child) for child in node.children)
    return ""


def bullets_to_list(items: Sequence[MarkdownNode]) -> list[str]:
    """Turn change nodes into a list of change strings.

    One string per bullet. When there are no bullets, only prose, the text
    runs are joined with spaces into a single change.
    """
    if all(item.kind is NodeKind.TEXT for item in items):
        return [" ".join(text_content(item) for item in items)]
    return [text_content(item) for item in items]
