"""Restructure a Markdown tree so content under a heading is its descendant.

Each HEADING node (and the DOCUMENT, as a level-0 heading) maps to a
``HeadingTree``. Every other top-level block maps to an ``Element`` that
passes through to the node's own children. The children of a ``HeadingTree``
are its ``Element`` objects followed by the ``HeadingTree`` objects of its
nested subheadings.

The inline content of a heading (its title text, links, ...) is not part of
the restructured tree; it is reached through ``HeadingTree.heading_node``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Iterator, Union

from mdchangelog.exceptions import StructureError
from mdchangelog.markdown import HEADING_CONTAINERS, MarkdownNode, NodeKind


@dataclass(eq=False)
class Element:
    """A non-heading block; its children are the node's own children."""

    node: MarkdownNode

    @property
    def children(self) -> list[MarkdownNode]:
        return self.node.children


@dataclass(eq=False)
class HeadingTree:
    """A heading (or the document) together with the content under it."""

    heading_node: MarkdownNode
    level: int
    children: list[Union[Element, HeadingTree]] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"HeadingTree(level={self.level}, children={len(self.children)})"


TreeItem = Union[HeadingTree, Element, MarkdownNode]


def build_heading_tree(document: MarkdownNode) -> HeadingTree:
    """Transform a DOCUMENT node into a level-0 ``HeadingTree``.

    Raises:
        StructureError: If ``document`` is not a DOCUMENT node, or the
            restructuring does not end with a single root.
    """
    if document.kind is not NodeKind.DOCUMENT:
        raise StructureError(f"The initial node should be a document, got {document.kind.value!r}")

    # Flat list of all headings in order, each holding the blocks that follow it.
    flat: list[HeadingTree] = []
    # Blocks already included, directly or through an ancestor's children.
    seen: set[MarkdownNode] = set()
    for node in _iter_blocks(document):
        if node.kind is NodeKind.DOCUMENT:
            flat.append(HeadingTree(heading_node=node, level=0))
        elif node.kind is NodeKind.HEADING:
            flat.append(HeadingTree(heading_node=node, level=node.level))
        elif not flat:
            raise StructureError("Found content before the document node")
        elif node.parent in seen:
            seen.add(node)
        else:
            flat[-1].children.append(Element(node))
            seen.add(node)

    # Nest each heading under the nearest preceding heading of a smaller level:
    #   # A / ## B / ## C  ->  B and C are children of A, C is not a child of B.
    roots: list[HeadingTree] = []
    for index, current in enumerate(flat):
        parent = _find_parent(flat, index) if index else None
        if parent is None:
            roots.append(current)
        else:
            parent.children.append(current)

    if len(roots) != 1:
        raise StructureError(f"Expected a single root heading tree, found {len(roots)}")
    return roots[0]


def _find_parent(flat: list[HeadingTree], index: int) -> HeadingTree | None:
    level = flat[index].level
    for candidate in reversed(flat[:index]):
        if candidate.level < level:
            return candidate
    return None


def _iter_blocks(node: MarkdownNode) -> Iterator[MarkdownNode]:
    yield node
    # headings keep their inline content, and lists are not searched
    if node.kind is NodeKind.HEADING or node.kind not in HEADING_CONTAINERS:
        return
    for child in node.children:
        yield from _iter_blocks(child)


def node_of(item: TreeItem) -> MarkdownNode:
    """Return the Markdown node an item of the heading tree stands for."""
    if isinstance(item, HeadingTree):
        return item.heading_node
    if isinstance(item, Element):
        return item.node
    return item


def iter_subheadings(tree: HeadingTree) -> Iterator[HeadingTree]:
    """Yield the direct subheadings of ``tree`` in document order."""
    for child in tree.children:
        if isinstance(child, HeadingTree):
            yield child


def find_first_heading(tree: HeadingTree) -> HeadingTree | None:
    """Return the first heading below ``tree`` in document order."""
    return next(iter_subheadings(tree), None)


def find_first_child(tree: HeadingTree, kind: NodeKind) -> MarkdownNode | None:
    """Return the first direct child block of ``tree`` of the given kind."""
    for child in tree.children:
        if isinstance(child, Element) and child.node.kind is kind:
            return child.node
    return None


def iter_nodes(item: TreeItem, kinds: Collection[NodeKind]) -> Iterator[MarkdownNode]:
    """Yield nodes of the given kinds in pre-order, without descending into them.

    A list item is yielded instead of the text runs it contains, and any text
    that is yielded is therefore not inside a yielded item.
    """
    node = node_of(item)
    if node.kind in kinds:
        yield node
        return
    for child in item.children:
        yield from iter_nodes(child, kinds)
