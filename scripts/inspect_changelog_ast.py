"""Inspect how a Markdown changelog is split into nodes and headings."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from mdchangelog.extract import text_content
from mdchangelog.heading_tree import HeadingTree, build_heading_tree, iter_subheadings
from mdchangelog.markdown import MarkdownNode, parse_markdown


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect Markdown node kinds and the heading tree of a changelog.")
    parser.add_argument("--file", required=True, help="Local Markdown file path")
    parser.add_argument("--tokens", action="store_true", help="Count mistune token types instead of node kinds")
    args = parser.parse_args()

    path = Path(args.file)
    if not path.is_file():
        raise FileNotFoundError(f"Markdown file not found: {path}")

    document = parse_markdown(path.read_text(encoding="utf-8"))
    counts = collect_stats(document, by_token=args.tokens)

    print("Nodes:")
    for name, count in counts.most_common():
        print(f"{name}: {count}")

    print("\nHeadings:")
    print(render_outline(build_heading_tree(document)))


def collect_stats(document: MarkdownNode, *, by_token: bool = False) -> Counter:
    counts = Counter()
    stack = [document]
    while stack:
        node = stack.pop()
        counts[node.token_type if by_token else node.kind.value] += 1
        stack.extend(node.children)
    return counts


def render_outline(tree: HeadingTree, indent: int = 0) -> str:
    lines: list[str] = []
    for heading in iter_subheadings(tree):
        blocks = len(heading.children) - sum(1 for _ in iter_subheadings(heading))
        lines.append(" " * (indent * 4) + f"[h{heading.level}] {text_content(heading.heading_node)} ({blocks} blocks)")
        outline = render_outline(heading, indent + 1)
        if outline:
            lines.append(outline)
    return "\n".join(lines)


if __name__ == "__main__":
    main()
