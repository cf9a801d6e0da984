from typing import Callable, Iterator, List, Optional

from .node_types import SyntaxNode


class ASTWalker:
    """Utilities for traversing and searching syntax trees"""

    @staticmethod
    def walk(node: SyntaxNode, callback: Callable[[SyntaxNode], None]):
        """Perform a depth-first traversal of the tree"""
        callback(node)
        for child in node.children:
            ASTWalker.walk(child, callback)

    @staticmethod
    def walk_with_parents(
        node: SyntaxNode, parents: tuple[SyntaxNode, ...] = ()
    ) -> Iterator[tuple[SyntaxNode, tuple[SyntaxNode, ...]]]:
        """Yield every node together with its chain of ancestors, nearest last.

        Nodes carry no parent pointers, so rules that need context use this instead.
        """
        stack = [(node, parents)]
        while stack:
            current, ancestors = stack.pop()
            yield current, ancestors
            below = ancestors + (current,)
            stack.extend((child, below) for child in reversed(current.children))

    @staticmethod
    def find_parent_of_kind(ancestors: tuple[SyntaxNode, ...], *kinds: str) -> Optional[SyntaxNode]:
        """Find the nearest ancestor of the given kinds in a chain from walk_with_parents"""
        for ancestor in reversed(ancestors):
            if ancestor.kind in kinds:
                return ancestor
        return None

    @staticmethod
    def get_child_of_kind(node: SyntaxNode, *kinds: str) -> Optional[SyntaxNode]:
        """Find the first direct child of a specific kind"""
        for child in node.children:
            if child.kind in kinds:
                return child
        return None

    @staticmethod
    def find_all_by_kind(node: SyntaxNode, *kinds: str) -> List[SyntaxNode]:
        """Find all descendant nodes of the given kinds, in document order"""
        return [current for current in node.iter() if current.kind in kinds]

    @staticmethod
    def get_text(node: SyntaxNode, source: str) -> str:
        return node.text(source)

    @staticmethod
    def dump(node: SyntaxNode, indent: int = 0) -> str:
        """Render the named nodes of a tree as an indented outline, one per line"""
        label = node.kind
        if node.role:
            label = f"{node.role}: {label}"
        if node.value is not None:
            value = node.value.replace("\n", "\\n")
            if len(value) > 40:
                value = value[:37] + "..."
            label = f"{label} {value!r}"
        start, end = node.start, node.end
        lines = [f"{'  ' * indent}{label} [{start.line}:{start.column} - {end.line}:{end.column}]"]
        for child in node.named_children:
            lines.append(ASTWalker.dump(child, indent + 1))
        return "\n".join(lines)
