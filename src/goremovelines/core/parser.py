from typing import cast

from tree_sitter import Node, TreeCursor
from tree_sitter_language_pack import SupportedLanguage, get_parser

from goremovelines.errors import GoSyntaxError
from goremovelines.models import SyntaxNode, SyntaxTree

LANGUAGE = "go"


def parse(source: bytes) -> SyntaxTree:
    """Parse Go source into a position-annotated tree.

    Offsets are only valid against ``source``; any edit to the buffer makes
    the returned tree stale.
    """
    parser = get_parser(cast(SupportedLanguage, LANGUAGE))
    tree = parser.parse(source)
    root = tree.root_node
    if root.has_error:
        raise _syntax_error(source, _first_error(root) or root)

    return SyntaxTree(root=_node_to_model(root.walk()), source_length=len(source))


def _node_to_model(cursor: TreeCursor) -> SyntaxNode:
    """Copy the tree under ``cursor`` into models, in source order.

    Long operator chains nest one level per operand, so the copy keeps its own
    stack of open parents instead of recursing.
    """
    root = current = _cursor_model(cursor)
    parents: list[SyntaxNode] = []
    while True:
        if cursor.goto_first_child():
            parents.append(current)
        else:
            while not cursor.goto_next_sibling():
                if not parents or not cursor.goto_parent():
                    return root
                parents.pop()
        current = _cursor_model(cursor)
        parents[-1].children.append(current)


def _cursor_model(cursor: TreeCursor) -> SyntaxNode:
    node = cursor.node
    if node is None:
        raise ValueError("Tree cursor does not point at a node")
    return SyntaxNode(
        type=node.type,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        is_named=node.is_named,
        field_name=cursor.field_name,
    )


def _first_error(root: Node) -> Node | None:
    pending = [root]
    while pending:
        node = pending.pop()
        if node.is_error or node.is_missing:
            return node
        pending.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return None


def _syntax_error(source: bytes, node: Node) -> GoSyntaxError:
    text = source.decode("utf-8", errors="replace")
    row, column = node.start_point
    lines = text.split("\n")
    line_text = lines[row] if row < len(lines) else ""
    kind = f"missing {node.type}" if node.is_missing else "unexpected input"
    message = f"Failed to parse `{line_text.strip()}' (line {row + 1}, column {column + 1}): {kind}"
    return GoSyntaxError(message, source=text, line=row + 1, column=column + 1, line_text=line_text)
