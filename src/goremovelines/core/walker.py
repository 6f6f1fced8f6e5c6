import logging
from collections.abc import Callable

from goremovelines.core.modes import CASE_NODE_TYPES, Mode, NodeCategory, classify
from goremovelines.core.splice import BodySpan, trim_body, trim_case_body
from goremovelines.models import CleanOptions, SyntaxNode, SyntaxTree

logger = logging.getLogger(__name__)

# child node kinds that carry the braces of their parent
_BRACED_LISTS = ("field_declaration_list", "method_spec_list", "literal_value")


def snapshot(text: bytes) -> str:
    """Render a buffer excerpt for debug output, every line prefixed with ``>``."""
    return "\n".join(">" + line for line in text.decode("utf-8", errors="replace").split("\n"))


def brace_span(node: SyntaxNode) -> BodySpan | None:
    """Span of the ``{``/``}`` pair belonging to ``node`` itself or to its braced list."""
    holder: SyntaxNode | None = node
    if node.first_child_of_type("{") is None:
        holder = node.first_child_of_type(*_BRACED_LISTS)
    if holder is None:
        return None

    opening = holder.first_child_of_type("{")
    closing = next((child for child in reversed(holder.children) if child.type == "}"), None)
    if opening is None or closing is None:
        return None
    return BodySpan(start=opening.start_byte, end=closing.start_byte)


class TreeWalker:
    """Depth-first visitor that applies at most one trim per walk.

    ``walk`` returns the edited buffer as soon as any body loses a blank
    line. Every offset in the tree is stale from that point on, so the caller
    has to parse the new buffer and walk again from the root.
    """

    def __init__(self, buffer: bytes, options: CleanOptions) -> None:
        self._buffer = buffer
        self._mode: Mode = options.mode
        self._debug = options.debug
        self._unhandled: set[str] = set()
        self._handlers: dict[NodeCategory, Callable[[SyntaxNode], bytes | None]] = {
            NodeCategory.FUNCTION: self._visit_function,
            NodeCategory.STRUCT: self._visit_struct,
            NodeCategory.IF: self._visit_if,
            NodeCategory.SWITCH: self._visit_switch,
            NodeCategory.FOR: self._visit_for,
            NodeCategory.INTERFACE: self._visit_interface,
            NodeCategory.BLOCK: self._visit_block,
        }

    def walk(self, tree: SyntaxTree) -> bytes | None:
        if tree.source_length != len(self._buffer):
            raise ValueError("Syntax tree does not belong to this buffer; parse it again")
        return self._visit(tree.root)

    # -- dispatch ----------------------------------------------------------

    def _visit(self, node: SyntaxNode) -> bytes | None:
        return self._visit_nodes([node])

    def _visit_children(self, node: SyntaxNode) -> bytes | None:
        return self._visit_nodes(node.named_children)

    def _visit_nodes(self, nodes: list[SyntaxNode]) -> bytes | None:
        """Visit ``nodes`` depth first in source order.

        Nodes without a rule are expanded in place on a work stack; only
        handled constructs cost a call frame.
        """
        pending = list(reversed(nodes))
        while pending:
            node = pending.pop()
            handler = self._handlers.get(classify(node.type))
            if handler is None:
                self._note_unhandled(node)
                pending.extend(reversed(node.named_children))
                continue
            edited = handler(node)
            if edited is not None:
                return edited
        return None

    def _visit_all(self, node: SyntaxNode, *bodies: SyntaxNode | None) -> bytes | None:
        """Visit the children of ``node``, descending straight into ``bodies``.

        Bodies were already handled by their owner, so they must not be
        visited again as bare blocks.
        """
        for child in node.named_children:
            if any(child is body for body in bodies):
                edited = self._visit_children(child)
            else:
                edited = self._visit(child)
            if edited is not None:
                return edited
        return None

    def _note_unhandled(self, node: SyntaxNode) -> None:
        if self._debug and node.children and node.type not in self._unhandled:
            self._unhandled.add(node.type)
            logger.debug("No blank line rule for %s, descending", node.type)

    # -- trimming ----------------------------------------------------------

    def _trim(self, node: SyntaxNode, label: str) -> bytes | None:
        span = brace_span(node)
        if span is None:
            return None
        if self._debug:
            logger.debug("Cleaning %s\n%s", label, snapshot(self._buffer[span.start : span.end + 1]))
        return trim_body(self._buffer, span)

    def _trim_case(self, clause: SyntaxNode, end: int, is_last: bool) -> bytes | None:
        colon = clause.first_child_of_type(":")
        if colon is None:
            return None
        span = BodySpan(start=colon.start_byte, end=end)
        if self._debug:
            logger.debug("Cleaning %s\n%s", clause.type, snapshot(self._buffer[span.start : span.end + 1]))
        return trim_case_body(self._buffer, span, is_last)

    # -- categories --------------------------------------------------------

    def _visit_braced_body(self, node: SyntaxNode, category: NodeCategory) -> bytes | None:
        body = node.child_by_field_name("body")
        if body is None:
            return self._visit_children(node)
        if self._mode.enables(category):
            edited = self._trim(body, node.type)
            if edited is not None:
                return edited
        return self._visit_all(node, body)

    def _visit_function(self, node: SyntaxNode) -> bytes | None:
        return self._visit_braced_body(node, NodeCategory.FUNCTION)

    def _visit_for(self, node: SyntaxNode) -> bytes | None:
        return self._visit_braced_body(node, NodeCategory.FOR)

    def _visit_struct(self, node: SyntaxNode) -> bytes | None:
        if node.type == "composite_literal":
            return self._visit_composite_literal(node)
        if self._mode.enables(NodeCategory.STRUCT):
            edited = self._trim(node, "struct")
            if edited is not None:
                return edited
        return self._visit_children(node)

    def _visit_composite_literal(self, node: SyntaxNode) -> bytes | None:
        edited = self._visit_children(node)
        if edited is not None:
            return edited

        literal_type = node.child_by_field_name("type")
        body = node.child_by_field_name("body")
        if (
            self._mode.enables(NodeCategory.STRUCT)
            and literal_type is not None
            and literal_type.type == "struct_type"
            and body is not None
        ):
            return self._trim(body, "struct literal")
        return None

    def _visit_if(self, node: SyntaxNode) -> bytes | None:
        consequence = node.child_by_field_name("consequence")
        alternative = node.child_by_field_name("alternative")
        else_block = alternative if alternative is not None and alternative.type == "block" else None

        if self._mode.enables(NodeCategory.IF):
            for block in (consequence, else_block):
                if block is None:
                    continue
                edited = self._trim(block, "if")
                if edited is not None:
                    return edited

        # an else-if chain is reached as a nested if_statement
        return self._visit_all(node, consequence, else_block)

    def _visit_switch(self, node: SyntaxNode) -> bytes | None:
        if self._mode.enables(NodeCategory.SWITCH):
            edited = self._trim(node, node.type)
            if edited is not None:
                return edited

        clauses = [child for child in node.children if child.type in CASE_NODE_TYPES]
        for child in node.named_children:
            if child.type not in CASE_NODE_TYPES:
                edited = self._visit(child)
                if edited is not None:
                    return edited

        span = brace_span(node)
        for index, clause in enumerate(clauses):
            is_last = index == len(clauses) - 1
            if self._mode.enables(NodeCategory.CASE):
                if is_last:
                    end = span.end if span is not None else clause.end_byte
                else:
                    end = clauses[index + 1].start_byte
                edited = self._trim_case(clause, end, is_last)
                if edited is not None:
                    return edited

            edited = self._visit_children(clause)
            if edited is not None:
                return edited
        return None

    def _visit_interface(self, node: SyntaxNode) -> bytes | None:
        if self._mode.enables(NodeCategory.INTERFACE):
            edited = self._trim(node, "interface")
            if edited is not None:
                return edited
        return self._visit_children(node)

    def _visit_block(self, node: SyntaxNode) -> bytes | None:
        if self._mode.enables(NodeCategory.BLOCK):
            edited = self._trim(node, "block")
            if edited is not None:
                return edited
        return self._visit_children(node)
