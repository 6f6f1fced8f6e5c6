"""Unit tests for the mode bitmask and node classification."""

import pytest
from pydantic import ValidationError

from goremovelines.core.modes import CASE_NODE_TYPES, MODE_NAMES, Mode, NodeCategory, classify
from goremovelines.models import CleanOptions, SyntaxNode


class TestMode:
    def test_bit_values_follow_declaration_order(self) -> None:
        assert [int(MODE_NAMES[name]) for name in MODE_NAMES] == [1, 2, 4, 8, 16, 32, 64, 128]

    def test_all_combines_every_mode(self) -> None:
        combined = Mode.NONE
        for flag in MODE_NAMES.values():
            combined |= flag
        assert combined == Mode.ALL

    def test_from_names(self) -> None:
        assert Mode.from_names(["func", "IF", " struct "]) == Mode.FUNC | Mode.IF | Mode.STRUCT

    def test_from_names_empty(self) -> None:
        assert Mode.from_names([]) == Mode.NONE

    def test_from_names_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown mode 'loop'"):
            Mode.from_names(["func", "loop"])

    def test_describe(self) -> None:
        assert (Mode.CASE | Mode.FUNC).describe() == ["func", "case"]

    @pytest.mark.parametrize("category", [c for c in NodeCategory if c is not NodeCategory.OTHER])
    def test_all_enables_every_category(self, category: NodeCategory) -> None:
        assert Mode.ALL.enables(category)

    @pytest.mark.parametrize("category", list(NodeCategory))
    def test_none_enables_nothing(self, category: NodeCategory) -> None:
        assert not Mode.NONE.enables(category)

    def test_other_is_never_enabled(self) -> None:
        assert not Mode.ALL.enables(NodeCategory.OTHER)

    def test_switch_and_case_are_distinct(self) -> None:
        assert Mode.SWITCH.enables(NodeCategory.SWITCH)
        assert not Mode.SWITCH.enables(NodeCategory.CASE)
        assert Mode.CASE.enables(NodeCategory.CASE)
        assert not Mode.CASE.enables(NodeCategory.SWITCH)


class TestClassify:
    @pytest.mark.parametrize(
        ("node_type", "category"),
        [
            ("function_declaration", NodeCategory.FUNCTION),
            ("method_declaration", NodeCategory.FUNCTION),
            ("func_literal", NodeCategory.FUNCTION),
            ("struct_type", NodeCategory.STRUCT),
            ("composite_literal", NodeCategory.STRUCT),
            ("if_statement", NodeCategory.IF),
            ("expression_switch_statement", NodeCategory.SWITCH),
            ("type_switch_statement", NodeCategory.SWITCH),
            ("select_statement", NodeCategory.SWITCH),
            ("expression_case", NodeCategory.CASE),
            ("default_case", NodeCategory.CASE),
            ("for_statement", NodeCategory.FOR),
            ("interface_type", NodeCategory.INTERFACE),
            ("block", NodeCategory.BLOCK),
            ("call_expression", NodeCategory.OTHER),
            ("no_such_node", NodeCategory.OTHER),
        ],
    )
    def test_classify(self, node_type: str, category: NodeCategory) -> None:
        assert classify(node_type) is category

    def test_case_node_types(self) -> None:
        assert CASE_NODE_TYPES == {"expression_case", "type_case", "default_case", "communication_case"}


class TestCleanOptions:
    def test_defaults(self) -> None:
        options = CleanOptions()
        assert options.mode == Mode.ALL
        assert options.debug is False
        assert options.max_iterations is None

    def test_accepts_combined_modes(self) -> None:
        options = CleanOptions(mode=Mode.FUNC | Mode.IF)
        assert options.mode == Mode.FUNC | Mode.IF

    def test_is_frozen(self) -> None:
        options = CleanOptions()
        with pytest.raises(ValidationError):
            options.debug = True  # type: ignore[misc]

    def test_rejects_non_positive_iteration_bound(self) -> None:
        with pytest.raises(ValidationError):
            CleanOptions(max_iterations=0)


class TestSyntaxNode:
    def _node(self) -> SyntaxNode:
        return SyntaxNode(
            type="block",
            start_byte=0,
            end_byte=3,
            children=[
                SyntaxNode(type="{", start_byte=0, end_byte=1, is_named=False),
                SyntaxNode(type="statement_list", start_byte=1, end_byte=2, field_name="body"),
                SyntaxNode(type="}", start_byte=2, end_byte=3, is_named=False),
            ],
        )

    def test_child_by_field_name(self) -> None:
        node = self._node()
        body = node.child_by_field_name("body")
        assert body is not None
        assert body.type == "statement_list"
        assert node.child_by_field_name("missing") is None

    def test_named_children_skip_tokens(self) -> None:
        assert [child.type for child in self._node().named_children] == ["statement_list"]

    def test_first_child_of_type(self) -> None:
        closing = self._node().first_child_of_type("}", ")")
        assert closing is not None
        assert closing.start_byte == 2

    def test_children_default_to_empty(self) -> None:
        assert SyntaxNode(type="identifier", start_byte=0, end_byte=1).children == []
