import enum
from collections.abc import Iterable


class Mode(enum.IntFlag):
    """Bitmask selecting which constructs get their blank lines removed."""

    NONE = 0
    FUNC = 1 << 0
    STRUCT = 1 << 1
    IF = 1 << 2
    SWITCH = 1 << 3
    CASE = 1 << 4
    FOR = 1 << 5
    INTERFACE = 1 << 6
    BLOCK = 1 << 7
    ALL = FUNC | STRUCT | IF | SWITCH | CASE | FOR | INTERFACE | BLOCK

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "Mode":
        """Combine mode names such as ``func`` or ``interface`` into one mask."""
        mode = cls.NONE
        for name in names:
            key = name.strip().lower()
            if key not in MODE_NAMES:
                raise ValueError(f"Unknown mode '{name}'. Supported: {', '.join(MODE_NAMES)}")
            mode |= MODE_NAMES[key]
        return mode

    def describe(self) -> list[str]:
        return [name for name, flag in MODE_NAMES.items() if flag in self]

    def enables(self, category: "NodeCategory") -> bool:
        flag = _CATEGORY_FLAGS[category]
        return flag != Mode.NONE and flag in self


MODE_NAMES: dict[str, Mode] = {
    "func": Mode.FUNC,
    "struct": Mode.STRUCT,
    "if": Mode.IF,
    "switch": Mode.SWITCH,
    "case": Mode.CASE,
    "for": Mode.FOR,
    "interface": Mode.INTERFACE,
    "block": Mode.BLOCK,
}


class NodeCategory(enum.Enum):
    FUNCTION = "function"
    STRUCT = "struct"
    IF = "if"
    SWITCH = "switch"
    CASE = "case"
    FOR = "for"
    INTERFACE = "interface"
    BLOCK = "block"
    OTHER = "other"


_CATEGORY_FLAGS: dict[NodeCategory, Mode] = {
    NodeCategory.FUNCTION: Mode.FUNC,
    NodeCategory.STRUCT: Mode.STRUCT,
    NodeCategory.IF: Mode.IF,
    NodeCategory.SWITCH: Mode.SWITCH,
    NodeCategory.CASE: Mode.CASE,
    NodeCategory.FOR: Mode.FOR,
    NodeCategory.INTERFACE: Mode.INTERFACE,
    NodeCategory.BLOCK: Mode.BLOCK,
    NodeCategory.OTHER: Mode.NONE,
}

# tree-sitter-go node kinds; everything not listed here is OTHER
_NODE_CATEGORIES: dict[str, NodeCategory] = {
    "function_declaration": NodeCategory.FUNCTION,
    "method_declaration": NodeCategory.FUNCTION,
    "func_literal": NodeCategory.FUNCTION,
    "struct_type": NodeCategory.STRUCT,
    "composite_literal": NodeCategory.STRUCT,
    "if_statement": NodeCategory.IF,
    "expression_switch_statement": NodeCategory.SWITCH,
    "type_switch_statement": NodeCategory.SWITCH,
    "select_statement": NodeCategory.SWITCH,
    "expression_case": NodeCategory.CASE,
    "type_case": NodeCategory.CASE,
    "default_case": NodeCategory.CASE,
    "communication_case": NodeCategory.CASE,
    "for_statement": NodeCategory.FOR,
    "interface_type": NodeCategory.INTERFACE,
    "block": NodeCategory.BLOCK,
}

CASE_NODE_TYPES: frozenset[str] = frozenset(
    node_type for node_type, category in _NODE_CATEGORIES.items() if category is NodeCategory.CASE
)


def classify(node_type: str) -> NodeCategory:
    return _NODE_CATEGORIES.get(node_type, NodeCategory.OTHER)
