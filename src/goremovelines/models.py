from pydantic import BaseModel, ConfigDict, Field

from goremovelines.core.modes import Mode


class SyntaxNode(BaseModel):
    type: str
    start_byte: int
    end_byte: int
    is_named: bool = True
    field_name: str | None = None
    children: list["SyntaxNode"] = Field(default_factory=list)

    def child_by_field_name(self, name: str) -> "SyntaxNode | None":
        for child in self.children:
            if child.field_name == name:
                return child
        return None

    def first_child_of_type(self, *types: str) -> "SyntaxNode | None":
        for child in self.children:
            if child.type in types:
                return child
        return None

    @property
    def named_children(self) -> list["SyntaxNode"]:
        return [child for child in self.children if child.is_named]


SyntaxNode.model_rebuild()  # necessary for recursive types


class SyntaxTree(BaseModel):
    root: SyntaxNode
    source_length: int


class CleanOptions(BaseModel):
    """Per-run settings for the blank line remover."""

    model_config = ConfigDict(frozen=True)

    mode: Mode = Mode.ALL
    debug: bool = False
    max_iterations: int | None = Field(default=None, ge=1)
