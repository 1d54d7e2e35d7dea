"""Editor Data Models."""

from typing import Any

from pydantic import BaseModel, Field

from ..catalog import ComponentStyles, ComponentType


class Node(BaseModel):
    """
    One component instance in the editable tree.

    ``children`` is None when the node has never held children; an empty list
    is a different state and survives serialization as such.
    """

    id: str = Field(..., description="Forest-unique identifier")
    type: ComponentType = Field(..., description="Component kind")
    name: str = Field(default="", description="Display label")
    props: dict[str, Any] = Field(default_factory=dict)
    styles: ComponentStyles = Field(default_factory=ComponentStyles)
    children: list["Node"] | None = Field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Stored form of the subtree rooted at this node."""
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "props": dict(self.props),
            "styles": self.styles.to_dict(),
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def walk(self):
        """Yield this node and every descendant, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))


Node.model_rebuild()
