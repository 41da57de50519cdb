from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ElementNode:
    tag_name: str = ""
    id: str | None = None
    class_names: tuple[str, ...] = ()
    children: tuple['ElementNode', ...] = field(default_factory=tuple)
    # syntactic `/>` or a void element
    self_closing: bool = False

    def __repr__(self) -> str:
        return f"<{self.tag_name}{self.selector}>"

    @property
    def primary_class(self) -> str | None:
        return self.class_names[0] if self.class_names else None

    @property
    def has_children(self) -> bool:
        """
        Whether a tree view should offer to expand this element.

        An empty non-void element still counts, since it may hold
        children once the document is edited.
        """
        return bool(self.children) or not self.self_closing

    @property
    def selector(self) -> str:
        selector = f"#{self.id}" if self.id else ""
        for class_name in self.class_names:
            selector += f".{class_name}"
        return selector

    def to_dict(self) -> dict[str, Any]:
        # Children are left out; `tree.flatten_tree` lists them by parent index.
        return {
            "tag": self.tag_name,
            "id": self.id,
            "classes": list(self.class_names),
            "has_children": self.has_children,
            "child_count": len(self.children),
        }
