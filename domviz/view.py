import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from domviz.node import ElementNode
from domviz.tree import build_tree, iter_tree

logger = logging.getLogger(__name__)


class CollapsibleState(Enum):
    NONE = 0
    COLLAPSED = 1
    EXPANDED = 2


@dataclass(frozen=True)
class TreeItem:
    label: str
    description: str
    collapsible_state: CollapsibleState = CollapsibleState.NONE
    children: tuple['TreeItem', ...] = ()

    @property
    def tooltip(self) -> str:
        return f"{self.label}-{self.description}"

    @staticmethod
    def label_for(node: ElementNode) -> str:
        label = f"<{node.tag_name}>"
        if node.id:
            label += f" #{node.id}"
        return label

    @staticmethod
    def description_for(node: ElementNode) -> str:
        if node.primary_class:
            return f".{node.primary_class}"
        return node.tag_name

    @classmethod
    def from_node(cls, node: ElementNode) -> "TreeItem":
        """
        Wrap `node` and its whole subtree in tree items.

        Items are built children first off an explicit stack, so unclosed
        tags nesting thousands of levels deep are handled.
        """
        built: list[TreeItem] = []
        stack = [(node, False)]
        while stack:
            current, children_built = stack.pop()
            if not children_built:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(current.children))
                continue

            # The last len(children) items built are this node's children.
            split = len(built) - len(current.children)
            children = tuple(built[split:])
            del built[split:]
            built.append(cls(
                label=cls.label_for(current),
                description=cls.description_for(current),
                collapsible_state=CollapsibleState.COLLAPSED
                    if current.has_children else CollapsibleState.NONE,
                children=children,
            ))
        return built[0]


def format_tree(nodes: list[ElementNode], indent: int = 2) -> str:
    lines: list[str] = []
    for depth, node in iter_tree(nodes):
        lines.append(
            f"{' ' * (depth * indent)}"
            f"{TreeItem.label_for(node)} {TreeItem.description_for(node)}"
        )
    return "\n".join(lines)


Listener = Callable[[], None]


@dataclass
class DOMTreeProvider:
    """
    Supplies tree items for a sidebar view of one HTML document.

    `source` returns the current document text. Roots are built on first
    request and kept until `refresh()`, which also tells every registered
    listener that the view should be repopulated.
    """
    source: Callable[[], str]
    listeners: list[Listener] = field(default_factory=list)
    _roots: list[TreeItem] | None = field(default=None, init=False, repr=False)

    def get_children(self, item: TreeItem | None = None) -> list[TreeItem]:
        if item is not None:
            return list(item.children)

        if self._roots is None:
            try:
                text = self.source()
            except OSError:
                logger.exception("Could not read the HTML document")
                return []
            self._roots = [TreeItem.from_node(node) for node in build_tree(text)]
            logger.debug("Provided %d root items", len(self._roots))
        return list(self._roots)

    def on_did_change(self, listener: Listener) -> Callable[[], None]:
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> None:
        self._roots = None
        for listener in list(self.listeners):
            listener()
