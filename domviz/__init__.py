from domviz.locator import ElementRange, locate_element
from domviz.node import ElementNode
from domviz.tree import build_tree

__all__ = [
    "ElementNode",
    "ElementRange",
    "build_tree",
    "locate_element",
]
