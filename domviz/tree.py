import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from domviz.node import ElementNode
from domviz.scanner import TagToken, iter_tags

logger = logging.getLogger(__name__)


@dataclass
class OpenElement:
    token: TagToken
    children: list[ElementNode] = field(default_factory=list)

    def close(self) -> ElementNode:
        return ElementNode(
            tag_name=self.token.tag_name,
            id=self.token.id,
            class_names=self.token.class_names,
            children=tuple(self.children),
            self_closing=self.token.is_self_closing,
        )


@dataclass
class TreeBuilder:
    body: str = ""
    unfinished: list[OpenElement] = field(default_factory=list)
    roots: list[ElementNode] = field(default_factory=list)

    def build(self) -> list[ElementNode]:
        token_count = 0
        for token in iter_tags(self.body):
            token_count += 1
            self.add_tag(token)

        self.finish()
        logger.debug(
            "Built tree from %d tags: %d root elements",
            token_count, len(self.roots)
        )
        return self.roots

    def attach(self, node: ElementNode) -> None:
        if self.unfinished:
            self.unfinished[-1].children.append(node)
        else:
            self.roots.append(node)

    def add_tag(self, token: TagToken) -> None:
        if token.is_closing:
            if self.unfinished and \
                    self.unfinished[-1].token.tag_name == token.tag_name:
                node = self.unfinished.pop().close()
                self.attach(node)
            else:
                logger.debug(
                    "Ignoring unmatched </%s> at offset %d",
                    token.tag_name, token.start
                )
        elif token.is_self_closing:
            self.attach(OpenElement(token=token).close())
        else:
            self.unfinished.append(OpenElement(token=token))

    def finish(self) -> None:
        # Elements never closed keep whatever children they collected.
        while self.unfinished:
            node = self.unfinished.pop().close()
            self.attach(node)


def build_tree(text: str) -> list[ElementNode]:
    return TreeBuilder(body=text).build()


def iter_tree(nodes: list[ElementNode]) -> Iterator[tuple[int, ElementNode]]:
    """Yield `(depth, node)` pairs in document order."""
    stack = [(0, node) for node in reversed(nodes)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        stack.extend((depth + 1, child) for child in reversed(node.children))


def flatten_tree(nodes: list[ElementNode]) -> list[dict[str, Any]]:
    """
    List the forest in document order as JSON-ready dicts.

    Each entry carries its `depth` and the index of its `parent` entry
    (None for a root), so the output stays flat however deep the
    document nests.
    """
    entries: list[dict[str, Any]] = []
    ancestors: list[int] = []
    for depth, node in iter_tree(nodes):
        del ancestors[depth:]
        entry = node.to_dict()
        entry["depth"] = depth
        entry["parent"] = ancestors[-1] if ancestors else None
        ancestors.append(len(entries))
        entries.append(entry)
    return entries
