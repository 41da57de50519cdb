import bisect
import logging
import re
from dataclasses import dataclass, field

from domviz.scanner import (
    TagToken, comment_spans, iter_tags, match_tag_at, tag_limit
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementRange:
    start: int
    # exclusive
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass
class CommentIndex:
    """Answers "is this offset inside a comment?" for one document."""
    spans: list[tuple[int, int]]

    @classmethod
    def of(cls, text: str) -> "CommentIndex":
        return cls(spans=comment_spans(text))

    def enclosing(self, offset: int) -> tuple[int, int] | None:
        index = bisect.bisect_right(self.spans, (offset, float('inf'))) - 1
        if index >= 0:
            start, end = self.spans[index]
            if start <= offset < end:
                return (start, end)
        return None


@dataclass
class ElementRangeLocator:
    text: str
    comments: CommentIndex = field(init=False)
    limit: int = field(init=False)

    def __post_init__(self) -> None:
        self.comments = CommentIndex.of(self.text)
        self.limit = tag_limit(self.text)

    def locate(self, offset: int) -> ElementRange | None:
        offset = max(0, min(offset, len(self.text)))

        anchor = self.find_anchor_backward(offset) \
            or self.find_anchor_forward(offset)
        if anchor is None:
            logger.debug("No opening tag found around offset %d", offset)
            return None

        logger.debug(
            "Anchored on <%s> at offset %d", anchor.tag_name, anchor.start
        )
        if anchor.is_self_closing:
            return ElementRange(start=anchor.start, end=anchor.end)

        end = self.find_matching_close(anchor)
        if end is None:
            logger.debug(
                "<%s> at offset %d is never closed",
                anchor.tag_name, anchor.start
            )
            return None
        return ElementRange(start=anchor.start, end=end)

    def find_anchor_backward(self, offset: int) -> TagToken | None:
        """
        Find the nearest opening tag starting before `offset`.

        The search gives up on the first closing tag it meets rather than
        walking out to an enclosing element further back.
        """
        position = offset
        while True:
            position = self.text.rfind('<', 0, position)
            if position < 0:
                return None

            comment = self.comments.enclosing(position)
            if comment is not None:
                position = comment[0]
                continue

            token = match_tag_at(self.text, position, self.limit)
            if token is None:
                continue
            if token.is_closing:
                return None
            return token

    def find_anchor_forward(self, offset: int) -> TagToken | None:
        comment = self.comments.enclosing(offset)
        if comment is not None:
            offset = comment[1]

        for token in iter_tags(self.text, offset):
            if token.is_opening:
                return token
        return None

    def _search(self, pattern: re.Pattern[str], position: int) -> re.Match[str] | None:
        while True:
            match = pattern.search(self.text, position)
            if match is None:
                return None
            comment = self.comments.enclosing(match.start())
            if comment is None:
                return match
            position = comment[1]

    def _search_opening(self, pattern: re.Pattern[str], position: int) -> re.Match[str] | None:
        # `<div />` opens and closes in one tag, so it does not nest.
        while True:
            match = self._search(pattern, position)
            if match is None:
                return None
            token = match_tag_at(self.text, match.start(), self.limit)
            if token is None or not token.attributes_raw.rstrip().endswith('/'):
                return match
            position = match.end()

    def find_matching_close(self, anchor: TagToken) -> int | None:
        name = re.escape(anchor.tag_name)
        opening = re.compile(rf"<{name}(?=[\s>])", re.IGNORECASE)
        closing = re.compile(rf"</{name}\s*>", re.IGNORECASE)

        depth = 1
        position = anchor.end
        # Each match is kept until the scan moves past it.
        close_match = None
        open_match = self._search_opening(opening, position)
        while True:
            if close_match is None or close_match.start() < position:
                close_match = self._search(closing, position)
                if close_match is None:
                    return None

            if open_match is not None and open_match.start() < close_match.start():
                depth += 1
                position = open_match.end()
                open_match = self._search_opening(opening, position)
                continue

            depth -= 1
            position = close_match.end()
            if depth == 0:
                return close_match.end()


def locate_element(text: str, offset: int) -> ElementRange | None:
    return ElementRangeLocator(text).locate(offset)
