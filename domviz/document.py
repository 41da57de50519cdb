import bisect
import logging
from dataclasses import dataclass, field
from pathlib import Path

from domviz.locator import ElementRange

logger = logging.getLogger(__name__)


@dataclass
class HTMLDocument:
    """
    The text of one HTML file as the editor side sees it.

    Line and column numbers are 1-based, offsets are 0-based character
    indices into `text`.
    """
    text: str = ""
    path: Path | None = None
    _line_starts: list[int] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._index_lines()

    @classmethod
    def load(cls, path: str | Path) -> "HTMLDocument":
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        logger.debug("Loaded %s (%d characters)", path, len(text))
        return cls(text=text, path=path)

    def save(self) -> None:
        if self.path is None:
            raise ValueError("Document has no path to save to")
        self.path.write_text(self.text, encoding="utf-8")
        logger.debug("Saved %s (%d characters)", self.path, len(self.text))

    def _index_lines(self) -> None:
        self._line_starts = [0]
        for index, c in enumerate(self.text):
            if c == '\n':
                self._line_starts.append(index + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def offset_at(self, line: int, column: int) -> int:
        line = max(1, min(line, self.line_count))
        line_start = self._line_starts[line - 1]
        if line < self.line_count:
            # exclude the newline itself
            line_end = self._line_starts[line] - 1
        else:
            line_end = len(self.text)
        return line_start + max(0, min(column - 1, line_end - line_start))

    def line_at(self, offset: int) -> int:
        return max(1, bisect.bisect_right(self._line_starts, offset))

    def snippet(self, element_range: ElementRange, limit: int | None = None) -> str:
        snippet = element_range.slice(self.text)
        if limit is not None and len(snippet) > limit:
            return snippet[:limit] + "..."
        return snippet

    def delete(self, element_range: ElementRange) -> str:
        self.text = self.text[:element_range.start] + self.text[element_range.end:]
        self._index_lines()
        return self.text
