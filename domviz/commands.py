import logging
from dataclasses import dataclass
from typing import Callable

from domviz.document import HTMLDocument
from domviz.locator import ElementRange, locate_element
from domviz.view import DOMTreeProvider

logger = logging.getLogger(__name__)


class ElementNotFoundError(LookupError):
    def __init__(self, line: int):
        super().__init__(f"Could not find an HTML element at line {line}")
        self.line = line


@dataclass
class DeleteElementCommand:
    """
    Deletes the complete element under an offset from a document.

    `confirm` receives the text about to be removed and returns whether to
    go ahead. Without one, deletions are not confirmed.
    """
    document: HTMLDocument
    provider: DOMTreeProvider | None = None
    confirm: Callable[[str], bool] | None = None
    snippet_length: int | None = None

    def run(self, offset: int) -> ElementRange | None:
        element_range = locate_element(self.document.text, offset)
        if element_range is None:
            raise ElementNotFoundError(self.document.line_at(offset))

        snippet = self.document.snippet(element_range, self.snippet_length)
        if self.confirm is not None and not self.confirm(snippet):
            logger.info("Deletion at offset %d cancelled", offset)
            return None

        self.document.delete(element_range)
        if self.document.path is not None:
            self.document.save()
        logger.info(
            "Deleted characters %d-%d", element_range.start, element_range.end
        )

        if self.provider is not None:
            self.provider.refresh()
        return element_range
