import re
from dataclasses import dataclass
from typing import Iterator

from domviz.constants import VOID_ELEMENTS


COMMENT_PATTERN = re.compile(r"<!--.*?(?:-->|\Z)", re.DOTALL)

# One alternative per construct the scanner knows about. Comments and
# declarations are consumed whole so that markup inside them is never
# reported as a tag.
TOKEN_PATTERN = re.compile(
    rf"(?P<comment>{COMMENT_PATTERN.pattern})"
    r"|(?P<declaration><![^>]*>)"
    r"|<(?P<closing>/)?(?P<name>[A-Za-z][A-Za-z0-9-]*)(?P<attributes>[^>]*)>",
    re.DOTALL,
)


def _attribute_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        rf"""(?:^|\s){re.escape(name)}\s*=\s*(?:"([^"]*)"|'([^']*)')""",
        re.IGNORECASE,
    )


ATTRIBUTE_PATTERNS = {
    'id': _attribute_pattern('id'),
    'class': _attribute_pattern('class'),
}


@dataclass(frozen=True)
class TagToken:
    tag_name: str
    is_closing: bool
    is_self_closing: bool
    attributes_raw: str
    start: int
    # one past the closing '>'
    end: int

    @property
    def is_opening(self) -> bool:
        return not self.is_closing

    @property
    def id(self) -> str | None:
        return extract_attribute(self.attributes_raw, 'id')

    @property
    def class_names(self) -> tuple[str, ...]:
        return parse_class_names(
            extract_attribute(self.attributes_raw, 'class')
        )


def _token_from_match(match: re.Match[str]) -> TagToken:
    tag_name = match.group('name').casefold()
    attributes = match.group('attributes')
    is_closing = match.group('closing') is not None
    is_self_closing = not is_closing and (
        attributes.rstrip().endswith('/') or tag_name in VOID_ELEMENTS
    )
    return TagToken(
        tag_name=tag_name,
        is_closing=is_closing,
        is_self_closing=is_self_closing,
        attributes_raw=attributes,
        start=match.start(),
        end=match.end(),
    )


def tag_limit(text: str) -> int:
    """
    Return the offset just past the last `>` in `text`.

    Every tag and declaration ends with `>`, so none can end after this
    point. Scans are bounded by it; otherwise each stray `<name` in an
    unterminated tail would be tried against the whole rest of the text.
    """
    return text.rfind('>') + 1


def iter_tags(text: str, start: int = 0) -> Iterator[TagToken]:
    """
    Yield every tag token in `text` at or after `start`, in document order.

    Comments and `<!...>` declarations are skipped, and a `<` that does not
    begin a valid tag is treated as plain text.
    """
    for match in TOKEN_PATTERN.finditer(text, start, tag_limit(text)):
        if match.group('name') is not None:
            yield _token_from_match(match)


def next_tag(text: str, start: int = 0) -> TagToken | None:
    return next(iter_tags(text, start), None)


def match_tag_at(text: str, position: int, limit: int | None = None) -> TagToken | None:
    """
    Return the tag starting exactly at `position`, if there is one.

    Callers probing many positions of one text pass `limit`, the value of
    `tag_limit(text)`, so it is computed once.
    """
    if limit is None:
        limit = tag_limit(text)
    match = TOKEN_PATTERN.match(text, position, limit)
    if match is None or match.group('name') is None:
        return None
    return _token_from_match(match)


def comment_spans(text: str) -> list[tuple[int, int]]:
    # An unterminated comment runs to the end of the text.
    limit = tag_limit(text)
    spans = []
    for match in TOKEN_PATTERN.finditer(text, 0, limit):
        if match.group('comment') is not None:
            # The bounded scan cuts an unterminated comment short at `limit`.
            spans.append(COMMENT_PATTERN.match(text, match.start()).span())

    if not spans or spans[-1][1] <= limit:
        tail = text.find('<!--', limit)
        if tail >= 0:
            spans.append((tail, len(text)))
    return spans


def extract_attribute(attributes_raw: str, name: str) -> str | None:
    """
    Read a quoted attribute value out of the raw attribute text of a tag.

    Only single- or double-quoted values are recognised; an unquoted or
    missing attribute gives None.
    """
    pattern = ATTRIBUTE_PATTERNS.get(name) or _attribute_pattern(name)
    match = pattern.search(attributes_raw)
    if match is None:
        return None
    double_quoted, single_quoted = match.groups()
    return double_quoted if double_quoted is not None else single_quoted


def parse_class_names(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(value.split())
