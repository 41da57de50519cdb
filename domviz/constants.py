# Tags that never carry a closing tag or children.
VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img',
    'input', 'link', 'meta', 'source', 'track', 'wbr',
})

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

DEFAULT_LOG_LEVEL = "WARNING"

# Maximum characters of an element shown when asking to confirm a deletion
DEFAULT_SNIPPET_LENGTH = 200
