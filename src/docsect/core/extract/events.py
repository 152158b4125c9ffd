"""HTML event stream: open-tag, text-chunk and close-tag events in document order"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag


@dataclass(frozen=True)
class StartTag:
    """An element opened; attribute values are plain strings."""
    name: str
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TextChunk:
    """A piece of a text node. Only the final piece of a node has last_in_text_node set."""
    text: str
    last_in_text_node: bool = True


@dataclass(frozen=True)
class EndTag:
    name: str


Event = Union[StartTag, TextChunk, EndTag]


def _attrs(tag: Tag) -> dict[str, str]:
    """Flatten bs4 attributes; multi-valued ones (class, rel) are space-joined."""
    return {
        k: ' '.join(v) if isinstance(v, list) else str(v)
        for k, v in tag.attrs.items()
    }


def _chunks(text: str, chunk_size: Optional[int]) -> Iterator[TextChunk]:
    if not chunk_size or len(text) <= chunk_size:
        yield TextChunk(text, last_in_text_node=True)
        return
    starts = range(0, len(text), chunk_size)
    last = starts[-1]
    for start in starts:
        yield TextChunk(text[start:start + chunk_size], last_in_text_node=start == last)


def _walk(root: Tag, chunk_size: Optional[int]) -> Iterator[Event]:
    """Depth-first walk with an explicit stack, so nesting depth is not bounded by recursion."""
    stack = [(root, iter(root.children))]
    while stack:
        node, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if node is not root:
                yield EndTag(node.name)
        elif isinstance(child, Tag):
            yield StartTag(child.name, _attrs(child))
            stack.append((child, iter(child.children)))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            # comments, doctypes and CDATA are PreformattedString subclasses
            if child:
                yield from _chunks(str(child), chunk_size)


def iter_events(html: str, chunk_size: Optional[int] = None) -> Iterator[Event]:
    """Yield StartTag / TextChunk / EndTag events for html in document order.

    Each text node is delivered whole, or split into chunk_size pieces when set.
    Void elements (br, img, hr) produce a StartTag immediately followed by an EndTag.
    """
    soup = BeautifulSoup(html, 'html.parser')
    yield from _walk(soup, chunk_size)
