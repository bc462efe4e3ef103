"""
Module: builder.output.rich_text

Purpose:
    Flatten the editor's rich-text body (an HTML subset: headings, p,
    ul/ol/li, blockquote, pre/code, strong/em, br) into plain text blocks
    the PDF renderer can draw.

Key Functions:
    - html_to_blocks(): Parse markup into TextBlocks

Dependencies:
    - bs4 (BeautifulSoup): HTML parsing

Used By:
    - builder.output.renderer: Preamble page
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

BLOCK_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6", "p", "li", "blockquote", "pre", "div")

# Paragraphs take the kind of the block they sit in (<li><p>, <blockquote><p>)
PLAIN_TAGS = ("p", "div")


@dataclass(frozen=True)
class TextBlock:
    """
    One block of body text.

    Attributes:
        kind: "h1".."h6", "p", "li", "blockquote" or "pre"
        text: Plain text; hard line breaks kept as "\\n"
    """

    kind: str
    text: str


def _pieces(node: PageElement) -> Iterator[str]:
    # Comment-like nodes carry no body text
    if isinstance(node, PreformattedString):
        return
    if isinstance(node, NavigableString):
        # Source newlines are just whitespace; only <br> breaks a line
        yield re.sub(r"\s+", " ", str(node))
    elif isinstance(node, Tag):
        if node.name == "br":
            yield "\n"
            return
        for child in node.children:
            yield from _pieces(child)


def _inline_text(nodes: Sequence[PageElement]) -> str:
    text = "".join(piece for node in nodes for piece in _pieces(node))
    lines = [re.sub(r"\s+", " ", line).strip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def _preformatted_text(node: Tag) -> str:
    lines = [line.rstrip() for line in node.get_text().split("\n")]
    return "\n".join(lines).strip("\n")


def _holds_blocks(node: PageElement) -> bool:
    return isinstance(node, Tag) and node.find(BLOCK_TAGS) is not None


def _collect(container: Tag, kind: str, blocks: List[TextBlock]) -> None:
    """Walk container's children; loose inline runs become `kind` blocks."""
    pending: List[PageElement] = []

    def flush() -> None:
        text = _inline_text(pending)
        if text:
            blocks.append(TextBlock(kind=kind, text=text))
        pending.clear()

    for child in container.children:
        if isinstance(child, Tag) and (child.name in BLOCK_TAGS or _holds_blocks(child)):
            flush()
            _emit(child, kind, blocks)
        else:
            pending.append(child)
    flush()


def _emit(node: Tag, context: str, blocks: List[TextBlock]) -> None:
    if node.name == "pre":
        text = _preformatted_text(node)
        if text.strip():
            blocks.append(TextBlock(kind="pre", text=text))
        return

    # ul/ol and other wrappers pass the surrounding kind through
    if node.name in PLAIN_TAGS or node.name not in BLOCK_TAGS:
        kind = context
    else:
        kind = node.name

    if _holds_blocks(node):
        _collect(node, kind, blocks)
        return

    text = _inline_text([node])
    if text:
        blocks.append(TextBlock(kind=kind, text=text))


def html_to_blocks(html: str) -> List[TextBlock]:
    """
    Convert body markup into ordered text blocks.

    Every piece of text lands in exactly one block. A paragraph inside a
    list item or blockquote takes that kind, so the editor's
    "<li><p>..</p></li>" markup still reads as a list. Text beside
    nested blocks, including stray top-level text, becomes its own block.
    Empty blocks (e.g. "<p><br/></p>" spacers) are dropped.

    Example:
        >>> html_to_blocks("<h1>Intro</h1><p>Read <b>all</b> questions.</p>")
        [TextBlock(kind='h1', text='Intro'), TextBlock(kind='p', text='Read all questions.')]
    """
    if not html or not html.strip():
        return []

    blocks: List[TextBlock] = []
    _collect(BeautifulSoup(html, "html.parser"), "p", blocks)
    return blocks
