from __future__ import annotations

import re
from typing import Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag


LINE_BREAK_TAGS = frozenset({"br"})
# Text inside these reaches the tree without character reference decoding.
RAW_TEXT_TAGS = frozenset({"script", "style"})
BR_END_TAG_RE = re.compile(r"</br\s*>", re.IGNORECASE)


def prepare_fragment(fragment: str) -> str:
    """Make the parser keep text as written.

    Every ``&`` is escaped so character references come back out of the
    parse verbatim. A ``</br>`` end tag is read as ``<br>``, as HTML parsers do.
    """
    return BR_END_TAG_RE.sub("<br>", fragment.replace("&", "&amp;"))


def iter_text_pieces(soup: BeautifulSoup) -> Iterator[str]:
    """Walk the parsed fragment in document order.

    Line-break tags yield a newline, other tags yield nothing but their
    children are still visited. Comments, doctypes, CDATA and processing
    instructions are dropped.
    """
    for node in soup.descendants:
        if isinstance(node, Tag):
            if node.name in LINE_BREAK_TAGS:
                yield "\n"
            continue
        if isinstance(node, PreformattedString):
            continue
        if isinstance(node, NavigableString):
            text = str(node)
            if node.parent is not None and node.parent.name in RAW_TEXT_TAGS:
                text = text.replace("&amp;", "&")
            yield text


def clean_html_to_text(fragment: str) -> str:
    if not fragment:
        return ""
    soup = BeautifulSoup(prepare_fragment(fragment), "html.parser")
    return "".join(iter_text_pieces(soup))
