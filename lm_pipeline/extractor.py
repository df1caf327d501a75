from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .errors import BodyNotFound, ExtractionError, SummaryNotFound, TitleNotFound


# Literal anchors of the LeisMunicipais page template. Captures are greedy and
# "." stops at a newline, so each capture runs to the last closing anchor on
# the line where the opening anchor was found.
TITLE_RE = re.compile(r"<h2>(?P<title>.*)</h2>")
SUMMARY_RE = re.compile(r"</h2><br>(?P<summary>.*)<br><br><img")
BODY_RE = re.compile(r"><br><br><br>(?P<body>.*)<p><img")
DOCUMENT_LINK_RE = re.compile(r'btn-default" href="(?P<document_link>.*)" title')

MANDATORY_RULES: tuple[tuple[str, re.Pattern[str], type[ExtractionError]], ...] = (
    ("title", TITLE_RE, TitleNotFound),
    ("summary", SUMMARY_RE, SummaryNotFound),
    ("body", BODY_RE, BodyNotFound),
)


@dataclass(frozen=True, slots=True)
class DocumentFragments:
    title: str
    summary: str
    body: str
    document_link: str | None = None


def find_document_link(text: str) -> str | None:
    match = DOCUMENT_LINK_RE.search(text)
    if match is None:
        return None
    return match.group("document_link")


def extract_fragments(text: str, source: str | Path) -> DocumentFragments:
    """Locate the raw title, summary, body and download link fragments.

    Each rule scans the whole text on its own. The first missing mandatory
    fragment (title, then summary, then body) raises its ``ExtractionError``
    subclass with ``source`` in the message. A missing link is ``None``.
    """
    captured: dict[str, str] = {}
    for field, pattern, failure in MANDATORY_RULES:
        match = pattern.search(text)
        if match is None:
            raise failure(source)
        captured[field] = match.group(field)

    return DocumentFragments(
        title=captured["title"],
        summary=captured["summary"],
        body=captured["body"],
        document_link=find_document_link(text),
    )
