from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


RECORD_FIELDS = ("title", "category", "summary", "body", "document_link")


@dataclass(frozen=True, slots=True)
class LegalRecord:
    """One municipal legal act as extracted from its HTML page.

    ``title``, ``summary`` and ``body`` are cleaned plain text. ``document_link``
    is the raw ``href`` of the download button, or ``None`` when the page has
    no attached document.
    """

    title: str
    category: str
    summary: str
    body: str
    document_link: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
