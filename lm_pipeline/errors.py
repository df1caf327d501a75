from __future__ import annotations

from pathlib import Path


class ExtractionError(RuntimeError):
    """A mandatory fragment of the legal act page was not found."""

    field: str = "fragment"

    def __init__(self, source: str | Path) -> None:
        self.source = str(source)
        super().__init__(f"{self.field.capitalize()} not found in file {self.source}")


class TitleNotFound(ExtractionError):
    field = "title"


class SummaryNotFound(ExtractionError):
    field = "summary"


class BodyNotFound(ExtractionError):
    field = "body"
