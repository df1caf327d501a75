from __future__ import annotations

import concurrent.futures as futures
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable

from tqdm.auto import tqdm

from .cleaner import clean_html_to_text
from .decoder import DECODE_ERRORS, SOURCE_ENCODING, decode_document
from .discovery import SourceDocument
from .errors import BodyNotFound, ExtractionError, SummaryNotFound, TitleNotFound
from .extractor import extract_fragments
from .models import LegalRecord


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    document: SourceDocument
    record: LegalRecord | None = None
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def parse_html_text(text: str, source: str | Path, category: str) -> LegalRecord:
    """Build a record from already decoded page text.

    A mandatory field whose cleaned text is blank counts as missing and
    raises the same ``*NotFound`` as an absent fragment.
    """
    fragments = extract_fragments(text, source)
    title = clean_html_to_text(fragments.title)
    summary = clean_html_to_text(fragments.summary)
    body = clean_html_to_text(fragments.body)

    for value, error_cls in ((title, TitleNotFound), (summary, SummaryNotFound), (body, BodyNotFound)):
        if not value.strip():
            raise error_cls(source)

    return LegalRecord(
        title=title,
        category=category,
        summary=summary,
        body=body,
        document_link=fragments.document_link,
    )


def parse_html_to_record(
    source: str | Path | BinaryIO,
    category: str,
    *,
    encoding: str = SOURCE_ENCODING,
    errors: str = DECODE_ERRORS,
) -> LegalRecord:
    """Decode one legal act page and build its ``LegalRecord``.

    Raises ``TitleNotFound``, ``SummaryNotFound`` or ``BodyNotFound`` for the
    first missing fragment; ``OSError`` from reading propagates as is. For a
    binary stream the stream's ``name`` (when present) identifies the source
    in error messages.
    """
    if isinstance(source, (str, Path)):
        source_id: str | Path = source
    else:
        source_id = getattr(source, "name", "<stream>")

    text = decode_document(source, encoding=encoding, errors=errors)
    record = parse_html_text(text, source_id, category)
    LOGGER.debug(
        "Parsed %s: category=%s title=%r document_link=%s",
        source_id,
        category,
        record.title,
        record.document_link or "none",
    )
    return record


def _parse_outcome(document: SourceDocument, encoding: str, errors: str) -> ParseOutcome:
    try:
        record = parse_html_to_record(document.path, document.category, encoding=encoding, errors=errors)
    except ExtractionError as exc:
        return ParseOutcome(document=document, error=exc)
    return ParseOutcome(document=document, record=record)


def parse_many(
    documents: Iterable[SourceDocument],
    workers: int = 1,
    *,
    encoding: str = SOURCE_ENCODING,
    errors: str = DECODE_ERRORS,
    show_progress: bool = False,
    fail_fast: bool = False,
) -> list[ParseOutcome]:
    """Parse every document, keeping extraction failures as values.

    Results come back in input order whatever the number of workers. With
    ``fail_fast`` the first ``ExtractionError`` seen is raised instead and no
    further document is started.
    """
    documents = list(documents)
    outcomes: list[ParseOutcome | None] = [None] * len(documents)
    workers = max(1, int(workers))

    with tqdm(total=len(documents), desc="Parsing", unit="doc", disable=not show_progress) as pbar:
        if workers == 1:
            for idx, document in enumerate(documents):
                outcome = _parse_outcome(document, encoding, errors)
                if fail_fast and outcome.error is not None:
                    raise outcome.error
                outcomes[idx] = outcome
                pbar.update(1)
        else:
            with futures.ThreadPoolExecutor(max_workers=workers) as executor:
                future_to_idx = {
                    executor.submit(_parse_outcome, document, encoding, errors): idx
                    for idx, document in enumerate(documents)
                }
                for future in futures.as_completed(future_to_idx):
                    outcome = future.result()
                    if fail_fast and outcome.error is not None:
                        for pending in future_to_idx:
                            pending.cancel()
                        raise outcome.error
                    outcomes[future_to_idx[future]] = outcome
                    pbar.update(1)

    return [outcome for outcome in outcomes if outcome is not None]
