from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceDocument:
    path: Path
    category: str


def category_for(path: Path) -> str:
    # Pages are saved as <input-dir>/<category>/<page>.html
    return Path(path).resolve().parent.name


def iter_source_documents(input_dir: Path, pattern: str = "*.html") -> Iterator[SourceDocument]:
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise NotADirectoryError(f"Input directory not found: {input_dir.as_posix()}")

    paths = sorted(path for path in input_dir.rglob(pattern) if path.is_file())
    LOGGER.info("Discovered %s documents under %s", len(paths), input_dir.as_posix())
    for path in paths:
        yield SourceDocument(path=path, category=category_for(path))
