"""
Shared fixtures for the extraction pipeline tests.
"""

import csv
import logging
from pathlib import Path
from typing import Optional

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"
LEI_COMPLEMENTAR_PAGE = FIXTURES_DIR / "LeisMunicipais-com-br-Lei-Complementar-122-2019.html"
DECRETO_PAGE = FIXTURES_DIR / "LeisMunicipais-com-br-Decreto-1-1984.html"


def read_csv_rows(path: Path) -> list:
    """Read a CSV report written by the pipeline into a list of dicts."""
    with Path(path).open("r", encoding="utf-8", newline="") as fp:
        return [dict(row) for row in csv.DictReader(fp)]


def build_page(
    title: Optional[str] = "LEI Nº 10/2020",
    summary: Optional[str] = "Dispõe sobre a denominação de logradouro.",
    body: Optional[str] = "Art. 1º Fica denominada Rua São João.<br>Art. 2º Revogam-se as disposições em contrário.",
    document_link: Optional[str] = None,
) -> str:
    """Render a page in the LeisMunicipais template, leaving out any part set to None."""
    header = '<div class="container">'
    if title is not None:
        header += f"<h2>{title}</h2>"
    else:
        header += "<h3>sem título</h3>"
    if summary is not None:
        header += f'<br>{summary}<br><br><img src="/img/brasao.png">'
    header += "</div>"

    texto = '<div class="texto">'
    if body is not None:
        texto += f"<br><br><br>{body}"
    if document_link is not None:
        texto += f'<a class="btn btn-default" href="{document_link}" title="Download do documento">Download</a>'
    if body is not None:
        texto += '<p><img src="/img/rodape.png"></p>'
    texto += "</div>"

    return f"<html>\n<body>\n{header}\n{texto}\n</body>\n</html>\n"


@pytest.fixture
def write_page(tmp_path):
    """Write HTML to a Windows-1252 encoded file under tmp_path."""

    def _write(name: str, html: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(html.encode("cp1252"))
        return path

    return _write


@pytest.fixture
def restore_logging():
    """Undo setup_logging() side effects on the root logger."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
