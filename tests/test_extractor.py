"""
Tests for the anchored fragment extraction rules.
"""

import pytest

from lm_pipeline.errors import BodyNotFound, ExtractionError, SummaryNotFound, TitleNotFound
from lm_pipeline.extractor import DocumentFragments, extract_fragments, find_document_link
from tests.conftest import build_page


class TestExtractFragments:
    """Locating the raw title, summary, body and link fragments."""

    def test_extracts_all_fragments(self):
        page = build_page(document_link="https://leis.s3.amazonaws.com/originais/lei-10-2020.pdf")
        fragments = extract_fragments(page, "lei.html")

        assert fragments == DocumentFragments(
            title="LEI Nº 10/2020",
            summary="Dispõe sobre a denominação de logradouro.",
            body=(
                "Art. 1º Fica denominada Rua São João.<br>Art. 2º Revogam-se as disposições em contrário."
                '<a class="btn btn-default" href="https://leis.s3.amazonaws.com/originais/lei-10-2020.pdf"'
                ' title="Download do documento">Download</a>'
            ),
            document_link="https://leis.s3.amazonaws.com/originais/lei-10-2020.pdf",
        )

    def test_missing_link_is_none(self):
        fragments = extract_fragments(build_page(), "lei.html")
        assert fragments.document_link is None

    def test_title_keeps_inner_markup(self):
        fragments = extract_fragments(build_page(title="LEI <b>Nº 10</b>"), "lei.html")
        assert fragments.title == "LEI <b>Nº 10</b>"

    def test_title_capture_is_greedy_to_last_closing_anchor_on_line(self):
        text = "<h2>A</h2> meio <h2>B</h2>"
        with pytest.raises(SummaryNotFound):
            extract_fragments(text, "x.html")
        assert extract_fragments(
            text + '<br>resumo<br><br><img src="a.png"><br><br><br>texto<p><img src="b.png">', "x.html"
        ).title == "A</h2> meio <h2>B"

    def test_summary_capture_is_greedy(self):
        text = (
            "<h2>T</h2><br>primeiro<br><br><img src='1'> segundo<br><br><img src='2'>"
            "\n<div><br><br><br>texto<p><img src='3'></div>"
        )
        assert extract_fragments(text, "x.html").summary == "primeiro<br><br><img src='1'> segundo"

    def test_capture_does_not_cross_line_breaks(self):
        text = (
            "<h2>Primeiro</h2><br>resumo<br><br><img src='a'>\n"
            "<h2>Segundo</h2>\n"
            "<div><br><br><br>texto<p><img src='b'></div>"
        )
        fragments = extract_fragments(text, "x.html")
        assert fragments.title == "Primeiro"
        assert fragments.body == "texto"

    def test_rules_scan_whole_text_independently(self):
        text = (
            "<div><br><br><br>texto antes do titulo<p><img src='b'></div>\n"
            "<h2>Titulo</h2><br>resumo<br><br><img src='a'>"
        )
        fragments = extract_fragments(text, "x.html")
        assert fragments.title == "Titulo"
        assert fragments.body == "texto antes do titulo"


class TestExtractionFailures:
    """Each mandatory fragment has its own named failure."""

    def test_missing_title(self):
        with pytest.raises(TitleNotFound) as exc_info:
            extract_fragments(build_page(title=None), "paginas/sem_titulo.html")
        assert str(exc_info.value) == "Title not found in file paginas/sem_titulo.html"
        assert exc_info.value.field == "title"
        assert exc_info.value.source == "paginas/sem_titulo.html"

    def test_missing_summary(self):
        with pytest.raises(SummaryNotFound) as exc_info:
            extract_fragments(build_page(summary=None), "paginas/sem_resumo.html")
        assert str(exc_info.value) == "Summary not found in file paginas/sem_resumo.html"

    def test_missing_body(self):
        with pytest.raises(BodyNotFound) as exc_info:
            extract_fragments(build_page(body=None), "paginas/sem_texto.html")
        assert str(exc_info.value) == "Body not found in file paginas/sem_texto.html"

    def test_title_is_checked_first(self):
        with pytest.raises(TitleNotFound):
            extract_fragments("<html><body>nada aqui</body></html>", "vazio.html")

    def test_summary_is_checked_before_body(self):
        with pytest.raises(SummaryNotFound):
            extract_fragments(build_page(summary=None, body=None), "x.html")

    def test_failures_share_a_base_class(self):
        for failure in (TitleNotFound, SummaryNotFound, BodyNotFound):
            assert issubclass(failure, ExtractionError)
            assert issubclass(failure, RuntimeError)


class TestFindDocumentLink:
    """The optional download button link."""

    def test_link_is_taken_verbatim(self):
        html = '<a class="btn btn-default" href="https://example.org/a%20b.doc?x=1&amp;y=2" title="Baixar">'
        assert find_document_link(html) == "https://example.org/a%20b.doc?x=1&amp;y=2"

    def test_requires_title_after_href(self):
        assert find_document_link('<a class="btn btn-default" href="https://example.org/a.doc">') is None

    def test_absent_link(self):
        assert find_document_link("<p>sem documento</p>") is None
