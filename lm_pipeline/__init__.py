"""Extraction of municipal legal acts from saved LeisMunicipais HTML pages."""

from .errors import BodyNotFound, ExtractionError, SummaryNotFound, TitleNotFound
from .models import LegalRecord
from .parser import parse_html_text, parse_html_to_record, parse_many

__all__ = [
    "BodyNotFound",
    "ExtractionError",
    "LegalRecord",
    "SummaryNotFound",
    "TitleNotFound",
    "parse_html_text",
    "parse_html_to_record",
    "parse_many",
]
