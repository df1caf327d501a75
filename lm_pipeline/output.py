from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from .config import PipelineConfig
from .io_utils import append_csv_row, append_jsonl_records, iter_jsonl
from .models import RECORD_FIELDS
from .parser import ParseOutcome


LOGGER = logging.getLogger(__name__)
FAILURE_FIELDS = ("source", "category", "field", "error")
ILLEGAL_EXCEL_CHARS_RE = re.compile(r"[\x00-\x08\x0B-\x0C\x0E-\x1F]")


def write_outcomes(outcomes: Iterable[ParseOutcome], config: PipelineConfig) -> dict[str, int]:
    """Append records to ``records.jsonl`` and failures to ``failures.csv``."""
    records: list[dict[str, Any]] = []
    failed = 0

    for outcome in outcomes:
        if outcome.record is not None:
            record = outcome.record.to_dict()
            record["source"] = outcome.document.path.as_posix()
            records.append(record)
            continue

        failed += 1
        error = outcome.error
        LOGGER.warning("Skipping %s: %s", outcome.document.path.as_posix(), error)
        append_csv_row(
            config.failures_csv,
            FAILURE_FIELDS,
            {
                "source": outcome.document.path.as_posix(),
                "category": outcome.document.category,
                "field": getattr(error, "field", ""),
                "error": str(error),
            },
        )

    written = append_jsonl_records(config.records_jsonl, records) if records else 0
    return {"written": written, "failed": failed}


def _clean_for_excel(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return ILLEGAL_EXCEL_CHARS_RE.sub("", value)


def export_records_xlsx(jsonl_path: Path, xlsx_path: Path) -> int:
    columns = [*RECORD_FIELDS, "source"]
    dataframe = pd.DataFrame(list(iter_jsonl(jsonl_path)), columns=columns)
    for col in dataframe.columns:
        dataframe[col] = dataframe[col].map(_clean_for_excel)

    xlsx_path = Path(xlsx_path)
    xlsx_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(xlsx_path, engine="xlsxwriter") as writer:
        sheet_name = "Leis"
        dataframe.to_excel(writer, sheet_name=sheet_name, index=False, startrow=1, header=False)

        workbook = writer.book
        worksheet = writer.sheets[sheet_name]

        header_format = workbook.add_format(
            {
                "bold": True,
                "align": "center",
                "valign": "vcenter",
                "bg_color": "#D3D3D3",
                "border": 1,
            }
        )
        text_wrap_format = workbook.add_format({"text_wrap": True, "valign": "top"})
        url_format = workbook.add_format({"valign": "top"})

        for col_idx, column_name in enumerate(dataframe.columns):
            worksheet.write(0, col_idx, column_name, header_format)
            if column_name in {"summary", "body"}:
                worksheet.set_column(col_idx, col_idx, 90, text_wrap_format)
            elif column_name in {"document_link", "source"}:
                worksheet.set_column(col_idx, col_idx, 45, url_format)
            else:
                worksheet.set_column(col_idx, col_idx, 30, text_wrap_format)

        worksheet.freeze_panes(1, 0)
        worksheet.autofilter(0, 0, len(dataframe), max(0, len(dataframe.columns) - 1))

    LOGGER.info("Exported %s records to %s", len(dataframe), xlsx_path.as_posix())
    return len(dataframe)
