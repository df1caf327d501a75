from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import PipelineConfig
from .discovery import category_for, iter_source_documents
from .errors import ExtractionError
from .logging_utils import setup_logging
from .output import export_records_xlsx, write_outcomes
from .parser import parse_html_to_record, parse_many


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract municipal legal acts from saved LeisMunicipais HTML pages."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common_args(target_parser: argparse.ArgumentParser) -> None:
        target_parser.add_argument("--log-level", type=str, default="INFO")
        target_parser.add_argument("--encoding", type=str, default="cp1252", help="Source page encoding")

    parser_parse = subparsers.add_parser("parse", help="Parse one page and print the record as JSON")
    add_common_args(parser_parse)
    parser_parse.add_argument("file", type=Path)
    parser_parse.add_argument(
        "--category",
        type=str,
        default=None,
        help="Category label (default: name of the folder holding the file)",
    )

    parser_extract = subparsers.add_parser(
        "extract",
        help="Parse every page under a folder into records.jsonl and failures.csv",
    )
    add_common_args(parser_extract)
    parser_extract.add_argument("--input-dir", type=Path, default=Path("resources"))
    parser_extract.add_argument("--output-dir", type=Path, default=Path("artifacts"))
    parser_extract.add_argument("--pattern", type=str, default="*.html")
    parser_extract.add_argument("--workers", type=int, default=1)
    parser_extract.add_argument("--fail-fast", action="store_true", help="Stop at the first page that fails")

    parser_export = subparsers.add_parser("export-xlsx", help="Convert records.jsonl into a formatted XLSX")
    parser_export.add_argument("--output-dir", type=Path, default=Path("artifacts"))
    parser_export.add_argument("--log-level", type=str, default="INFO")
    parser_export.add_argument("--output", type=Path, default=None, help="XLSX path (default: <output-dir>/records.xlsx)")

    return parser


def run_parse(args: argparse.Namespace) -> int:
    setup_logging(level=args.log_level)
    category = args.category if args.category is not None else category_for(args.file)
    try:
        record = parse_html_to_record(args.file, category, encoding=args.encoding)
    except ExtractionError as exc:
        LOGGER.error("%s", exc)
        return 1

    json.dump(record.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


def run_extract(args: argparse.Namespace) -> int:
    config = PipelineConfig(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        file_pattern=args.pattern,
        source_encoding=args.encoding,
        workers=args.workers,
    )
    config.ensure_directories()
    setup_logging(config.pipeline_log_file, level=args.log_level)

    documents = list(iter_source_documents(config.input_dir, config.file_pattern))
    if not documents:
        LOGGER.warning("No files matching %s under %s", config.file_pattern, config.input_dir.as_posix())
        return 0

    try:
        outcomes = parse_many(
            documents,
            workers=config.workers,
            encoding=config.source_encoding,
            errors=config.decode_errors,
            show_progress=True,
            fail_fast=args.fail_fast,
        )
    except ExtractionError as exc:
        LOGGER.error("Aborting: %s", exc)
        return 1

    stats = write_outcomes(outcomes, config)
    LOGGER.info(
        "extract completed: documents=%s written=%s failed=%s records=%s",
        len(outcomes),
        stats["written"],
        stats["failed"],
        config.records_jsonl.as_posix(),
    )
    return 0


def run_export(args: argparse.Namespace) -> int:
    config = PipelineConfig(output_dir=args.output_dir)
    setup_logging(level=args.log_level)
    if not config.records_jsonl.exists():
        LOGGER.error("records.jsonl not found: %s", config.records_jsonl.as_posix())
        return 1
    export_records_xlsx(config.records_jsonl, args.output or config.records_xlsx)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "parse":
        return run_parse(args)
    if args.command == "extract":
        return run_extract(args)
    if args.command == "export-xlsx":
        return run_export(args)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
