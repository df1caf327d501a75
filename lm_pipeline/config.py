from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .decoder import DECODE_ERRORS, SOURCE_ENCODING


@dataclass(slots=True)
class PipelineConfig:
    input_dir: Path = Path("resources")
    output_dir: Path = Path("artifacts")
    file_pattern: str = "*.html"

    source_encoding: str = SOURCE_ENCODING
    decode_errors: str = DECODE_ERRORS

    workers: int = 1

    def __post_init__(self) -> None:
        self.input_dir = Path(self.input_dir)
        self.output_dir = Path(self.output_dir)
        self.workers = max(1, int(self.workers))

    @property
    def records_jsonl(self) -> Path:
        return self.output_dir / "records.jsonl"

    @property
    def failures_csv(self) -> Path:
        return self.output_dir / "failures.csv"

    @property
    def records_xlsx(self) -> Path:
        return self.output_dir / "records.xlsx"

    @property
    def logs_dir(self) -> Path:
        return self.output_dir / "logs"

    @property
    def pipeline_log_file(self) -> Path:
        return self.logs_dir / "pipeline.log"

    def ensure_directories(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)
