from __future__ import annotations

import codecs
from pathlib import Path
from typing import BinaryIO


SOURCE_ENCODING = "cp1252"
DECODE_ERRORS = "lm_pipeline.c1"

# Bytes Python's cp1252 table leaves unmapped. The WHATWG windows-1252 table
# maps each of them to the C1 control with the same value.
CP1252_UNMAPPED_BYTES = frozenset({0x81, 0x8D, 0x8F, 0x90, 0x9D})


def _c1_passthrough(exc: UnicodeError) -> tuple[str, int]:
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    chunk = exc.object[exc.start:exc.end]
    if exc.encoding == "charmap":
        replacement = "".join(chr(b) if b in CP1252_UNMAPPED_BYTES else "\ufffd" for b in chunk)
    else:
        replacement = "\ufffd"
    return replacement, exc.end


codecs.register_error(DECODE_ERRORS, _c1_passthrough)


def read_source_bytes(source: str | Path | BinaryIO) -> bytes:
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    return source.read()


def decode_document(
    source: str | Path | BinaryIO,
    encoding: str = SOURCE_ENCODING,
    errors: str = DECODE_ERRORS,
) -> str:
    """Read a whole document and decode it from the legacy single-byte encoding.

    Every byte maps to one code point. Under the default policy the bytes
    ``cp1252`` leaves unmapped decode to the matching C1 control, as in the
    WHATWG windows-1252 table. Any other malformed input becomes U+FFFD.
    ``OSError`` from reading is not caught.
    """
    return read_source_bytes(source).decode(encoding, errors=errors)
