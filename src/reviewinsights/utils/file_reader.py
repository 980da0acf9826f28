"""Review text extraction from uploaded CSV/XLSX files."""

import csv
import io
import logging
import zipfile
from pathlib import Path
from typing import Union

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..core.config import settings
from ..core.constants import FileConstants

logger = logging.getLogger(__name__)


class ReviewFileError(ValueError):
    """The uploaded file cannot be turned into review text."""


class UnsupportedFileTypeError(ReviewFileError):
    pass


class EmptyReviewFileError(ReviewFileError):
    pass


class ReviewFileTooLargeError(ReviewFileError):
    pass


def file_extension(file_name: str) -> str:
    return Path(file_name).suffix.lower().lstrip(".")


def is_supported_file(file_name: str, mime_type: str = None) -> bool:
    """Accept by extension or by MIME type, whichever the caller knows."""
    return (
        file_extension(file_name) in FileConstants.ALLOWED_EXTENSIONS
        or (mime_type or "") in FileConstants.ALLOWED_MIME_TYPES
    )


def _frame_to_text(df: pd.DataFrame) -> str:
    """One line per row, non-empty cells joined with spaces."""
    lines = []
    for row in df.itertuples(index=False):
        cells = [str(v).strip() for v in row if not pd.isna(v) and str(v).strip()]
        if cells:
            lines.append(" ".join(cells))
    return "\n".join(lines)


def _decode(content: bytes) -> str:
    for encoding in FileConstants.CSV_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            logger.debug(f"CSV is not {encoding}, trying next encoding")
    raise ReviewFileError("Could not decode the CSV file.")


def _read_csv(content: bytes) -> pd.DataFrame:
    text = _decode(content)
    quoting = csv.QUOTE_MINIMAL
    if text.count('"') % 2:
        # an unterminated quote would swallow the rest of the file
        logger.warning("CSV has an unbalanced quote, reading quotes as plain text")
        quoting = csv.QUOTE_NONE
    try:
        return pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            quoting=quoting,
            engine="python",
            # rows wider than the first one collapse into a single cell
            on_bad_lines=lambda fields: [" ".join(f.strip() for f in fields if f.strip())],
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyReviewFileError("The uploaded file appears to be empty or does not contain text.") from e
    except pd.errors.ParserError as e:
        raise ReviewFileError(f"Could not parse the CSV file: {e}") from e


def _read_xlsx(content: bytes) -> pd.DataFrame:
    try:
        return pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=str, engine="openpyxl")
    except (ValueError, KeyError, zipfile.BadZipFile, InvalidFileException) as e:
        raise ReviewFileError(f"Could not read the XLSX file: {e}") from e


def extract_reviews_text(file_name: str, content: bytes) -> str:
    """Turn the bytes of an uploaded review file into newline-separated text."""
    extension = file_extension(file_name)
    if extension not in FileConstants.ALLOWED_EXTENSIONS:
        raise UnsupportedFileTypeError("Invalid file type. Please upload a CSV or XLSX file.")

    max_bytes = int(settings.max_file_mb * 1024 * 1024)
    if len(content) > max_bytes:
        raise ReviewFileTooLargeError(f"File is larger than {settings.max_file_mb:g}MB.")
    if not content:
        raise EmptyReviewFileError("The uploaded file appears to be empty or does not contain text.")

    df = _read_csv(content) if extension == "csv" else _read_xlsx(content)
    text = _frame_to_text(df)
    if not text.strip():
        raise EmptyReviewFileError("The uploaded file appears to be empty or does not contain text.")

    logger.info(f"Extracted {len(text.splitlines())} rows from {file_name}")
    return text


def read_review_file(path: Union[str, Path]) -> str:
    """Read a review file from disk."""
    path = Path(path)
    return extract_reviews_text(path.name, path.read_bytes())
