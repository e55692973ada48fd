"""CSV reading for uploaded seller reports.

CsvReader turns CSV bytes or files into header lists and row dictionaries.
Schema inference is disabled so every cell arrives as raw text (or None for
an empty cell); type coercion is the validator's job. Blank lines are
dropped.

Progress is reported as an approximate byte cursor: while chunks are being
handed out the estimate never exceeds 99%, and 100% is reported only once
the last chunk has been delivered.
"""

import io
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from sellercsv.core.exceptions import ReaderError
from sellercsv.validation.result import Row

logger = logging.getLogger(__name__)

CsvSource = bytes | str | Path


@dataclass(frozen=True)
class ReadProgress:
    """Approximate reading progress.

    Attributes:
        bytes_read: Estimated number of bytes consumed so far
        total_bytes: Size of the input
        rows_read: Rows delivered so far
        done: True once every row has been delivered
    """

    bytes_read: int
    total_bytes: int
    rows_read: int
    done: bool = False

    @property
    def percent(self) -> float:
        """Progress percentage, capped at 99 until reading is done."""
        if self.done:
            return 100.0
        if self.total_bytes <= 0:
            return 0.0
        return min(99.0, self.bytes_read / self.total_bytes * 100)


class CsvReader:
    """Reads CSV input with a header row into row dictionaries.

    Attributes:
        chunk_size: Number of rows per chunk yielded by ``iter_chunks``
        separator: Field separator
    """

    def __init__(self, chunk_size: int = 1000, separator: str = ","):
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        self.chunk_size = chunk_size
        self.separator = separator

    def read(self, source: CsvSource) -> pl.DataFrame:
        """Read CSV input into a DataFrame of string columns.

        Args:
            source: Raw CSV bytes, or a path to a CSV file

        Returns:
            DataFrame with one Utf8 column per header, blank lines removed

        Raises:
            ReaderError: If the file is missing or the CSV cannot be parsed
        """
        data, file_path = self._load(source)
        return self._parse(data, file_path)

    def _parse(self, data: bytes, file_path: str | None) -> pl.DataFrame:
        if not data.strip():
            return pl.DataFrame()

        try:
            df = pl.read_csv(
                io.BytesIO(data),
                separator=self.separator,
                infer_schema_length=0,
            )
        except (pl.exceptions.PolarsError, UnicodeDecodeError) as e:
            raise ReaderError(
                f"Error parsing CSV: {e}", file_path=file_path, reason=type(e).__name__
            ) from e

        if df.width:
            df = df.filter(~pl.all_horizontal(pl.all().is_null()))

        logger.debug(
            "Read %d rows with %d columns from %s", df.height, df.width, file_path or "<bytes>"
        )
        return df

    def read_rows(self, source: CsvSource) -> tuple[list[str], list[Row]]:
        """Read CSV input and return its headers and row dictionaries."""
        df = self.read(source)
        return df.columns, df.to_dicts()

    def iter_chunks(
        self,
        source: CsvSource,
        on_progress: Callable[[ReadProgress], None] | None = None,
    ) -> Iterator[list[Row]]:
        """Yield rows in chunks of ``chunk_size``, reporting progress.

        Args:
            source: Raw CSV bytes, or a path to a CSV file
            on_progress: Called after each chunk and once on completion

        Yields:
            Lists of row dictionaries, in file order
        """
        data, file_path = self._load(source)
        df = self._parse(data, file_path)
        total_bytes = len(data)
        total_rows = df.height
        rows_read = 0

        for chunk in df.iter_slices(n_rows=self.chunk_size):
            rows_read += chunk.height
            yield chunk.to_dicts()
            if on_progress is not None:
                on_progress(
                    ReadProgress(
                        bytes_read=total_bytes * rows_read // max(total_rows, 1),
                        total_bytes=total_bytes,
                        rows_read=rows_read,
                    )
                )

        if on_progress is not None:
            on_progress(
                ReadProgress(
                    bytes_read=total_bytes,
                    total_bytes=total_bytes,
                    rows_read=rows_read,
                    done=True,
                )
            )

    @staticmethod
    def _load(source: CsvSource) -> tuple[bytes, str | None]:
        if isinstance(source, bytes):
            return source, None

        path = Path(source)
        try:
            return path.read_bytes(), str(path)
        except FileNotFoundError as e:
            raise ReaderError(
                f"Input file not found: {path}", file_path=str(path), reason="File does not exist"
            ) from e
        except OSError as e:
            raise ReaderError(
                f"Cannot read input file: {e}", file_path=str(path), reason=type(e).__name__
            ) from e
