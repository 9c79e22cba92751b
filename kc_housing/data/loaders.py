"""Data loading utilities for the housing analysis."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

import pandas as pd

from .schemas import validate_sales
from ..config import constants
from ..utils.exceptions import DataIOError, FormatError

logger = logging.getLogger(__name__)

# read_csv options that change which lines are rows; the shape scan honours them
SCANNED_READ_OPTIONS = ("encoding", "comment", "skiprows", "quotechar")

# read_csv options that change the row layout in ways the shape scan cannot follow
UNSUPPORTED_READ_OPTIONS = ("header", "names", "skipfooter", "lineterminator", "delimiter")


@dataclass
class LoadResult:
    """Loaded sales table and its per-column missing-value counts."""

    data: pd.DataFrame
    missing_counts: pd.Series

    @property
    def n_rows(self) -> int:
        return len(self.data)

    @property
    def n_columns(self) -> int:
        return self.data.shape[1]


def load_sales(
    filepath: Union[str, Path],
    validate: bool = True,
    sep: str = ",",
    **kwargs
) -> LoadResult:
    """
    Load house sales data from a delimited file with a header row.

    Parameters
    ----------
    filepath : str or Path
        Path to the sales file
    validate : bool, default True
        Whether to validate data against the raw sales schema
    sep : str, default ","
        Field delimiter
    **kwargs
        Additional arguments passed to ``pd.read_csv``. ``encoding``,
        ``comment``, ``skiprows`` and ``quotechar`` also apply to the shape
        check; options that redefine the header or line layout are rejected

    Returns
    -------
    LoadResult
        Sales table and missing-value counts

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        If the extension is not supported or a rejected read_csv option is given
    DataIOError
        If the file exists but cannot be read
    FormatError
        If the file cannot be decoded, the header is malformed or rows have
        inconsistent field counts
    SchemaError
        If validation fails
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Sales file not found: {filepath}")

    file_ext = filepath.suffix.lower()
    if file_ext not in constants.SUPPORTED_INPUT_FORMATS:
        raise ValueError(
            f"Unsupported file format: {file_ext}. "
            f"Supported formats: {constants.SUPPORTED_INPUT_FORMATS}"
        )

    rejected = sorted(key for key in UNSUPPORTED_READ_OPTIONS if key in kwargs)
    if rejected:
        raise ValueError(f"Unsupported read options for sales files: {rejected}")

    try:
        scan_options = {key: kwargs[key] for key in SCANNED_READ_OPTIONS if key in kwargs}
        check_table_shape(filepath, sep=sep, **scan_options)
        # Keep the sale date as text, it is parsed by position later
        df = pd.read_csv(filepath, sep=sep, dtype={"date": str}, **kwargs)
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise FormatError(f"Could not parse {filepath}: {e}", stage="load") from e
    except OSError as e:
        raise DataIOError(f"Could not read {filepath}: {e}", stage="load") from e

    if validate:
        df = validate_sales(df)
        logger.info(f"Loaded and validated {len(df):,} sales")
    else:
        logger.info(f"Loaded {len(df):,} sales (unvalidated)")

    result = LoadResult(data=df, missing_counts=count_missing(df))
    log_load_summary(result)

    if "id" in df.columns and df["id"].duplicated().any():
        logger.warning(
            f"{df['id'].duplicated().sum():,} rows repeat an existing id; "
            "corrections will apply to every row with that id"
        )

    return result


def check_table_shape(
    filepath: Union[str, Path],
    sep: str = ",",
    encoding: Optional[str] = None,
    comment: Optional[str] = None,
    skiprows: Optional[Union[int, Iterable[int], Callable[[int], bool]]] = None,
    quotechar: str = '"'
) -> int:
    """
    Check the header and the field count of every row.

    Lines are read the way ``pd.read_csv`` reads them with the same options:
    ``skiprows`` drops physical lines (a count from the top, 0-based line
    indices, or a predicate on the index), text after ``comment`` is ignored,
    and blank lines are skipped.

    Parameters
    ----------
    filepath : str or Path
        Delimited file to scan
    sep : str, default ","
        Field delimiter
    encoding : str, optional
        Text encoding (UTF-8 when None)
    comment : str, optional
        Single comment character
    skiprows : int, iterable of int or callable, optional
        Lines to skip before parsing
    quotechar : str, default '"'
        Quote character

    Returns
    -------
    int
        Number of data rows

    Raises
    ------
    FormatError
        If the file cannot be decoded, the header is empty, has blank or
        duplicate names, or a row has a different number of fields than the
        header
    """
    skip = _skip_predicate(skiprows)
    physical_lines: List[int] = []

    def kept_lines(f):
        for index, line in enumerate(f):
            if skip(index):
                continue
            if comment and comment in line:
                line = line.split(comment, 1)[0] + "\n"
            physical_lines.append(index + 1)
            yield line

    try:
        with open(filepath, "r", newline="", encoding=encoding or "utf-8") as f:
            reader = csv.reader(kept_lines(f), delimiter=sep, quotechar=quotechar)
            header = next((row for row in reader if row), None)

            if not header or all(not name.strip() for name in header):
                raise FormatError(f"{filepath} has no header row", stage="load")

            names = [name.strip() for name in header]
            if any(not name for name in names):
                raise FormatError(f"{filepath} header has blank column names", stage="load")

            duplicates = sorted({name for name in names if names.count(name) > 1})
            if duplicates:
                raise FormatError(
                    f"{filepath} header repeats column names: {duplicates}", stage="load"
                )

            n_rows = 0
            for row in reader:
                if not row:
                    continue
                if len(row) != len(header):
                    line_number = physical_lines[reader.line_num - 1]
                    raise FormatError(
                        f"{filepath} line {line_number} has {len(row)} fields, "
                        f"header has {len(header)}",
                        stage="load"
                    )
                n_rows += 1
    except UnicodeDecodeError as e:
        raise FormatError(
            f"{filepath} is not valid {encoding or 'utf-8'} text: {e}", stage="load"
        ) from e

    return n_rows


def _skip_predicate(skiprows) -> Callable[[int], bool]:
    """Turn a ``read_csv`` style ``skiprows`` value into a line-index predicate."""
    if skiprows is None:
        return lambda index: False
    if callable(skiprows):
        return skiprows
    if isinstance(skiprows, int):
        return lambda index: index < skiprows
    skipped = set(skiprows)
    return lambda index: index in skipped


def count_missing(df: pd.DataFrame) -> pd.Series:
    """Count missing values per column."""
    return df.isna().sum()


def log_load_summary(result: LoadResult) -> None:
    """Log row/column counts and the columns that have missing values."""
    logger.info(
        f"Data loaded with {result.n_rows:,} rows and {result.n_columns} columns"
    )
    missing = result.missing_counts[result.missing_counts > 0]
    if missing.empty:
        logger.info("No missing values")
    else:
        for column, count in missing.items():
            logger.info(f"Missing values in {column}: {count:,}")


def save_results(
    df: pd.DataFrame,
    filepath: Union[str, Path],
    format: Optional[str] = None,
    **kwargs
) -> None:
    """
    Save a result table to file.

    Parameters
    ----------
    df : pd.DataFrame
        Data to save
    filepath : str or Path
        Output file path
    format : str, optional
        Output format. If None, inferred from filepath extension
    **kwargs
        Additional arguments passed to pandas write function
    """
    filepath = Path(filepath)

    filepath.parent.mkdir(parents=True, exist_ok=True)

    if format is None:
        format = filepath.suffix.lower()
    else:
        format = format.lower()
        if not format.startswith('.'):
            format = f'.{format}'

    if format == '.csv':
        df.to_csv(filepath, **kwargs)
    elif format == '.parquet':
        df.to_parquet(filepath, **kwargs)
    else:
        raise ValueError(f"Unsupported output format: {format}")

    logger.info(f"Saved {len(df):,} rows to {filepath}")
