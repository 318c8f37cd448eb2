"""Raw → clean transformation nodes for the NOAA Storm Database extract.

Each function is a Kedro node.  Apart from ``fetch_storm_data``, which
maintains the local cache file, they are pure input → output.  Together
they take the compressed CSV and produce a year-filtered DataFrame with
the nine columns the report needs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
import requests

from storm_impact.errors import DateParseError, DownloadError

logger = logging.getLogger(__name__)

# ── Columns we keep from the 37-column raw data ─────────────────────
KEEP_COLUMNS: list[str] = [
    "BGN_DATE",
    "STATE",
    "EVTYPE",
    "FATALITIES",
    "INJURIES",
    "PROPDMG",
    "PROPDMGEXP",
    "CROPDMG",
    "CROPDMGEXP",
]

# Read as text so codes like "0" and dates are never coerced
_STRING_COLUMNS: dict[str, type] = {
    "BGN_DATE": str,
    "STATE": str,
    "EVTYPE": str,
    "PROPDMGEXP": str,
    "CROPDMGEXP": str,
}


# ── Node 1 ───────────────────────────────────────────────────────────
def fetch_storm_data(acquisition: dict[str, Any]) -> str:
    """Make sure the compressed CSV exists locally, downloading it if needed.

    An existing file at ``local_path`` is reused as-is.  Otherwise the file
    is streamed to ``<local_path>.part`` and renamed once complete, so an
    interrupted transfer never leaves something that looks like a cache hit.

    Args:
        acquisition: ``source_url``, ``local_path``, ``timeout_seconds``
            and ``chunk_size`` from parameters.yml.

    Returns:
        Path to the local compressed CSV.

    Raises:
        DownloadError: on any network error or non-2xx response.
    """
    url: str = acquisition["source_url"]
    target = Path(acquisition["local_path"])

    if target.exists():
        logger.info(
            "Using cached dataset %s (%.1f MB)",
            target,
            target.stat().st_size / 1024 / 1024,
        )
        return str(target)

    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + ".part")

    logger.info("Downloading %s -> %s", url, target)
    try:
        with requests.get(
            url, stream=True, timeout=acquisition.get("timeout_seconds", 60)
        ) as response:
            response.raise_for_status()
            with open(partial, "wb") as f:
                for chunk in response.iter_content(
                    chunk_size=acquisition.get("chunk_size", 1024 * 1024)
                ):
                    f.write(chunk)
    except requests.RequestException as exc:
        partial.unlink(missing_ok=True)
        raise DownloadError(url, str(exc)) from exc

    partial.replace(target)
    logger.info("Downloaded %.1f MB", target.stat().st_size / 1024 / 1024)
    return str(target)


# ── Node 2 ───────────────────────────────────────────────────────────
def load_storm_data(raw_data_path: str) -> pd.DataFrame:
    """Read the compressed CSV into a DataFrame.

    Compression is inferred from the extension (``.bz2`` for the
    published file).

    Args:
        raw_data_path: Path returned by ``fetch_storm_data``.

    Returns:
        Raw DataFrame with every column of the source file.
    """
    path = Path(raw_data_path)
    if not path.exists():
        raise FileNotFoundError(f"Storm data file not found: {path}")

    df = pd.read_csv(path, dtype=_STRING_COLUMNS, low_memory=False)
    logger.info(
        "Loaded %s: %s rows, %s columns",
        path.name,
        f"{len(df):,}",
        len(df.columns),
    )
    return df


# ── Node 3 ───────────────────────────────────────────────────────────
def parse_event_dates(df: pd.DataFrame, date_format: str) -> pd.DataFrame:
    """Convert BGN_DATE strings to datetimes and add a YEAR column.

    The source stores begin dates like "4/18/1950 0:00:00".  Every row
    must match ``date_format``; a single bad value fails the step rather
    than silently dropping the row from every aggregate.

    Args:
        df: Raw DataFrame.
        date_format: strptime-style format of BGN_DATE.

    Returns:
        DataFrame with BGN_DATE as datetime64 and an integer YEAR column.

    Raises:
        DateParseError: if any BGN_DATE is missing or unparsable.
    """
    df = df.copy()

    parsed = pd.to_datetime(df["BGN_DATE"], format=date_format, errors="coerce")
    bad = parsed.isna()
    if bad.any():
        samples = df.loc[bad, "BGN_DATE"].head(10).tolist()
        raise DateParseError("BGN_DATE", date_format, int(bad.sum()), samples)

    df["BGN_DATE"] = parsed
    df["YEAR"] = parsed.dt.year

    if df.empty:
        logger.warning("BGN_DATE: no rows to parse")
        return df

    logger.info(
        "BGN_DATE parsed for %s rows. Year range: %d–%d",
        f"{len(df):,}",
        df["YEAR"].min(),
        df["YEAR"].max(),
    )
    return df


# ── Node 4 ───────────────────────────────────────────────────────────
def filter_by_year(df: pd.DataFrame, start_year: int) -> pd.DataFrame:
    """Keep only events that began in or after ``start_year``.

    NOAA only started recording all event types in 1996; earlier years
    are dominated by tornado, thunderstorm wind and hail reports and
    would skew any comparison between event types.

    Args:
        df: DataFrame with a YEAR column.
        start_year: First year to keep.

    Returns:
        DataFrame restricted to YEAR >= start_year.
    """
    total = len(df)
    df_recent = df[df["YEAR"] >= start_year].copy()

    dropped = total - len(df_recent)
    pct_dropped = (dropped / total * 100) if total > 0 else 0

    logger.info(
        "Year filter (>= %d): kept %s of %s rows (dropped %s = %.1f%%)",
        start_year,
        f"{len(df_recent):,}",
        f"{total:,}",
        f"{dropped:,}",
        pct_dropped,
    )
    return df_recent


# ── Node 5 ───────────────────────────────────────────────────────────
def select_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Project to the nine columns used by the report.

    Args:
        df: Year-filtered DataFrame.

    Returns:
        DataFrame with only the columns in KEEP_COLUMNS, in that order.
    """
    missing = [c for c in KEEP_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Expected columns not found in data: {missing}")

    before_cols = len(df.columns)
    df_selected = df[KEEP_COLUMNS].reset_index(drop=True)

    logger.info(
        "Column selection: kept %d of %d columns (dropped %d)",
        len(KEEP_COLUMNS),
        before_cols,
        before_cols - len(KEEP_COLUMNS),
    )
    return df_selected
