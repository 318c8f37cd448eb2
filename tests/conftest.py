"""Shared fixtures: a small synthetic Storm Database extract and parameters."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from kedro.config import OmegaConfigLoader

CONF_DIR = Path(__file__).resolve().parents[1] / "conf"

# Column order mirrors the published CSV; REFNUM and COUNTYNAME stand in
# for the columns the report does not use.
RAW_COLUMNS = [
    "STATE__",
    "BGN_DATE",
    "COUNTYNAME",
    "STATE",
    "EVTYPE",
    "FATALITIES",
    "INJURIES",
    "PROPDMG",
    "PROPDMGEXP",
    "CROPDMG",
    "CROPDMGEXP",
    "REFNUM",
]

RAW_ROWS = [
    # Before the 1996 cutoff: must never reach an aggregate
    [1, "4/18/1950 0:00:00", "MOBILE", "AL", "TORNADO", 0, 15, 25.0, "K", 0.0, "", 1],
    [48, "1/6/1996 0:00:00", "HARRIS", "TX", "FLASH FLOOD", 2, 5, 10.0, "M", 5.0, "K", 2],
    [29, "5/22/2011 0:00:00", "JASPER", "MO", "TORNADO", 158, 1150, 2.8, "B", 0.0, "", 3],
    [22, "8/29/2005 0:00:00", "ORLEANS", "LA", "STORM SURGE", 0, 0, 31.3, "B", 0.0, "", 4],
    [19, "7/15/1999 0:00:00", "POLK", "IA", "HAIL", 0, 2, 500.0, "K", 1.2, "M", 5],
    [6, "3/1/2001 0:00:00", "KERN", "CA", "TSTM WIND", 0, 1, 5.0, "0", 0.0, "", 6],
    [36, "12/24/2000 0:00:00", "KINGS", "NY", "tstm wind", 1, 0, 12.0, "", 0.0, "", 7],
    [12, "6/1/2003 0:00:00", "DADE", "FL", "HEAT", 20, 40, 0.0, "", 0.0, "", 8],
]


@pytest.fixture()
def raw_storm_frame() -> pd.DataFrame:
    """Raw rows as they come out of the CSV (dates still strings)."""
    return pd.DataFrame(RAW_ROWS, columns=RAW_COLUMNS)


@pytest.fixture()
def storm_csv(tmp_path, raw_storm_frame) -> Path:
    """The synthetic extract written as a bz2-compressed CSV."""
    path = tmp_path / "01_raw" / "StormData.csv.bz2"
    path.parent.mkdir(parents=True)
    raw_storm_frame.to_csv(path, index=False)
    return path


@pytest.fixture()
def parameters() -> dict:
    """Parameters exactly as configured in conf/base/parameters.yml."""
    loader = OmegaConfigLoader(
        conf_source=str(CONF_DIR), base_env="base", default_run_env="local"
    )
    return loader["parameters"]


@pytest.fixture()
def run_parameters(parameters, storm_csv, tmp_path) -> dict:
    """Configured parameters pointed at the synthetic cache and tmp output."""
    params = dict(parameters)
    params["acquisition"] = {
        **parameters["acquisition"],
        "source_url": "https://example.invalid/StormData.csv.bz2",
        "local_path": str(storm_csv),
    }
    params["reporting"] = {
        **parameters["reporting"],
        "output_dir": str(tmp_path / "08_reporting"),
    }
    return params
