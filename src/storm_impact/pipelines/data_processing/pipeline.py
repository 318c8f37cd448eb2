"""Raw → clean pipeline for the NOAA Storm Database extract.

This pipeline makes sure the compressed CSV is cached locally, reads it,
and applies three sequential transformation nodes to produce the
year-filtered, nine-column event table used for damage valuation.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import (
    fetch_storm_data,
    filter_by_year,
    load_storm_data,
    parse_event_dates,
    select_columns,
)


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the data_processing pipeline.

    Node chain:
        fetch (or reuse cache) → load CSV → parse dates
        → filter by year → select columns → storm_events_clean
    """
    return pipeline(
        [
            node(
                func=fetch_storm_data,
                inputs="params:acquisition",
                outputs="raw_data_path",
                name="fetch_storm_data",
            ),
            node(
                func=load_storm_data,
                inputs="raw_data_path",
                outputs="storm_events_raw",
                name="load_storm_data",
            ),
            node(
                func=parse_event_dates,
                inputs=["storm_events_raw", "params:data_processing.date_format"],
                outputs="storm_events_dated",
                name="parse_event_dates",
            ),
            node(
                func=filter_by_year,
                inputs=["storm_events_dated", "params:data_processing.start_year"],
                outputs="storm_events_recent",
                name="filter_by_year",
            ),
            node(
                func=select_columns,
                inputs="storm_events_recent",
                outputs="storm_events_clean",
                name="select_columns",
            ),
        ]
    )
