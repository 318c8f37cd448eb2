"""Project pipelines."""

from __future__ import annotations

from kedro.pipeline import Pipeline

from storm_impact.pipelines import damage_valuation, data_processing, reporting


def register_pipelines() -> dict[str, Pipeline]:
    """Register the project's pipelines.

    The default pipeline runs the whole report: download → clean →
    value damage → aggregate → render charts.
    """
    pipelines = {
        "data_processing": data_processing.create_pipeline(),
        "damage_valuation": damage_valuation.create_pipeline(),
        "reporting": reporting.create_pipeline(),
    }
    pipelines["__default__"] = (
        pipelines["data_processing"]
        + pipelines["damage_valuation"]
        + pipelines["reporting"]
    )
    return pipelines
