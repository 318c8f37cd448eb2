"""Reporting pipeline: valued events → impact charts.

Node dependency graph:
    storm_events_valued → [summarize_by_event_type] → event_type_summary
    event_type_summary → [select_top_events]
        → health_impact_top, economic_impact_top
    health_impact_top, economic_impact_top → [render_impact_charts]
        → impact_charts
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import render_impact_charts, select_top_events, summarize_by_event_type


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the reporting pipeline."""
    return pipeline(
        [
            node(
                func=summarize_by_event_type,
                inputs="storm_events_valued",
                outputs="event_type_summary",
                name="summarize_by_event_type",
            ),
            node(
                func=select_top_events,
                inputs=["event_type_summary", "params:reporting.top_n"],
                outputs=["health_impact_top", "economic_impact_top"],
                name="select_top_events",
            ),
            node(
                func=render_impact_charts,
                inputs=[
                    "health_impact_top",
                    "economic_impact_top",
                    "params:reporting",
                ],
                outputs="impact_charts",
                name="render_impact_charts",
            ),
        ]
    )
