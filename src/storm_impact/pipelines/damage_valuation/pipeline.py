"""Damage valuation pipeline.

A single node: the clean event table is joined against the property and
crop magnitude tables to produce dollar damage columns.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import derive_damage_values


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the damage_valuation pipeline."""
    return pipeline(
        [
            node(
                func=derive_damage_values,
                inputs=["storm_events_clean", "params:damage_valuation"],
                outputs="storm_events_valued",
                name="derive_damage_values",
            ),
        ]
    )
