"""Reporting pipeline: aggregation, top-N selection and charts."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
