"""Damage valuation pipeline: magnitude codes → dollar amounts."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
