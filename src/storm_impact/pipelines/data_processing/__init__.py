"""Raw → clean data processing pipeline for the NOAA Storm Database."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
