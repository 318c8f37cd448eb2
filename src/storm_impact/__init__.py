"""Storm Impact: health and economic impact report over the NOAA Storm Database."""

__version__ = "0.1.0"
