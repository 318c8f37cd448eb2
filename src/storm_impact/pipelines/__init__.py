"""Kedro pipelines that make up the storm impact report."""
