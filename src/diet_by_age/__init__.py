"""
diet-by-age: small-multiples chart of dietary intake by age.
"""

from diet_by_age.config import LayoutConfig, PipelineConfig, get_layout
from diet_by_age.pipeline import ChartModel, run_pipeline

__all__ = ["ChartModel", "LayoutConfig", "PipelineConfig", "get_layout", "run_pipeline"]
