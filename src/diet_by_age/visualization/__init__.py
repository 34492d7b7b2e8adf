"""
Diet-by-age visualization package.

This package provides the plotly small-multiples chart and a Streamlit
dashboard around it.
"""

from diet_by_age.visualization.charts import create_small_multiples_chart, save_chart
from diet_by_age.visualization.dashboard import launch_dashboard

__all__ = ["create_small_multiples_chart", "save_chart", "launch_dashboard"]
