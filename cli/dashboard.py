#!/usr/bin/env python3
"""
Simple launcher for the Diet-by-Age dashboard.

This script launches the Streamlit app with proper error handling.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from diet_by_age.visualization.dashboard import launch_dashboard

if __name__ == "__main__":
    launch_dashboard()
