#!/usr/bin/env python3
"""
Render the dietary-intake-by-age chart without installing the package.

Run with: python cli/render.py output=chart.svg layout=compact
"""

import os
import sys

# Add src to Python path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from diet_by_age.cli import main

if __name__ == "__main__":
    main()
