#!/usr/bin/env python3
"""CLI script for printing the aggregate table and exporting the chart."""

import os
import sys

# Add src to Python path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from agingviz.cli import main

if __name__ == "__main__":
    main()
