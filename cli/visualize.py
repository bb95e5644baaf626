#!/usr/bin/env python3
"""
Streamlit app for exploring cognitive decline by age group.

Run with: streamlit run cli/visualize.py [-- key=value ...]
"""

import os
import sys

# Add src to Python path so we can import our modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from agingviz.visualization.app import main

main()
