"""
agingviz: grouped bar charts of cognitive decline by age group.

Loads the Alzheimer's Disease and Healthy Aging survey, averages reported
percentages by age group and sex or race/ethnicity, and renders the result
with plotly.
"""

__version__ = "0.1.0"
