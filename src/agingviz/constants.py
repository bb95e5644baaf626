"""
Constants and configuration defaults for agingviz.
"""

# Directory paths
DATA_DIR = "data"
DEFAULT_CSV_PATH = f"{DATA_DIR}/Alzheimer's_Disease_and_Healthy_Aging_Data.csv"

# CSV column -> record field
CSV_COLUMNS = {
    "Class": "Class",
    "Topic": "Topic",
    "StratificationCategory1": "StratCat1",
    "Stratification1": "Strat1",
    "StratificationCategory2": "StratCat2",
    "Stratification2": "Strat2",
    "Data_Value": "Value",
}
RECORD_FIELDS = list(CSV_COLUMNS.values())

# Filter stage
COGNITIVE_DECLINE_CLASS = "Cognitive Decline"
EXCLUDED_TOPIC = (
    "Talked with health care professional about subjective cognitive decline "
    "or memory loss"
)
OVERALL_STRATUM = "Overall"
AGE_GROUP_CATEGORY = "Age Group"

# Dimension selector
SEX_MODE = "sex"
ETHNICITY_MODE = "ethnicity"
SEX_CATEGORY = "Sex"
ETHNICITY_MARKERS = ("Race", "Ethnic")
DIMENSION_OPTIONS = {"Sex": SEX_MODE, "Ethnicity": ETHNICITY_MODE}

# Chart configuration
CHART_WIDTH = 900
CHART_HEIGHT = 520
CHART_MARGIN = dict(top=30, right=200, bottom=80, left=60)
OUTER_PADDING = 0.1
INNER_PADDING = 0.05
TRANSITION_MS = 700
PALETTE_NAME = "Set2"
NICE_TICK_COUNT = 10
TITLE_TEMPLATE = (
    "Average reported percentage of cognitive decline by Age Group and {label}"
)
