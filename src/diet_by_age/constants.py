"""
Constants and defaults for the dietary-intake-by-age chart.
"""

# Data source
DATA_URL = (
    "https://raw.githubusercontent.com/akprodromou/dietary-factors-age/"
    "refs/heads/main/dietary_factors_per_age_GR.csv"
)
AGE_COLUMN = "age"

# Column selection
EXCLUDED_COLUMNS = [
    "Total.omega.6.fat",
    "Other.starchy.vegetables",
    "Vitamin.A.with.supplements",
    "Potatoes",
    "Total.seafoods",
]
VITAMIN_MARKER = "Vita"

# Drop the sparse tail ages so the axis stops near 80 rather than 100
TRIM_COUNT = 4

# Scales
NICE_TICK_COUNT = 10
PEAK_COLORS = ("#6a87a1", "#04213b")

# Chart text
CHART_TITLE = "How Does Age Shape Our Diet?"
CHART_SUBTITLE = "Greek population dietary intake stratified by age"
SOURCE_NOTE = "Data Source: GDD 2018 Estimates and Datafiles, accessed December 2024"
LEGEND_LABEL = "Max value"

# Output
DEFAULT_OUTPUT = "data/charts/diet_by_age.svg"
HTML_EXTENSIONS = {".html", ".htm"}
IMAGE_EXTENSIONS = {".svg", ".png", ".pdf", ".jpeg", ".jpg", ".webp"}
