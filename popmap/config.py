from pathlib import Path


# Files
BOUNDARY_JSON = Path("src/data/50m.json")
POPULATION_JSON = Path("src/data/population.json")
OUTPUT_HTML = Path("map.html")

# Topology object holding one geometry per country
COUNTRIES_OBJECT = "countries"

HTTP_TIMEOUT = 60

# Page
PAGE_TITLE = "World Population"
DEFAULT_WIDTH = 960
DEFAULT_HEIGHT = 600
VIEWBOX_ORIGIN = (50, 10)
PROJECTION_SCALE = 130

# Color scale (total population)
POPULATION_BREAKS = [
    10_000,
    100_000,
    500_000,
    1_000_000,
    5_000_000,
    10_000_000,
    50_000_000,
    100_000_000,
    500_000_000,
    1_500_000_000,
]
POPULATION_COLORS = [
    "#f7fcfd",
    "#e0ecf4",
    "#bfd3e6",
    "#9ebcda",
    "#8c96c6",
    "#8c6bb1",
    "#88419d",
    "#810f7c",
    "#4d004b",
    "#3a0038",
    "#27002a",
]

# Hover
NO_DATA_TEXT = "¯\\_(ツ)_/¯"
HIGHLIGHT_STROKE = "white"
HIGHLIGHT_STROKE_WIDTH = 1
IDLE_STROKE_WIDTH = 0.25
