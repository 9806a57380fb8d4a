"""
Centralized constants for gitgraph.

This module contains hardcoded strings and magic numbers that are used
across the codebase. Centralizing them here makes them easier to find
and modify.
"""

# Repository
DEFAULT_BRANCH = "master"
SHORT_HASH_LENGTH = 7

# Geometry (pixels)
CIRCLE_DIAMETER = 20
LANE_WIDTH = 20
ROW_SPACING_FACTOR = 1.25
CANVAS_PADDING = 20

# Text
FONT_FAMILY = "monospace"
FONT_PIXEL_SIZE = 14
LABEL_OUTLINE_WIDTH = 2

# Colors
NODE_FILL_COLOR = "#fefde7"
EDGE_CORE_COLOR = "#333333"
LABEL_OUTLINE_COLOR = "#000000"

# ColorBrewer Pastel1, darkened when turned into QColors
BRANCH_PALETTE = [
    "#fbb4ae",
    "#b3cde3",
    "#ccebc5",
    "#decbe4",
    "#fed9a6",
    "#ffffcc",
    "#e5d8bd",
    "#fddaec",
    "#f2f2f2",
]
PALETTE_DARKEN_FACTOR = 160

# Output
IMAGE_FORMATS = ("svg", "png")
DEFAULT_IMAGE_FORMAT = "svg"
DOCS_OUTPUT_DIR = "docs"
DOCS_IMAGE_DIR = "img"
SETTINGS_FILE = "~/.config/gitgraph/settings.json"

# Points to CSS pixels, for sizing embedded images
PT_TO_PX = 4 / 3
