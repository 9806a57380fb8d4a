"""
Settings management for gitgraph
"""

import copy
import json
from pathlib import Path
from typing import Any

from gitgraph import constants
from gitgraph.ui.git_graph.types import RenderConfig


class Settings:
    """Manages render and docs settings"""

    DEFAULT_SETTINGS = {
        "render": {
            "circle_diameter": constants.CIRCLE_DIAMETER,
            "lane_width": constants.LANE_WIDTH,
            "row_spacing_factor": constants.ROW_SPACING_FACTOR,
            "padding": constants.CANVAS_PADDING,
            "font_family": constants.FONT_FAMILY,
            "font_pixel_size": constants.FONT_PIXEL_SIZE,
            "node_fill_color": constants.NODE_FILL_COLOR,
            "edge_core_color": constants.EDGE_CORE_COLOR,
            "label_outline_color": constants.LABEL_OUTLINE_COLOR,
            "palette": list(constants.BRANCH_PALETTE),
            "palette_darken_factor": constants.PALETTE_DARKEN_FACTOR,
            "image_format": constants.DEFAULT_IMAGE_FORMAT,
        },
        "docs": {
            "output_dir": constants.DOCS_OUTPUT_DIR,
            "branch": constants.DEFAULT_BRANCH,
            "font_family": "JetBrains Mono",
            "font_pixel_size": 16,
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path(constants.SETTINGS_FILE).expanduser()

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'render.lane_width')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_image_format(self) -> str:
        """Get the output image format, falling back to SVG for unknown values"""
        image_format = str(self.get("render.image_format", constants.DEFAULT_IMAGE_FORMAT)).lower()
        if image_format not in constants.IMAGE_FORMATS:
            return constants.DEFAULT_IMAGE_FORMAT
        return image_format

    def render_config(self, section: str = "render") -> RenderConfig:
        """Build a RenderConfig from the render section.

        Keys present in `section` override the render section, so the docs
        site can use its own font without repeating the geometry.
        """
        values: dict[str, Any] = dict(self.settings.get("render", {}))
        if section != "render":
            overrides = self.get(section, {})
            values.update(
                {k: v for k, v in overrides.items() if k in RenderConfig.__dataclass_fields__}
            )

        return RenderConfig(
            circle_diameter=float(values["circle_diameter"]),
            lane_width=float(values["lane_width"]),
            row_spacing_factor=float(values["row_spacing_factor"]),
            padding=float(values["padding"]),
            font_family=str(values["font_family"]),
            font_pixel_size=max(1, int(values["font_pixel_size"])),
            node_fill_color=str(values["node_fill_color"]),
            edge_core_color=str(values["edge_core_color"]),
            label_outline_color=str(values["label_outline_color"]),
            palette=tuple(str(c) for c in values["palette"]) or tuple(constants.BRANCH_PALETTE),
            palette_darken_factor=int(values["palette_darken_factor"]),
            image_format=self.get_image_format(),
        )
