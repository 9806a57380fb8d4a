"""Tests for settings loading and RenderConfig construction."""

import json

from gitgraph.config.settings import Settings
from gitgraph.ui.git_graph.types import RenderConfig


class TestSettings:
    """JSON settings merged over defaults."""

    def test_defaults_without_file(self, tmp_path):
        settings = Settings(tmp_path / "missing.json")
        assert settings.get("render.circle_diameter") == 20
        assert settings.get("docs.branch") == "master"
        assert settings.get("render.nope", "fallback") == "fallback"

    def test_file_overrides_merge_with_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"render": {"lane_width": 30}}))
        settings = Settings(path)
        assert settings.get("render.lane_width") == 30
        assert settings.get("render.circle_diameter") == 20

    def test_defaults_are_not_shared(self, tmp_path):
        first = Settings(tmp_path / "a.json")
        first.set("render.palette", ["#000000"])
        second = Settings(tmp_path / "b.json")
        assert len(second.get("render.palette")) == 9

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        settings = Settings(path)
        settings.set("docs.output_dir", "site")
        settings.save()
        assert Settings(path).get("docs.output_dir") == "site"

    def test_unknown_image_format_falls_back(self, tmp_path):
        settings = Settings(tmp_path / "missing.json")
        settings.set("render.image_format", "GIF")
        assert settings.get_image_format() == "svg"
        settings.set("render.image_format", "PNG")
        assert settings.get_image_format() == "png"


class TestRenderConfig:
    """RenderConfig built from settings sections."""

    def test_default_render_config(self, tmp_path):
        config = Settings(tmp_path / "missing.json").render_config()
        assert config == RenderConfig()
        assert config.row_spacing == 25

    def test_docs_section_overrides_font(self, tmp_path):
        config = Settings(tmp_path / "missing.json").render_config("docs")
        assert config.font_family == "JetBrains Mono"
        assert config.font_pixel_size == 16
        assert config.circle_diameter == 20

    def test_custom_geometry(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"render": {"circle_diameter": 30, "palette": ["#123456"]}}))
        config = Settings(path).render_config()
        assert config.circle_diameter == 30
        assert config.edge_width == 6
        assert config.palette == ("#123456",)
