"""Tests for painting laid out graphs with Qt."""

import pytest
from PySide6.QtGui import QColor, QImage

from gitgraph.docs.index import main_graph
from gitgraph.git_backend.errors import LayoutConsistencyError
from gitgraph.git_backend.refs import Commit
from gitgraph.git_backend.repository import Repository
from gitgraph.ui.git_graph.layout import compute_layout
from gitgraph.ui.git_graph.renderer import (
    BranchColors,
    GitGraphRenderer,
    ensure_gui_application,
    render_git_graph,
)
from gitgraph.ui.git_graph.types import CommitNode, Link, RenderConfig, RenderingData


class TestBranchColors:
    """Palette slots by first appearance, with slot 0 for no branch."""

    def test_unattributed_is_slot_zero(self):
        colors = BranchColors(["master", None, "dev"], RenderConfig())
        assert colors.slot(None) == 0
        assert colors.slot("master") == 1
        assert colors.slot("dev") == 2

    def test_named_slots_skip_slot_zero_when_wrapping(self):
        config = RenderConfig(palette=("#ff0000", "#00ff00", "#0000ff"))
        colors = BranchColors(["a", "b", "c", "d"], config)
        assert [colors.slot(b) for b in "abcd"] == [1, 2, 1, 2]

    def test_ninth_branch_does_not_share_unattributed_color(self):
        branches: list[str | None] = [None, *(f"b{i}" for i in range(9))]
        colors = BranchColors(branches, RenderConfig())
        assert colors.slot("b7") == 8
        assert colors.slot("b8") == 1
        assert all(colors.slot(f"b{i}") != colors.slot(None) for i in range(9))

    def test_single_color_palette(self):
        colors = BranchColors(["a", None], RenderConfig(palette=("#123456",)))
        assert colors.slot("a") == 0
        assert colors.slot(None) == 0

    def test_empty_palette_is_rejected(self):
        with pytest.raises(ValueError):
            RenderConfig(palette=())

    def test_colors_are_darkened_palette_entries(self):
        config = RenderConfig()
        colors = BranchColors(["master"], config)
        expected = QColor(config.palette[1]).darker(config.palette_darken_factor)
        assert colors.color("master") == expected


class TestRenderer:
    """Encoded output and canvas size."""

    def test_svg_output(self, merged_repo):
        rendered = render_git_graph(merged_repo, "master", image_format="svg")
        assert rendered.image_format == "svg"
        assert b"<svg" in rendered.data

    def test_png_output(self, merged_repo):
        rendered = render_git_graph(merged_repo, "master", image_format="png")
        assert rendered.data.startswith(b"\x89PNG")

    def test_height_covers_row_range(self, merged_repo):
        """Rows 0..2 at 20 * 1.25 px plus padding on both sides."""
        rendered = render_git_graph(merged_repo, "master")
        assert rendered.height == 2 * 20 + 2 * 25

    def test_width_covers_lanes_and_labels(self, merged_repo):
        data = compute_layout(merged_repo, "master")
        size = GitGraphRenderer().measure(data)
        # Two lanes after normalization, plus some label text
        assert size.width() > 2 * 20 + 2 * 20

    def test_single_commit(self, repo):
        repo.commit("Initial")
        rendered = render_git_graph(repo, "master")
        assert rendered.height == 40
        assert rendered.width > 40

    def test_config_changes_geometry(self, merged_repo):
        config = RenderConfig(circle_diameter=40, padding=0)
        rendered = render_git_graph(merged_repo, "master", config)
        assert rendered.height == 2 * 50

    def test_unsupported_format(self, merged_repo):
        with pytest.raises(ValueError):
            render_git_graph(merged_repo, "master", image_format="gif")

    def test_dangling_link_fails(self):
        ensure_gui_application()
        data = RenderingData(
            commits={"c": CommitNode("c", Commit("c", 1), 0, None, "c")},
            links=[Link("missing", "c")],
        )
        with pytest.raises(LayoutConsistencyError):
            GitGraphRenderer().render(data)

    def test_main_graph_renders(self, tmp_path):
        graph = main_graph()
        rendered = render_git_graph(graph.repo, graph.branch, image_format="svg")
        out = tmp_path / "nested" / "graph.svg"
        rendered.save(out)
        assert out.read_bytes() == rendered.data
        # 13 commits in rows 0..12
        assert rendered.height == 2 * 20 + 12 * 25


# Large geometry keeps sampled pixels clear of antialiased borders: edges are
# 8 px wide with a 4 px core, lanes sit 40 px apart and rows 80 px apart.
# A grid point (lane, row) lands at (40 + 40 * lane, 40 + 80 * (max_row - row)).
PAINT_CONFIG = RenderConfig(
    circle_diameter=40,
    lane_width=40,
    row_spacing_factor=2,
    padding=40,
    image_format="png",
)


@pytest.fixture
def fork_repo() -> Repository:
    """dev forks from Initial, master moves on, then dev is merged back.

    Laid out from master: Initial (row 0), B (row 1) and the merge (row 3)
    in lane 0; A (row 2) in lane 1. The Initial -> A edge spans two rows.
    """
    repo = Repository()
    repo.commit("Initial")
    repo.checkout("dev", create_branch=True)
    repo.checkout("master")
    repo.commit("B")
    repo.checkout("dev")
    repo.commit("A")
    repo.checkout("master")
    repo.merge("dev")
    return repo


def _paint(repo: Repository) -> tuple[QImage, BranchColors]:
    data = compute_layout(repo, "master")
    rendered = GitGraphRenderer(PAINT_CONFIG).render(data)
    image = QImage.fromData(rendered.data, "PNG")
    assert not image.isNull()
    return image, BranchColors(data.branches(), PAINT_CONFIG)


def _assert_color(image: QImage, x: int, y: int, expected: QColor) -> None:
    actual = image.pixelColor(x, y)
    assert actual.alpha() == 255, (x, y)
    for got, want in (
        (actual.red(), expected.red()),
        (actual.green(), expected.green()),
        (actual.blue(), expected.blue()),
    ):
        assert abs(got - want) <= 3, (x, y, actual.name(), expected.name())


CORE = QColor(PAINT_CONFIG.edge_core_color)


class TestPainting:
    """Pixels of a rendered PNG."""

    def test_same_lane_edge_has_core_over_branch_color(self, merged_repo):
        """The Initial -> merge edge runs down x=40 from y=200 to y=40."""
        image, colors = _paint(merged_repo)
        master = colors.color("master")

        _assert_color(image, 39, 80, CORE)
        _assert_color(image, 40, 80, CORE)
        # Either side of the 4 px core, inside the 8 px stroke
        _assert_color(image, 36, 80, master)
        _assert_color(image, 43, 80, master)

    def test_merge_diagonal_takes_deeper_branch_color(self, merged_repo):
        """A at (80, 120) joins the merge at (40, 40) in dev's color."""
        image, colors = _paint(merged_repo)
        # Midpoint (60, 80), then 3 px off the line towards the lower right
        _assert_color(image, 60, 80, CORE)
        _assert_color(image, 62, 78, colors.color("dev"))

    def test_stem_and_diagonal_colors(self, fork_repo):
        """Initial (40, 280) -> bend (40, 200) in master, then -> A (80, 120) in dev."""
        image, colors = _paint(fork_repo)

        # Stem, painted after the Initial -> B edge it overlaps
        _assert_color(image, 40, 240, CORE)
        _assert_color(image, 36, 240, colors.color("master"))
        # Diagonal midpoint (60, 160)
        _assert_color(image, 60, 160, CORE)
        _assert_color(image, 62, 161, colors.color("dev"))

    def test_nodes_outlined_in_branch_color(self, fork_repo):
        """Rings span 11.4 to 17.1 px from the center, filled inside."""
        image, colors = _paint(fork_repo)
        fill = QColor(PAINT_CONFIG.node_fill_color)

        _assert_color(image, 94, 120, colors.color("dev"))
        _assert_color(image, 54, 40, colors.color("master"))
        _assert_color(image, 80, 120, fill)
        _assert_color(image, 40, 40, fill)

    def test_labels_start_right_of_deepest_lane(self, fork_repo):
        """Two lanes: labels start at 40 + 2 * 40 = 120 px."""
        image, _ = _paint(fork_repo)
        painted = [
            x
            for x in range(100, image.width())
            for y in range(image.height())
            if image.pixelColor(x, y).alpha() > 0
        ]
        assert painted
        assert 118 <= min(painted) <= 126
