"""Git graph renderer - paints a laid out history to an SVG or PNG buffer."""

import logging
import math
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QBuffer, QIODevice, QPointF, QRect, QSize, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QGuiApplication,
    QImage,
    QPainter,
    QPainterPath,
    QPen,
)
from PySide6.QtSvg import QSvgGenerator

from gitgraph.constants import IMAGE_FORMATS
from gitgraph.git_backend.refs import Ref
from gitgraph.git_backend.repository import Repository
from gitgraph.ui.git_graph.edges import EdgeSegment, GridPoint, route_links
from gitgraph.ui.git_graph.layout import compute_layout
from gitgraph.ui.git_graph.types import CommitNode, RenderConfig, RenderingData

logger = logging.getLogger(__name__)

# Keeps the lazily created application alive for the rest of the process
_gui_app: QGuiApplication | None = None


def ensure_gui_application() -> QGuiApplication:
    """Font metrics and text painting need a QGuiApplication; create one if missing."""
    global _gui_app
    app = QGuiApplication.instance()
    if app is None:
        # Rendering is offscreen only
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _gui_app = QGuiApplication(sys.argv[:1] or ["gitgraph"])
        app = _gui_app
    assert isinstance(app, QGuiApplication)
    return app


@dataclass(frozen=True)
class RenderedGraph:
    """An encoded image and its size in pixels."""

    data: bytes
    width: int
    height: int
    image_format: str

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.data)


class BranchColors:
    """
    Palette slots per branch label.

    Unattributed commits (branch None) always use slot 0; named branches
    take the following slots in order of first appearance, cycling through
    slots 1.. so they never share slot 0. A one-color palette has only
    slot 0.
    """

    def __init__(self, branches: list[str | None], config: RenderConfig) -> None:
        self._palette = [QColor(c).darker(config.palette_darken_factor) for c in config.palette]
        named_slots = len(self._palette) - 1
        named = [b for b in branches if b is not None]
        self._slots: dict[str | None, int] = {None: 0}
        for i, branch in enumerate(named):
            self._slots[branch] = 1 + i % named_slots if named_slots else 0

    def slot(self, branch: str | None) -> int:
        return self._slots.get(branch, 0)

    def color(self, branch: str | None) -> QColor:
        return self._palette[self.slot(branch)]


class GitGraphRenderer:
    """Paints RenderingData: edges first, then nodes with their labels."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def _font(self) -> QFont:
        font = QFont(self.config.font_family)
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setFixedPitch(True)
        font.setPixelSize(self.config.font_pixel_size)
        return font

    def measure(self, data: RenderingData) -> QSize:
        """Canvas size: every lane plus the widest label, every row in range."""
        ensure_gui_application()
        metrics = QFontMetricsF(self._font())
        max_text = max(
            (metrics.horizontalAdvance(node.full_text) for node in data.commits.values()),
            default=0.0,
        )
        cfg = self.config
        width = 2 * cfg.padding + (data.max_lane + 1) * cfg.lane_width + max_text
        height = 2 * cfg.padding + (data.max_row - data.min_row) * cfg.row_spacing
        return QSize(max(1, math.ceil(width)), max(1, math.ceil(height)))

    def render(self, data: RenderingData, image_format: str | None = None) -> RenderedGraph:
        """
        Paint the graph and encode it.

        Raises:
            LayoutConsistencyError: A link points at a commit missing from
                the layout. Nothing is painted in that case.
        """
        image_format = (image_format or self.config.image_format).lower()
        if image_format not in IMAGE_FORMATS:
            raise ValueError(f"Unsupported image format: {image_format}")

        # Routing validates every link before anything is painted
        segments = route_links(data)
        size = self.measure(data)

        if image_format == "svg":
            encoded = self._render_svg(data, segments, size)
        else:
            encoded = self._render_png(data, segments, size)

        logger.debug(
            "rendered %d commits, %d edge segments as %s %dx%d",
            len(data.commits),
            len(segments),
            image_format,
            size.width(),
            size.height(),
        )
        return RenderedGraph(encoded, size.width(), size.height(), image_format)

    def _render_svg(self, data: RenderingData, segments: list[EdgeSegment], size: QSize) -> bytes:
        buffer = QBuffer()
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        generator = QSvgGenerator()
        generator.setOutputDevice(buffer)
        generator.setSize(size)
        generator.setViewBox(QRect(0, 0, size.width(), size.height()))
        generator.setTitle("Commit graph")

        painter = QPainter(generator)
        try:
            self._paint(painter, data, segments)
        finally:
            painter.end()
        buffer.close()
        return bytes(buffer.data().data())

    def _render_png(self, data: RenderingData, segments: list[EdgeSegment], size: QSize) -> bytes:
        image = QImage(size, QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(Qt.GlobalColor.transparent)

        painter = QPainter(image)
        try:
            self._paint(painter, data, segments)
        finally:
            painter.end()

        buffer = QBuffer()
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        image.save(buffer, "PNG")
        buffer.close()
        return bytes(buffer.data().data())

    # --- Painting ---

    def _paint(self, painter: QPainter, data: RenderingData, segments: list[EdgeSegment]) -> None:
        cfg = self.config
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.translate(cfg.padding, cfg.padding)

        colors = BranchColors(data.branches(), cfg)
        max_row = data.max_row

        for segment in segments:
            self._stroke_segment(painter, segment, colors.color(segment.branch), max_row)

        font = self._font()
        label_x = (data.max_lane + 1) * cfg.lane_width
        for node in data.commits.values():
            color = colors.color(node.branch)
            center = self._point(GridPoint(node.lane, node.row), max_row)
            self._draw_node(painter, center, color)
            self._draw_label(painter, node, QPointF(label_x, center.y()), font, color)

    def _point(self, point: GridPoint, max_row: int) -> QPointF:
        """Layout units to pixels; newer rows have smaller y."""
        return QPointF(
            point.lane * self.config.lane_width,
            (max_row - point.row) * self.config.row_spacing,
        )

    def _stroke_segment(
        self, painter: QPainter, segment: EdgeSegment, color: QColor, max_row: int
    ) -> None:
        """Stroke wide in the branch color, then thin in the core color on top."""
        cfg = self.config
        path = QPainterPath()
        path.moveTo(self._point(segment.start, max_row))
        path.lineTo(self._point(segment.end, max_row))

        painter.strokePath(path, QPen(color, cfg.edge_width))
        painter.strokePath(path, QPen(QColor(cfg.edge_core_color), cfg.edge_core_width))

    def _draw_node(self, painter: QPainter, center: QPointF, color: QColor) -> None:
        cfg = self.config
        line_width = cfg.node_line_width
        radius = cfg.circle_diameter / 2 - line_width

        painter.save()
        painter.setPen(QPen(color, line_width))
        painter.setBrush(QBrush(QColor(cfg.node_fill_color)))
        painter.drawEllipse(center, radius, radius)
        painter.restore()

    def _draw_label(
        self,
        painter: QPainter,
        node: CommitNode,
        anchor: QPointF,
        font: QFont,
        color: QColor,
    ) -> None:
        """Outlined text, vertically centered on the node's row."""
        cfg = self.config
        metrics = QFontMetricsF(font)
        baseline = anchor.y() + (metrics.ascent() - metrics.descent()) / 2

        path = QPainterPath()
        path.addText(QPointF(anchor.x(), baseline), font, node.full_text)

        outline = QPen(QColor(cfg.label_outline_color), cfg.label_outline_width)
        outline.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.strokePath(path, outline)
        painter.fillPath(path, QBrush(color))


def render_git_graph(
    repo: Repository,
    start: Ref | str,
    config: RenderConfig | None = None,
    image_format: str | None = None,
) -> RenderedGraph:
    """Lay out the history reachable from `start` and render it."""
    data = compute_layout(repo, start)
    return GitGraphRenderer(config).render(data, image_format)
