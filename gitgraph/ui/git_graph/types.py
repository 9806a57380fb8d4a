"""Types for git graph layout and rendering."""

from dataclasses import dataclass, field

from gitgraph import constants
from gitgraph.git_backend.refs import Commit


@dataclass
class CommitNode:
    """A commit with its layout position."""

    oid: str
    commit: Commit
    lane: int
    branch: str | None
    full_text: str

    @property
    def row(self) -> int:
        """Rows follow creation order; higher rows are drawn higher up."""
        return self.commit.timestamp


@dataclass(frozen=True)
class Link:
    """An edge from an older commit (source) to a newer one (target)."""

    source: str
    target: str


@dataclass
class RenderingData:
    """Snapshot produced by the layout engine and consumed by the renderer."""

    commits: dict[str, CommitNode] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)

    @property
    def max_lane(self) -> int:
        return max((node.lane for node in self.commits.values()), default=0)

    @property
    def min_lane(self) -> int:
        return min((node.lane for node in self.commits.values()), default=0)

    @property
    def max_row(self) -> int:
        return max((node.row for node in self.commits.values()), default=0)

    @property
    def min_row(self) -> int:
        return min((node.row for node in self.commits.values()), default=0)

    def branches(self) -> list[str | None]:
        """Distinct branch labels in order of first appearance."""
        seen: dict[str | None, None] = {}
        for node in self.commits.values():
            seen.setdefault(node.branch, None)
        return list(seen)


@dataclass(frozen=True)
class RenderConfig:
    """Geometry, font and colors used to paint a graph."""

    circle_diameter: float = constants.CIRCLE_DIAMETER
    lane_width: float = constants.LANE_WIDTH
    row_spacing_factor: float = constants.ROW_SPACING_FACTOR
    padding: float = constants.CANVAS_PADDING
    font_family: str = constants.FONT_FAMILY
    font_pixel_size: int = constants.FONT_PIXEL_SIZE
    node_fill_color: str = constants.NODE_FILL_COLOR
    edge_core_color: str = constants.EDGE_CORE_COLOR
    label_outline_color: str = constants.LABEL_OUTLINE_COLOR
    label_outline_width: float = constants.LABEL_OUTLINE_WIDTH
    palette: tuple[str, ...] = tuple(constants.BRANCH_PALETTE)
    palette_darken_factor: int = constants.PALETTE_DARKEN_FACTOR
    image_format: str = constants.DEFAULT_IMAGE_FORMAT

    def __post_init__(self) -> None:
        if not self.palette:
            raise ValueError("RenderConfig.palette needs at least one color")

    @property
    def row_spacing(self) -> float:
        return self.circle_diameter * self.row_spacing_factor

    @property
    def node_line_width(self) -> float:
        return self.circle_diameter / 7

    @property
    def edge_width(self) -> float:
        return self.circle_diameter / 5

    @property
    def edge_core_width(self) -> float:
        return self.circle_diameter / 10
