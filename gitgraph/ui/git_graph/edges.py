"""Edge routing for git graph - splits links into straight, colored segments."""

from dataclasses import dataclass

from gitgraph.git_backend.errors import LayoutConsistencyError
from gitgraph.ui.git_graph.types import CommitNode, Link, RenderingData


@dataclass(frozen=True)
class GridPoint:
    """A position in layout units: lane across, row (timestamp) up."""

    lane: int
    row: int


@dataclass(frozen=True)
class EdgeSegment:
    """A straight piece of an edge, colored by the branch that owns it."""

    start: GridPoint
    end: GridPoint
    branch: str | None


def route_link(source: CommitNode, target: CommitNode) -> list[EdgeSegment]:
    """
    Route an edge from an older commit to a newer one.

    COORDINATE NOTE:
    Rows count up with time, and the renderer flips them so newer commits
    end up at the TOP. The stem of a fork or merge runs from the source row
    to one row short of the target, then a diagonal joins the target lane.

    - Same lane: one segment in the source's branch color.
    - Different lanes, adjacent rows: only the diagonal.
    - Different lanes, gap > 1: a stem in the source's lane and color, then
      the diagonal.

    The diagonal takes the color of whichever endpoint has the greater lane.
    """
    start = GridPoint(source.lane, source.row)
    end = GridPoint(target.lane, target.row)

    if source.lane == target.lane:
        return [EdgeSegment(start, end, source.branch)]

    segments: list[EdgeSegment] = []
    gap = target.row - source.row
    if abs(gap) > 1:
        step = 1 if gap > 0 else -1
        bend = GridPoint(source.lane, target.row - step)
        segments.append(EdgeSegment(start, bend, source.branch))
        start = bend

    owner = target if target.lane > source.lane else source
    segments.append(EdgeSegment(start, end, owner.branch))
    return segments


def route_links(data: RenderingData) -> list[EdgeSegment]:
    """Route every link in the layout, in link order."""
    segments: list[EdgeSegment] = []
    for link in data.links:
        source, target = link_endpoints(data, link)
        segments.extend(route_link(source, target))
    return segments


def link_endpoints(data: RenderingData, link: Link) -> tuple[CommitNode, CommitNode]:
    """Look up both ends of a link; a missing end means the layout is broken."""
    source = data.commits.get(link.source)
    if source is None:
        raise LayoutConsistencyError(f"No `from` commit {link.source[:7]} for link")
    target = data.commits.get(link.target)
    if target is None:
        raise LayoutConsistencyError(f"No `to` commit {link.target[:7]} for link")
    return source, target
