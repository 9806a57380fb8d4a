"""Git graph layout and rendering components."""

from gitgraph.ui.git_graph.layout import GitGraphLayout, compute_layout
from gitgraph.ui.git_graph.types import CommitNode, Link, RenderConfig, RenderingData

__all__ = ["CommitNode", "GitGraphLayout", "Link", "RenderConfig", "RenderingData", "compute_layout"]
