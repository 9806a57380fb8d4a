"""Documentation site built around commit graph diagrams"""

from gitgraph.docs.page import GraphContent, branch_graph, render_markdown, render_page
from gitgraph.docs.site import build_site

__all__ = ["GraphContent", "branch_graph", "build_site", "render_markdown", "render_page"]
