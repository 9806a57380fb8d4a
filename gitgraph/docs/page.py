"""
HTML page helpers: markdown rendering, the page shell and embedded graphs.
"""

import html
import logging
import textwrap
from dataclasses import dataclass
from pathlib import Path

import markdown

from gitgraph.constants import DOCS_IMAGE_DIR, PT_TO_PX
from gitgraph.git_backend.refs import BranchRef
from gitgraph.git_backend.repository import Repository
from gitgraph.ui.git_graph.renderer import RenderedGraph, render_git_graph
from gitgraph.ui.git_graph.types import RenderConfig

logger = logging.getLogger(__name__)

PAGE_PREFIX = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">
    <link rel="stylesheet"
          href="https://stackpath.bootstrapcdn.com/bootswatch/4.5.0/litera/bootstrap.min.css"
          integrity="sha384-Gr51humlTz50RfCwdBYgT+XvbSZqkm8Loa5nWlNrvUqCinoe6C6WUZKHS2WIRx5o"
          crossorigin="anonymous">
    <script defer src="https://code.jquery.com/jquery-3.5.1.slim.min.js"
            integrity="sha384-DfXdz2htPH0lsSSs5nCTpuj/zy4C+OGpamoFVy38MVBnE+IbbVYUew+OrCXaRkfj"
            crossorigin="anonymous"></script>
    <script defer src="https://cdn.jsdelivr.net/npm/popper.js@1.16.1/dist/umd/popper.min.js"
            integrity="sha384-9/reFTGAW83EW2RDu2S0VKaIzap3H66lZH81PoYlFhbGU+6BZp6G7niu735Sk7lN"
            crossorigin="anonymous"></script>
    <script defer src="https://stackpath.bootstrapcdn.com/bootstrap/4.5.2/js/bootstrap.min.js"
            integrity="sha384-B4gt1jrGC7Jh4AgTPSdUtOBvfO8shuf57BaghqFfPlYxofvL8/KUEfYiJOMMV+rV"
            crossorigin="anonymous"></script>

    <title>{title}</title>
</head>
<body>
"""

PAGE_POSTFIX = """
</body>
</html>
"""


def render_markdown(text: str, inline: bool = False) -> str:
    """Render markdown to HTML; inline mode drops the wrapping paragraph."""
    rendered = markdown.markdown(textwrap.dedent(text).strip(), extensions=["fenced_code"])
    if inline and rendered.startswith("<p>") and rendered.endswith("</p>"):
        rendered = rendered[len("<p>") : -len("</p>")]
    return rendered


def render_page(content: str, title: str) -> str:
    """Wrap body content in the site's HTML shell."""
    return PAGE_PREFIX.format(title=html.escape(title)) + content + PAGE_POSTFIX


@dataclass(frozen=True)
class GraphContent:
    """A scripted history and the branch to draw it from."""

    repo: Repository
    branch: str


def render_graph_to_file(
    graph_id: str,
    graph: GraphContent,
    output_dir: Path,
    config: RenderConfig | None = None,
) -> tuple[RenderedGraph, str]:
    """
    Render a graph into the site's image directory.

    Returns:
        The rendered image and its path relative to output_dir
    """
    rendered = render_git_graph(graph.repo, BranchRef(graph.repo, graph.branch), config)
    relative = f"{DOCS_IMAGE_DIR}/{graph_id}.{rendered.image_format}"
    rendered.save(output_dir / relative)
    logger.info("wrote %s (%dx%d)", output_dir / relative, rendered.width, rendered.height)
    return rendered, relative


def branch_graph(
    graph_id: str,
    alt: str,
    graph: GraphContent,
    output_dir: Path,
    config: RenderConfig | None = None,
) -> str:
    """Render a graph to a file and return the <img> tag that embeds it."""
    rendered, path = render_graph_to_file(graph_id, graph, output_dir, config)
    width = round(rendered.width * PT_TO_PX)
    height = round(rendered.height * PT_TO_PX)
    return textwrap.dedent(f"""\
        <img
            alt="{html.escape(alt)}"
            src="./{path}"
            width="{width}"
            height="{height}"
            class="rounded mx-auto d-block bg-dark"/>""")
