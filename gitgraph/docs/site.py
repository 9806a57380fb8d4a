"""Static documentation site assembly."""

import logging
from pathlib import Path

from gitgraph.constants import DOCS_IMAGE_DIR
from gitgraph.docs.index import render_index
from gitgraph.ui.git_graph.types import RenderConfig

logger = logging.getLogger(__name__)


def build_site(output_dir: Path, config: RenderConfig | None = None) -> list[Path]:
    """
    Write the documentation site into output_dir.

    Returns:
        The images in the site's image directory, then the HTML page
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    index = output_dir / "index.html"
    index.write_text(render_index(output_dir, config), encoding="utf-8")
    logger.info("wrote %s", index)

    images = sorted(p for p in (output_dir / DOCS_IMAGE_DIR).iterdir() if p.is_file())
    return [*images, index]
