#!/usr/bin/env python3
"""
gitgraph - commit graph diagrams for documentation sites
"""

import argparse
import logging
import sys
from pathlib import Path

from gitgraph.config.settings import Settings
from gitgraph.constants import IMAGE_FORMATS
from gitgraph.git_backend.errors import GitGraphError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="gitgraph",
        description="gitgraph - commit graph diagrams for documentation sites",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.config/gitgraph/settings.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log layout and rendering details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the documentation site")
    build.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (default: docs.output_dir setting)",
    )

    demo = subparsers.add_parser("demo", help="Render the demonstration history to one image")
    demo.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (default: test.<format>)",
    )
    demo.add_argument(
        "--branch",
        default=None,
        help="Branch to draw the history from (default: docs.branch setting)",
    )
    demo.add_argument(
        "--format",
        choices=IMAGE_FORMATS,
        default=None,
        help="Image format (default: render.image_format setting)",
    )

    log = subparsers.add_parser("log", help="List the demonstration history, newest first")
    log.add_argument(
        "--branch",
        default=None,
        help="Branch to list the history from (default: docs.branch setting)",
    )

    return parser.parse_args(argv)


def run_build(args: argparse.Namespace, settings: Settings) -> None:
    from gitgraph.docs.site import build_site

    output_dir = args.out or Path(settings.get("docs.output_dir"))
    for path in build_site(output_dir, settings.render_config("docs")):
        print(f"Wrote {path}")


def run_demo(args: argparse.Namespace, settings: Settings) -> None:
    from gitgraph.docs.index import main_graph
    from gitgraph.ui.git_graph.renderer import render_git_graph

    graph = main_graph()
    branch = args.branch or settings.get("docs.branch")
    image_format = args.format or settings.get_image_format()
    out = args.out or Path(f"test.{image_format}")

    rendered = render_git_graph(graph.repo, branch, settings.render_config(), image_format)
    rendered.save(out)
    print(f"Wrote {out} ({rendered.width}x{rendered.height})")


def run_log(args: argparse.Namespace, settings: Settings) -> None:
    from gitgraph.docs.index import main_graph
    from gitgraph.git_backend.log import oneline_log

    graph = main_graph()
    for line in oneline_log(graph.repo, args.branch or settings.get("docs.branch")):
        print(line)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = Settings(args.config)
    commands = {"build": run_build, "demo": run_demo, "log": run_log}

    try:
        commands[args.command](args, settings)
    except GitGraphError as e:
        print(f"gitgraph: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
