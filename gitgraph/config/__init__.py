"""Configuration for gitgraph"""

from gitgraph.config.settings import Settings

__all__ = ["Settings"]
