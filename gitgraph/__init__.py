"""gitgraph - commit graph diagrams for documentation sites"""

__version__ = "0.1.0"
