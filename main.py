#!/usr/bin/env python3
"""
gitgraph - commit graph diagrams for documentation sites

This is a convenience wrapper for running from the repo root.
The actual entry point is gitgraph.main:main (for pip install).
"""

from gitgraph.main import main

if __name__ == "__main__":
    main()
