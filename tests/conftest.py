"""Shared fixtures for gitgraph tests."""

import os

import pytest

# Qt must not look for a display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from gitgraph.git_backend.repository import Repository  # noqa: E402


@pytest.fixture
def repo() -> Repository:
    return Repository()


@pytest.fixture
def merged_repo() -> Repository:
    """Initial on master, A on dev, dev merged back into master."""
    repo = Repository()
    repo.commit("Initial")
    repo.checkout("dev", create_branch=True)
    repo.commit("A")
    repo.checkout("master")
    repo.merge("dev")
    return repo
