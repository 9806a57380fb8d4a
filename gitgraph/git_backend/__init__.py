"""Simulated git backend: commits, refs and the repository that scripts them"""

from gitgraph.git_backend.errors import (
    GitGraphError,
    InvalidCheckoutError,
    InvalidMergeError,
    LayoutConsistencyError,
    MissingBranchError,
    MissingCommitError,
)
from gitgraph.git_backend.log import oneline_log
from gitgraph.git_backend.refs import BranchRef, Commit, CommitRef, Ref, hash_commit
from gitgraph.git_backend.repository import Repository

__all__ = [
    "BranchRef",
    "Commit",
    "CommitRef",
    "GitGraphError",
    "InvalidCheckoutError",
    "InvalidMergeError",
    "LayoutConsistencyError",
    "MissingBranchError",
    "MissingCommitError",
    "Ref",
    "Repository",
    "hash_commit",
    "oneline_log",
]
