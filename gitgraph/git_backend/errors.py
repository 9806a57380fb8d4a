"""Exceptions raised by the simulated repository and the graph renderer."""


class GitGraphError(Exception):
    """Base class for every error raised by gitgraph."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable for both bases
        return str(self.args[0]) if self.args else super().__str__()


class MissingBranchError(GitGraphError, KeyError):
    """A branch name is unknown, or known but never committed to."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown branch {name}")
        self.name = name


class MissingCommitError(GitGraphError, KeyError):
    """A commit hash is not stored in the repository."""

    def __init__(self, commit_hash: str) -> None:
        super().__init__(f"Unknown commit {commit_hash}")
        self.commit_hash = commit_hash


class InvalidCheckoutError(GitGraphError, ValueError):
    """Checkout of a branch that does not exist, without asking to create it."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No branch with name {name}")
        self.name = name


class InvalidMergeError(GitGraphError, ValueError):
    """One side of a merge cannot be resolved to a commit."""


class LayoutConsistencyError(GitGraphError, RuntimeError):
    """The layout produced a link whose endpoint is not in the commit map."""
