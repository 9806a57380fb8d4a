"""
Commits and the two kinds of ref that point at them.

A commit never stores its own hash: identity is derived from content with
hash_commit(), so two commits with identical content share one identity.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from gitgraph.constants import SHORT_HASH_LENGTH

if TYPE_CHECKING:
    from gitgraph.git_backend.repository import Repository


@dataclass(frozen=True)
class CommitRef:
    """Immutable handle on a commit hash."""

    hash: str

    @classmethod
    def from_commit(cls, commit: "Commit") -> "CommitRef":
        return cls(hash_commit(commit))

    def resolve(self) -> "CommitRef":
        return self

    def try_resolve(self) -> "CommitRef":
        return self

    def describe(self) -> str:
        """Short hash for display."""
        return self.hash[:SHORT_HASH_LENGTH]


@dataclass(frozen=True)
class Commit:
    """A commit in the simulated history.

    timestamp is a fake clock handed out by the repository in creation
    order. It is only used for ordering rows, never for wall-clock time.
    """

    description: str
    timestamp: int
    parents: tuple[CommitRef, ...] = ()

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


class BranchRef:
    """Named pointer that is looked up in the repository on every resolve."""

    def __init__(self, repo: "Repository", name: str) -> None:
        self.repo = repo
        self.name = name

    def resolve(self) -> CommitRef:
        """Resolve to the branch tip, raising MissingBranchError if there is none."""
        return self.repo.resolve_branch(self.name)

    def try_resolve(self) -> CommitRef | None:
        return self.repo.try_resolve_branch(self.name)

    def describe(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BranchRef):
            return NotImplemented
        return self.repo is other.repo and self.name == other.name

    def __hash__(self) -> int:
        return hash((id(self.repo), self.name))

    def __repr__(self) -> str:
        return f"BranchRef({self.name!r})"


# The only two ref kinds; code dispatches with isinstance on these.
Ref = Union[CommitRef, BranchRef]


def hash_commit(commit: Commit) -> str:
    """SHA-256 of the commit's content as compact JSON."""
    payload = {
        "description": commit.description,
        "timestamp": commit.timestamp,
        "parents": [{"hash": parent.hash} for parent in commit.parents],
    }
    encoded = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()
