"""
Simulated repository: an in-memory commit DAG scripted by documentation code
"""

import contextlib
import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType

from gitgraph.constants import DEFAULT_BRANCH
from gitgraph.git_backend.errors import (
    InvalidCheckoutError,
    InvalidMergeError,
    MissingBranchError,
    MissingCommitError,
)
from gitgraph.git_backend.refs import BranchRef, Commit, CommitRef, Ref, hash_commit

logger = logging.getLogger(__name__)


class Repository:
    """Mutable session state: HEAD, branches and an append-only commit store"""

    def __init__(self, default_branch: str = DEFAULT_BRANCH) -> None:
        """Initialize an empty repository with HEAD on an unborn branch"""
        self._commit_timestamp = 0
        self._commits: dict[str, Commit] = {}
        # name -> tip; None for a branch created before any commit existed
        self._branches: dict[str, CommitRef | None] = {}
        self._branch_order: list[str] = []
        self._head: Ref = BranchRef(self, default_branch)

    # --- Lookups ---

    @property
    def head(self) -> Ref:
        return self._head

    @property
    def branches(self) -> Mapping[str, CommitRef | None]:
        """Read-only view of branch name -> tip, in creation order"""
        return MappingProxyType(self._branches)

    @property
    def branch_names(self) -> list[str]:
        return list(self._branch_order)

    @property
    def commit_count(self) -> int:
        return len(self._commits)

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self._commits

    def resolve_branch(self, name: str) -> CommitRef:
        """Get the tip of a branch, raising MissingBranchError if it has none"""
        tip = self.try_resolve_branch(name)
        if tip is None:
            raise MissingBranchError(name)
        return tip

    def try_resolve_branch(self, name: str) -> CommitRef | None:
        return self._branches.get(name)

    def resolve_commit(self, ref: Ref) -> Commit:
        """Get the commit a ref points at"""
        commit_ref = ref.resolve()
        try:
            return self._commits[commit_ref.hash]
        except KeyError:
            raise MissingCommitError(commit_ref.hash) from None

    def branch_index(self, name: str | None) -> int:
        """Lane number of a branch: 0 for no branch, else 1 + creation position"""
        if name is None:
            return 0
        try:
            return self._branch_order.index(name) + 1
        except ValueError:
            raise MissingBranchError(name) from None

    def as_branch_tip(self, ref: Ref) -> BranchRef | None:
        """
        Find a branch whose tip is exactly the commit `ref` points at.

        A BranchRef is its own answer. When several branches share a tip the
        first one in creation order wins.
        """
        if isinstance(ref, BranchRef):
            return ref
        target = ref.resolve().hash
        for name in self._branch_order:
            tip = self._branches[name]
            if tip is not None and tip.hash == target:
                return BranchRef(self, name)
        return None

    def ancestors(self, ref: Ref) -> list[Commit]:
        """All commits reachable from `ref` (itself included), newest first"""
        seen: set[str] = set()
        stack = [ref.resolve()]
        result: list[Commit] = []

        while stack:
            current = stack.pop()
            if current.hash in seen:
                continue
            seen.add(current.hash)

            commit = self.resolve_commit(current)
            result.append(commit)
            stack.extend(commit.parents)

        result.sort(key=lambda c: -c.timestamp)
        return result

    # --- Mutations ---

    def commit(self, description: str) -> CommitRef:
        """Commit on top of HEAD, moving the current branch (or detached HEAD)"""
        parent = self._head.try_resolve()
        parents = (parent,) if parent is not None else ()
        return self._create_commit(description, parents)

    def _create_commit(self, description: str, parents: tuple[CommitRef, ...]) -> CommitRef:
        commit = Commit(
            description=description,
            timestamp=self._commit_timestamp,
            parents=parents,
        )
        self._commit_timestamp += 1

        ref = CommitRef(hash_commit(commit))
        if ref.hash not in self._commits:
            self._commits[ref.hash] = commit

        head = self._head
        if isinstance(head, BranchRef):
            if head.name not in self._branches:
                self._branch_order.append(head.name)
            self._branches[head.name] = ref
        else:
            self._head = ref

        logger.debug("commit %s %r on %s", ref.describe(), description, head.describe())
        return ref

    def checkout(self, ref: Ref | str, create_branch: bool = False) -> None:
        """
        Move HEAD to a branch or commit.

        Args:
            ref: Branch name, BranchRef or CommitRef
            create_branch: Create a missing branch at the current HEAD commit
                instead of failing
        """
        if isinstance(ref, str):
            ref = BranchRef(self, ref)

        if isinstance(ref, BranchRef):
            if ref.name not in self._branches:
                if not create_branch:
                    raise InvalidCheckoutError(ref.name)
                self._branch_order.append(ref.name)
                self._branches[ref.name] = self._head.try_resolve()
                logger.debug("created branch %s at %s", ref.name, self._head.describe())
        elif ref.hash not in self:
            raise MissingCommitError(ref.hash)

        self._head = ref

    def merge(self, ref: Ref | str) -> CommitRef:
        """Create a merge commit with parents [HEAD, ref] on the current HEAD"""
        if isinstance(ref, str):
            ref = BranchRef(self, ref)

        current = self._head.try_resolve()
        if current is None:
            raise InvalidMergeError("Merging into a non-existent HEAD!")
        target = ref.try_resolve()
        if target is None or target.hash not in self:
            raise InvalidMergeError(f"Merging from a non-existent ref {ref.describe()}!")

        return self._create_commit(
            f"Merge {ref.describe()} into {self._head.describe()}",
            (current, target),
        )

    def with_head(self, ref: Ref | str, block: Callable[["Repository"], object]) -> None:
        """Run `block` with HEAD moved to `ref`, then put HEAD back"""
        with self.head_at(ref):
            block(self)

    @contextlib.contextmanager
    def head_at(self, ref: Ref | str) -> Iterator["Repository"]:
        """Context manager form of with_head()"""
        old = self._head
        self.checkout(ref)
        try:
            yield self
        finally:
            # Assign directly: the old HEAD may be an unborn branch that
            # checkout() would refuse.
            self._head = old
