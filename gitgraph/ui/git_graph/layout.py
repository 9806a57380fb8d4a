"""Git graph layout - assigns lanes and rows to the commits reachable from a ref."""

import logging
from dataclasses import dataclass

from gitgraph.git_backend.refs import BranchRef, Commit, CommitRef, Ref
from gitgraph.git_backend.repository import Repository
from gitgraph.ui.git_graph.types import CommitNode, Link, RenderingData

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """One commit on the walk stack, waiting for its parents to be laid out."""

    ref: Ref
    commit_ref: CommitRef
    commit: Commit
    lane: int
    branch: str | None
    tip: BranchRef | None
    is_head: bool
    next_parent: int = 0


class GitGraphLayout:
    """
    Lays out the history reachable from a starting ref.

    The walk is depth-first in parent order. The first parent continues the
    child's lane ("mainline"); other parents take the lane of the branch
    tipping at them, or lane 0 when no branch does. A commit that is a branch
    tip always sits in that branch's lane. Every commit is laid out once, but
    every edge into it is kept.

    Rows are the commits' creation timestamps; lanes are shifted at the end
    so the leftmost lane in view is 0.
    """

    def __init__(self, repo: Repository) -> None:
        self.repo = repo

    def compute(self, start: Ref) -> RenderingData:
        """Walk from `start` and return the laid out commits and links."""
        data = RenderingData()
        seen: set[str] = set()

        root = self._make_frame(start, is_head=True, lane=0, branch=None)
        seen.add(root.commit_ref.hash)
        stack = [root]

        while stack:
            frame = stack[-1]
            parents = frame.commit.parents

            if frame.next_parent < len(parents):
                offset = frame.next_parent
                parent = parents[offset]
                frame.next_parent += 1

                data.links.append(Link(source=parent.hash, target=frame.commit_ref.hash))

                if parent.hash in seen:
                    # Converging history: the parent is (or will be) laid out
                    # through another path.
                    continue
                seen.add(parent.hash)

                if offset == 0:
                    lane, branch = frame.lane, frame.branch
                else:
                    side = self.repo.as_branch_tip(parent)
                    branch = side.name if side is not None else None
                    lane = self.repo.branch_index(branch)

                stack.append(self._make_frame(parent, is_head=False, lane=lane, branch=branch))
                continue

            stack.pop()
            data.commits[frame.commit_ref.hash] = CommitNode(
                oid=frame.commit_ref.hash,
                commit=frame.commit,
                lane=frame.lane,
                branch=frame.branch,
                full_text=self._label(frame),
            )

        self._normalize_lanes(data)
        logger.debug(
            "laid out %d commits, %d links from %s (lanes 0..%d)",
            len(data.commits),
            len(data.links),
            start.describe(),
            data.max_lane,
        )
        return data

    def _make_frame(self, ref: Ref, is_head: bool, lane: int, branch: str | None) -> _Frame:
        """Resolve a ref and settle the lane it will be drawn in."""
        commit_ref = ref.resolve()
        commit = self.repo.resolve_commit(commit_ref)
        tip = self.repo.as_branch_tip(ref)
        if tip is not None:
            lane = self.repo.branch_index(tip.name)
            branch = tip.name

        return _Frame(
            ref=ref,
            commit_ref=commit_ref,
            commit=commit,
            lane=lane,
            branch=branch,
            tip=tip,
            is_head=is_head,
        )

    def _label(self, frame: _Frame) -> str:
        """Short hash, description and a git-log style ref annotation."""
        annotation = "HEAD" if frame.is_head else ""
        if frame.tip is not None:
            if not frame.is_head:
                annotation = frame.tip.name
            elif isinstance(frame.ref, BranchRef):
                annotation += f" -> {frame.tip.name}"
            else:
                annotation += f", {frame.tip.name}"

        text = f"{frame.commit_ref.describe()} {frame.commit.description}"
        if annotation:
            text += f" ({annotation})"
        return text

    @staticmethod
    def _normalize_lanes(data: RenderingData) -> None:
        """Shift lanes left so the minimum lane is 0."""
        min_lane = data.min_lane
        if min_lane == 0:
            return
        for node in data.commits.values():
            node.lane -= min_lane


def compute_layout(repo: Repository, start: Ref | str) -> RenderingData:
    """Lay out the history reachable from a ref or branch name."""
    if isinstance(start, str):
        start = BranchRef(repo, start)
    return GitGraphLayout(repo).compute(start)
