"""
One-line history listing, like `git log --oneline --decorate`
"""

from gitgraph.git_backend.refs import BranchRef, Commit, CommitRef, Ref
from gitgraph.git_backend.repository import Repository


def branches_at(repo: Repository, commit_hash: str) -> list[str]:
    """Find the branches that point to this commit, in creation order."""
    return [
        name for name, tip in repo.branches.items() if tip is not None and tip.hash == commit_hash
    ]


def format_log_line(repo: Repository, commit: Commit) -> str:
    ref = CommitRef.from_commit(commit)
    marker = "M" if commit.is_merge else ("R" if commit.is_root else "*")
    line = f"{marker} {ref.describe()} {commit.description}"

    branches = branches_at(repo, ref.hash)
    if branches:
        line += f" ({', '.join(branches)})"
    return line


def oneline_log(repo: Repository, start: Ref | str) -> list[str]:
    """
    List every commit reachable from `start`, newest first.

    Lines start with M for merges, R for root commits and * otherwise; the
    last line counts the listed commits against the whole repository.
    """
    if isinstance(start, str):
        start = BranchRef(repo, start)

    commits = repo.ancestors(start)
    lines = [format_log_line(repo, commit) for commit in commits]
    lines.append(
        f"{len(commits)} of {repo.commit_count} commits reachable from {start.describe()}"
    )
    return lines
