"""Git subprocess operations."""

import subprocess
from pathlib import Path
from typing import Sequence

from gsv.models import (
    AheadBehind,
    ChangeKind,
    DetachedHead,
    LocalBranch,
    RefHandle,
    StatusEntry,
    StatusSection,
    StatusSnapshot,
)

_CHANGE_CODES = {
    "A": ChangeKind.NEW,
    "C": ChangeKind.NEW,
    "M": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
    "T": ChangeKind.TYPE_CHANGED,
}
_UNMERGED_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


class GitError(Exception):
    """Git command failed."""

    def __init__(self, cmd: Sequence[str], stderr: str) -> None:
        self.cmd = cmd
        self.stderr = stderr
        super().__init__(f"git {' '.join(cmd)}: {stderr}")


def run_raw(args: Sequence[str], cwd: Path | None = None) -> str:
    """Run a git command and return stdout untouched."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except subprocess.CalledProcessError as exc:
        raise GitError(args, (exc.stderr or "").strip()) from exc
    return result.stdout


def run(args: Sequence[str], cwd: Path | None = None) -> str:
    """Run a git command and return stdout."""
    return run_raw(args, cwd=cwd).strip()


def try_run(args: Sequence[str], cwd: Path | None = None) -> str | None:
    """Run a git command, returning None on failure."""
    try:
        return run(args, cwd=cwd)
    except GitError:
        return None


def get_repo_root(cwd: Path) -> Path | None:
    """Get the top level directory of the work tree containing ``cwd``."""
    top = try_run(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(top) if top else None


def get_upstream(repo_root: Path, ref_name: str) -> str | None:
    """Get the upstream tracking branch for a ref."""
    return try_run(["rev-parse", "--abbrev-ref", f"{ref_name}@{{upstream}}"], cwd=repo_root)


def count_ahead_behind(repo_root: Path, left: str, right: str) -> AheadBehind:
    """Count commits ahead and behind between two refs."""
    out = try_run(["rev-list", "--left-right", "--count", f"{left}...{right}"], cwd=repo_root)
    if not out:
        return AheadBehind(0, 0)
    parts = out.split()
    if len(parts) != 2:
        return AheadBehind(0, 0)
    return AheadBehind(ahead=int(parts[0]), behind=int(parts[1]))


def read_head(repo_root: Path) -> RefHandle:
    """Resolve HEAD to a local branch (with tracking counts) or a detached commit."""
    branch = try_run(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=repo_root)
    if branch:
        upstream = get_upstream(repo_root, branch)
        tracking = count_ahead_behind(repo_root, branch, upstream) if upstream else None
        return LocalBranch(name=branch, tracking=tracking)
    return DetachedHead(commit_id=run(["rev-parse", "HEAD"], cwd=repo_root))


def parse_status(output: str) -> StatusSnapshot:
    """Parse ``git status --porcelain=v1 -z`` output.

    Staged entries come first, then unstaged ones, each in porcelain order.
    """
    staged: list[StatusEntry] = []
    unstaged: list[StatusEntry] = []
    fields = output.split("\0")
    index = 0

    while index < len(fields):
        record = fields[index]
        index += 1
        if len(record) < 4:
            continue

        code, path = record[:2], record[3:]
        old_path = None
        if code[0] in "RC" or code[1] in "RC":
            old_path = fields[index] if index < len(fields) else None
            index += 1

        if code == "!!":
            continue
        if code == "??":
            unstaged.append(StatusEntry(ChangeKind.NEW, path))
            continue
        if code in _UNMERGED_CODES:
            unstaged.append(StatusEntry(ChangeKind.CONFLICTED, path))
            continue

        staged_kind = _CHANGE_CODES.get(code[0])
        if staged_kind is not None:
            entry_old = old_path if staged_kind is ChangeKind.RENAMED else None
            staged.append(StatusEntry(staged_kind, path, entry_old))

        unstaged_kind = _CHANGE_CODES.get(code[1])
        if unstaged_kind is not None:
            entry_old = old_path if unstaged_kind is ChangeKind.RENAMED else None
            unstaged.append(StatusEntry(unstaged_kind, path, entry_old))

    return StatusSnapshot(
        {StatusSection.STAGED: tuple(staged), StatusSection.UNSTAGED: tuple(unstaged)}
    )


def read_status(repo_root: Path) -> StatusSnapshot:
    """Read the work tree status."""
    return parse_status(run_raw(["status", "--porcelain=v1", "-z"], cwd=repo_root))


def list_refs(repo_root: Path) -> dict[str, str]:
    """Map of ref name to object id."""
    out = run(["for-each-ref", "--format=%(refname) %(objectname)"], cwd=repo_root)
    refs: dict[str, str] = {}
    for line in out.splitlines():
        name, _, oid = line.partition(" ")
        if name and oid:
            refs[name] = oid
    return refs
