from __future__ import annotations

from pathlib import Path

import pytest
from conftest import GIT_AVAILABLE, init_repo, run_cmd

from gsv import git_ops
from gsv.models import AheadBehind, ChangeKind, DetachedHead, LocalBranch, StatusEntry, StatusSection


def test_parse_status_splits_index_and_worktree() -> None:
    output = "\0".join(
        [
            "M  staged.py",
            " M work.py",
            "MM both.py",
            "?? new.txt",
            "R  renamed.txt",
            "old.txt",
            "UU conflict.txt",
            "!! ignored.log",
            "A  added.py",
            " D gone.txt",
            " T link",
            "",
        ]
    )
    status = git_ops.parse_status(output)

    assert status.status_types() == [StatusSection.STAGED, StatusSection.UNSTAGED]
    assert status.entries(StatusSection.STAGED) == (
        StatusEntry(ChangeKind.MODIFIED, "staged.py"),
        StatusEntry(ChangeKind.MODIFIED, "both.py"),
        StatusEntry(ChangeKind.RENAMED, "renamed.txt", "old.txt"),
        StatusEntry(ChangeKind.NEW, "added.py"),
    )
    assert status.entries(StatusSection.UNSTAGED) == (
        StatusEntry(ChangeKind.MODIFIED, "work.py"),
        StatusEntry(ChangeKind.MODIFIED, "both.py"),
        StatusEntry(ChangeKind.NEW, "new.txt"),
        StatusEntry(ChangeKind.CONFLICTED, "conflict.txt"),
        StatusEntry(ChangeKind.DELETED, "gone.txt"),
        StatusEntry(ChangeKind.TYPE_CHANGED, "link"),
    )


def test_parse_empty_status() -> None:
    assert git_ops.parse_status("").is_empty()


def test_run_raises_git_error(tmp_path: Path) -> None:
    if not GIT_AVAILABLE:
        pytest.skip("git missing")
    with pytest.raises(git_ops.GitError) as info:
        git_ops.run(["rev-parse", "--verify", "no-such-ref"], cwd=tmp_path)
    assert info.value.cmd == ["rev-parse", "--verify", "no-such-ref"]
    assert git_ops.try_run(["rev-parse", "--verify", "no-such-ref"], cwd=tmp_path) is None


@pytest.mark.skipif(not GIT_AVAILABLE, reason="git missing")
def test_read_head_and_status(tmp_path: Path) -> None:
    repo = init_repo(tmp_path / "repo")
    assert git_ops.get_repo_root(repo) == repo.resolve()
    assert git_ops.read_head(repo) == LocalBranch("main")

    (repo / "README.md").write_text("changed\n")
    run_cmd(["git", "add", "README.md"], cwd=repo)
    (repo / "b.txt").write_text("new\n")

    status = git_ops.read_status(repo)
    assert status.entries(StatusSection.STAGED) == (StatusEntry(ChangeKind.MODIFIED, "README.md"),)
    assert status.entries(StatusSection.UNSTAGED) == (StatusEntry(ChangeKind.NEW, "b.txt"),)


@pytest.mark.skipif(not GIT_AVAILABLE, reason="git missing")
def test_tracking_and_detached_head(tmp_path: Path) -> None:
    origin = init_repo(tmp_path / "origin")
    clone = tmp_path / "clone"
    run_cmd(["git", "clone", "-q", str(origin), str(clone)])
    run_cmd(["git", "config", "user.email", "test@example.com"], cwd=clone)
    run_cmd(["git", "config", "user.name", "Test"], cwd=clone)
    run_cmd(["git", "config", "commit.gpgsign", "false"], cwd=clone)
    (clone / "c.txt").write_text("c\n")
    run_cmd(["git", "add", "."], cwd=clone)
    run_cmd(["git", "commit", "-q", "-m", "second"], cwd=clone)

    assert git_ops.read_head(clone) == LocalBranch("main", AheadBehind(ahead=1, behind=0))

    refs = git_ops.list_refs(clone)
    assert "refs/heads/main" in refs
    assert "refs/remotes/origin/main" in refs

    run_cmd(["git", "checkout", "-q", "--detach"], cwd=clone)
    head = git_ops.read_head(clone)
    assert isinstance(head, DetachedHead)
    assert head.commit_id == refs["refs/heads/main"]
