from __future__ import annotations

import subprocess
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from gsv.models import (
    AheadBehind,
    ChangeKind,
    LocalBranch,
    RefHandle,
    StatusEntry,
    StatusSection,
    StatusSnapshot,
)

GIT_AVAILABLE = subprocess.run(["git", "--version"], capture_output=True).returncode == 0


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class FakeRepoData:
    def __init__(self, head: RefHandle, status: StatusSnapshot | None = None) -> None:
        self.head_ref = head
        self.status_snapshot = status
        self.ref_listeners: list[object] = []
        self.status_listeners: list[object] = []
        self.refreshed = threading.Event()

    def head(self) -> RefHandle:
        return self.head_ref

    def status(self) -> StatusSnapshot | None:
        return self.status_snapshot

    def refresh(self) -> bool:
        self.refreshed.set()
        return True

    def start_polling(self, interval: float) -> None:
        self.polling_interval = interval

    def stop(self) -> None:
        self.stopped = True

    def register_ref_state_listener(self, listener: object) -> None:
        self.ref_listeners.append(listener)

    def register_status_listener(self, listener: object) -> None:
        self.status_listeners.append(listener)


class CountingChannel:
    def __init__(self) -> None:
        self.updates = 0

    def update_display(self) -> None:
        self.updates += 1


def scenario_b_status() -> StatusSnapshot:
    return StatusSnapshot(
        {
            StatusSection.STAGED: (StatusEntry(ChangeKind.MODIFIED, "src/a.go"),),
            StatusSection.UNSTAGED: (StatusEntry(ChangeKind.NEW, "b.txt"),),
        }
    )


@pytest.fixture
def fake_repo() -> FakeRepoData:
    return FakeRepoData(LocalBranch("main", AheadBehind(ahead=2, behind=1)), scenario_b_status())


@pytest.fixture
def channel() -> CountingChannel:
    return CountingChannel()


def run_cmd(cmd: list[str], cwd: Path | None = None) -> None:
    subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=True, capture_output=True)


def init_repo(root: Path) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    run_cmd(["git", "init", "-q"], cwd=root)
    run_cmd(["git", "symbolic-ref", "HEAD", "refs/heads/main"], cwd=root)
    run_cmd(["git", "config", "user.email", "test@example.com"], cwd=root)
    run_cmd(["git", "config", "user.name", "Test"], cwd=root)
    run_cmd(["git", "config", "commit.gpgsign", "false"], cwd=root)
    (root / "README.md").write_text("hello\n")
    run_cmd(["git", "add", "."], cwd=root)
    run_cmd(["git", "commit", "-q", "-m", "init"], cwd=root)
    return root
