"""Repository state provider.

Holds the last materialized snapshot of HEAD, status and refs, and notifies
listeners about what changed whenever it is refreshed.
"""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import structlog

from gsv import git_ops
from gsv.models import DetachedHead, LocalBranch, RefHandle, StatusSnapshot, UpdatedRef

log = structlog.get_logger("gsv.repo_data")


class RefStateListener(Protocol):
    def on_refs_changed(
        self, added: list[str], removed: list[str], updated: list[UpdatedRef]
    ) -> None: ...

    def on_head_changed(self, old_head: RefHandle, new_head: RefHandle) -> None: ...

    def on_tracking_branches_updated(self, branches: list[LocalBranch]) -> None: ...


class StatusListener(Protocol):
    def on_status_changed(self, status: StatusSnapshot | None) -> None: ...


@dataclass(frozen=True)
class RepoState:
    head: RefHandle
    status: StatusSnapshot | None
    refs: dict[str, str] = field(default_factory=dict)


def _head_identity(head: RefHandle) -> RefHandle:
    if isinstance(head, DetachedHead):
        return head
    return LocalBranch(head.name)


class RepoData:
    """Pull based access to repository state plus change notifications."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root
        self._lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._state: RepoState | None = None
        self._ref_listeners: list[RefStateListener] = []
        self._status_listeners: list[StatusListener] = []
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._log = log.bind(component="RepoData", repo=str(repo_root))

    def _read_state(self) -> RepoState:
        return RepoState(
            head=git_ops.read_head(self.repo_root),
            status=git_ops.read_status(self.repo_root),
            refs=git_ops.list_refs(self.repo_root),
        )

    def _current(self) -> RepoState:
        with self._lock:
            if self._state is None:
                raise RuntimeError("Repository data has not been loaded")
            return self._state

    def load(self) -> None:
        """Read the initial state without notifying anyone."""
        state = self._read_state()
        with self._lock:
            self._state = state

    def head(self) -> RefHandle:
        return self._current().head

    def status(self) -> StatusSnapshot | None:
        return self._current().status

    def register_ref_state_listener(self, listener: RefStateListener) -> None:
        with self._lock:
            self._ref_listeners.append(listener)

    def register_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self._status_listeners.append(listener)

    def refresh(self) -> bool:
        """Re-read git state and notify listeners of differences.

        Returns False without doing anything if another refresh is running.
        """
        if not self._refresh_lock.acquire(blocking=False):
            self._log.debug("Refresh already in progress")
            return False
        try:
            new_state = self._read_state()
            with self._lock:
                old_state = self._state
                self._state = new_state
                ref_listeners = list(self._ref_listeners)
                status_listeners = list(self._status_listeners)

            if old_state is not None:
                self._notify(old_state, new_state, ref_listeners, status_listeners)
            return True
        finally:
            self._refresh_lock.release()

    def _notify(
        self,
        old: RepoState,
        new: RepoState,
        ref_listeners: list[RefStateListener],
        status_listeners: list[StatusListener],
    ) -> None:
        added = sorted(set(new.refs) - set(old.refs))
        removed = sorted(set(old.refs) - set(new.refs))
        updated = [
            UpdatedRef(name, old.refs[name], new.refs[name])
            for name in sorted(set(old.refs) & set(new.refs))
            if old.refs[name] != new.refs[name]
        ]
        if added or removed or updated:
            self._log.debug("Refs changed", added=len(added), removed=len(removed), updated=len(updated))
            for listener in ref_listeners:
                listener.on_refs_changed(added, removed, updated)

        if _head_identity(old.head) != _head_identity(new.head):
            self._log.debug("HEAD changed", head=new.head.display_name)
            for listener in ref_listeners:
                listener.on_head_changed(old.head, new.head)
        elif old.head != new.head and isinstance(new.head, LocalBranch):
            self._log.debug("Tracking branch updated", branch=new.head.name)
            for listener in ref_listeners:
                listener.on_tracking_branches_updated([new.head])

        if old.status != new.status:
            self._log.debug("Status changed")
            for listener in status_listeners:
                listener.on_status_changed(new.status)

    def start_polling(self, interval: float) -> None:
        """Refresh on a background thread every ``interval`` seconds."""
        if self._thread is not None:
            return
        self._stop.clear()

        def runner() -> None:
            while not self._stop.wait(interval):
                try:
                    self.refresh()
                except (git_ops.GitError, OSError):
                    self._log.exception("Refresh failed")

        self._thread = threading.Thread(target=runner, name="gsv-poll", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=5)
