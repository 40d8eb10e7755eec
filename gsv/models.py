"""Data models for gsv."""

from dataclasses import dataclass, field
from enum import Enum

SHORT_ID_LENGTH = 7


@dataclass(frozen=True)
class AheadBehind:
    """Commit counts ahead/behind a reference."""

    ahead: int
    behind: int


@dataclass(frozen=True)
class DetachedHead:
    """HEAD pointing directly at a commit."""

    commit_id: str

    @property
    def display_name(self) -> str:
        return f"<detached@{self.commit_id[:SHORT_ID_LENGTH]}>"


@dataclass(frozen=True)
class LocalBranch:
    """HEAD on a named local branch, optionally tracking an upstream."""

    name: str
    tracking: AheadBehind | None = None

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def is_tracking(self) -> bool:
        return self.tracking is not None


RefHandle = DetachedHead | LocalBranch


class StatusSection(Enum):
    """Which side of the index a change lives on."""

    STAGED = "staged"
    UNSTAGED = "unstaged"


class ChangeKind(Enum):
    """File level change classification."""

    NEW = "new"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPE_CHANGED = "type_changed"
    CONFLICTED = "conflicted"


@dataclass(frozen=True)
class StatusEntry:
    """A single file change record."""

    kind: ChangeKind
    new_path: str
    old_path: str | None = None


@dataclass(frozen=True)
class StatusSnapshot:
    """Status entries grouped by section.

    Iteration order of ``sections`` is the order the provider defines and is
    preserved as given.
    """

    sections: dict[StatusSection, tuple[StatusEntry, ...]] = field(default_factory=dict)

    def status_types(self) -> list[StatusSection]:
        """Sections in provider order."""
        return list(self.sections)

    def entries(self, section: StatusSection) -> tuple[StatusEntry, ...]:
        return self.sections.get(section, ())

    def is_empty(self) -> bool:
        return not any(self.sections.values())


@dataclass(frozen=True)
class UpdatedRef:
    """A ref whose target moved between two reads."""

    name: str
    old_oid: str
    new_oid: str
