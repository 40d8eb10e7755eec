"""Turn a repository snapshot into summary view lines."""

from gsv.lines import EMPTY_LINE, NO_MODIFIED_FILES_LINE, BranchLine, Line, StatusFileLine, header_line
from gsv.models import RefHandle, StatusSnapshot

BRANCH_HEADER = "Branch"
MODIFIED_FILES_HEADER = "Modified Files"


def generate_branch_rows(head: RefHandle) -> list[Line]:
    return [EMPTY_LINE, header_line(BRANCH_HEADER), BranchLine(head), EMPTY_LINE]


def generate_modified_files(status: StatusSnapshot | None) -> list[Line]:
    rows: list[Line] = [EMPTY_LINE, header_line(MODIFIED_FILES_HEADER)]

    if status is None or status.is_empty():
        rows.append(NO_MODIFIED_FILES_LINE)
        return rows

    for section in status.status_types():
        for entry in status.entries(section):
            rows.append(StatusFileLine(section, entry))

    rows.append(EMPTY_LINE)
    return rows


def generate_rows(head: RefHandle, status: StatusSnapshot | None) -> tuple[Line, ...]:
    """Branch block followed by the modified files block."""
    return (*generate_branch_rows(head), *generate_modified_files(status))
