"""
Grouping assigned issues by sprint and rendering the plain-text report.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_FLOOR, localcontext
from typing import Dict, Iterable, List, Union

from .constants import BACKLOG_LABEL, SprintStates
from .models import Issue


@dataclass
class SprintGroup:
    """Issues sharing one effective sprint label"""
    label: str
    issues: List[Issue] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.issues)

    @property
    def points(self) -> Decimal:
        return sum((i.fields.points for i in self.issues), Decimal(0))


def effective_sprint_label(issue: Issue) -> str:
    """
    The sprint an issue is reported under.

    The active sprint if the issue has one, else the last sprint listed,
    else "Backlog".
    """
    sprints = issue.fields.sprints
    if not sprints:
        return BACKLOG_LABEL
    for sprint in sprints:
        if sprint.state.casefold() == SprintStates.ACTIVE:
            return sprint.name
    return sprints[-1].name


def group_by_sprint(issues: Iterable[Issue]) -> List[SprintGroup]:
    """
    Partition issues by effective sprint label.

    Groups are ordered by the first appearance of their label in the
    input; issues keep their input order inside a group.
    """
    groups: Dict[str, SprintGroup] = {}
    for issue in issues:
        label = effective_sprint_label(issue)
        groups.setdefault(label, SprintGroup(label)).issues.append(issue)
    return list(groups.values())


def format_points(points: Union[Decimal, int, float]) -> str:
    """
    Render points rounded half up, or "-" for zero.

    Halves round toward positive infinity, so 2.5 renders as "3" and
    -2.5 as "-2".
    """
    value = Decimal(str(points))
    if value == 0:
        return "-"
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = (value + Decimal("0.5")).quantize(Decimal(1), rounding=ROUND_FLOOR)
    return str(int(rounded))


def render_report(groups: Iterable[SprintGroup]) -> str:
    lines = []
    for group in groups:
        lines.append(
            f"Sprint: {group.label} ({group.count} issues, {format_points(group.points)} pts)"
        )
        for issue in group.issues:
            f = issue.fields
            lines.append(
                f"  {issue.key}\t{format_points(f.points)}\t{f.status}\t{f.issue_type}\t{f.summary}"
            )
        lines.append("")
    return "\n".join(lines)


def format_issues_by_sprint(issues: Iterable[Issue]) -> str:
    return render_report(group_by_sprint(issues))


def issue_label(issue: Issue) -> str:
    """One-line label used in the issue picker."""
    label = f"{issue.key}  {issue.fields.summary}"
    if issue.fields.status:
        label += f"  [{issue.fields.status}]"
    return label
