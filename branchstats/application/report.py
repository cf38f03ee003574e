"""Plain-text rendering of a branch report."""
from typing import List

from branchstats.application.histogram import compute_percentages
from branchstats.domain.models import BranchReport, RepositoryResult


PERCENTAGES_HEADING = "Percentages"


def format_repository(result: RepositoryResult) -> str:
    return f"Repository [{result.name}] branches: [{', '.join(result.branches)}]"


def format_report(report: BranchReport) -> List[str]:
    """Render the report as output lines.

    One line per successful repository, a blank line, the heading and one
    percentage line per branch name.
    """
    lines = [format_repository(result) for result in report.repositories]
    lines.append("")
    lines.append(PERCENTAGES_HEADING)

    percentages = compute_percentages(report.histogram, report.successful_count)
    for name, percentage in percentages.items():
        lines.append(f"Branch [{name}] present in {percentage:.2f}% of valid repositories")

    return lines
